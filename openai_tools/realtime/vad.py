"""
Turn detection settings for realtime sessions.

``ServerVad`` detects turns from silence; ``SemanticVad`` uses a model to decide
when the user has finished speaking. Turn detection can also be disabled with
``SessionConfig(turn_detection_disabled=True)``.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class ServerVad(BaseModel):
    """Voice activity detection based on audio volume and silence."""

    type: Literal["server_vad"] = "server_vad"
    threshold: Optional[float] = Field(None, description="Activation threshold, 0.0 to 1.0")
    prefix_padding_ms: Optional[int] = Field(None, description="Audio kept before detected speech")
    silence_duration_ms: Optional[int] = Field(None, description="Silence that ends a turn")
    create_response: Optional[bool] = None
    interrupt_response: Optional[bool] = None

    @field_validator("threshold")
    def validate_threshold(cls, v):
        """Threshold must be between 0.0 and 1.0."""
        if v is not None and not 0.0 <= v <= 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0")
        return v

class SemanticVad(BaseModel):
    """Turn detection that judges whether the user has finished their thought."""

    type: Literal["semantic_vad"] = "semantic_vad"
    eagerness: Optional[Literal["low", "medium", "high", "auto"]] = None
    create_response: Optional[bool] = None
    interrupt_response: Optional[bool] = None

TurnDetection = Annotated[Union[ServerVad, SemanticVad], Field(discriminator="type")]
