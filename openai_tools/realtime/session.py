"""
Realtime session configuration.

``SessionConfig`` is sent in ``session.update``; ``ResponseCreateConfig`` in
``response.create``. Unset fields are omitted from the wire payload.
"""

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from openai_tools.common.tool import Tool
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.realtime.conversation import ConversationItem
from openai_tools.realtime.vad import TurnDetection

logger = logging.getLogger(LOGGER_NAME)

Modality = Literal["text", "audio"]
Voice = Literal["alloy", "ash", "ballad", "coral", "echo", "sage", "shimmer", "verse"]
AudioFormat = Literal["pcm16", "g711_ulaw", "g711_alaw"]
MaxTokens = Union[int, Literal["inf"]]


class InputAudioTranscription(BaseModel):
    """Asynchronous transcription of user audio."""

    model: str = "whisper-1"
    language: Optional[str] = Field(None, description="ISO-639-1 language code")
    prompt: Optional[str] = None


class NoiseReduction(BaseModel):
    type: Literal["near_field", "far_field"] = "near_field"


class RealtimeTool(BaseModel):
    """A function tool in the realtime shape (flat, no ``strict``)."""

    type: Literal["function"] = "function"
    name: str
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    @classmethod
    def from_tool(cls, tool: Tool) -> "RealtimeTool":
        return cls.model_validate(tool.to_realtime_dict())


class NamedToolChoice(BaseModel):
    """Force a call to one specific function."""

    type: Literal["function"] = "function"
    name: str


ToolChoice = Union[Literal["auto", "none", "required"], NamedToolChoice]


def _coerce_tools(v):
    if v is None:
        return v
    return [RealtimeTool.from_tool(t) if isinstance(t, Tool) else t for t in v]


class SessionConfig(BaseModel):
    """
    Settings applied to a realtime session with ``session.update``.

    Setting ``turn_detection_disabled`` sends ``"turn_detection": null``, which
    switches turn detection off; leaving both it and ``turn_detection`` unset
    keeps the server's current behavior.
    """

    model_config = ConfigDict(validate_assignment=True)

    modalities: Optional[List[Modality]] = None
    instructions: Optional[str] = None
    voice: Optional[Voice] = None
    input_audio_format: Optional[AudioFormat] = None
    output_audio_format: Optional[AudioFormat] = None
    input_audio_transcription: Optional[InputAudioTranscription] = None
    input_audio_noise_reduction: Optional[NoiseReduction] = None
    turn_detection: Optional[TurnDetection] = None
    turn_detection_disabled: bool = Field(False, exclude=True)
    tools: Optional[List[RealtimeTool]] = None
    tool_choice: Optional[ToolChoice] = None
    temperature: Optional[float] = None
    max_response_output_tokens: Optional[MaxTokens] = None

    @field_validator("tools", mode="before")
    def convert_tools(cls, v):
        """Accept shared function tools alongside realtime tools."""
        return _coerce_tools(v)

    @model_validator(mode="before")
    @classmethod
    def null_turn_detection(cls, data: Any) -> Any:
        """Read an explicit ``"turn_detection": null`` as disabled turn detection."""
        if (
            isinstance(data, dict)
            and "turn_detection" in data
            and data["turn_detection"] is None
            and "turn_detection_disabled" not in data
        ):
            data = dict(data, turn_detection_disabled=True)
        return data

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude_none=True)
        if self.turn_detection_disabled:
            data["turn_detection"] = None
        return data

    def is_empty(self) -> bool:
        return not self.to_wire()

    def advisory_warnings(self) -> List[str]:
        """Settings that have no effect given the requested modalities."""
        warnings = []
        if self.modalities is not None and "audio" not in self.modalities:
            for field in ("voice", "output_audio_format"):
                if getattr(self, field) is not None:
                    warnings.append(f"'{field}' has no effect without the audio modality")
        return warnings


class ResponseCreateConfig(BaseModel):
    """Per-response overrides for ``response.create``."""

    modalities: Optional[List[Modality]] = None
    instructions: Optional[str] = None
    voice: Optional[Voice] = None
    output_audio_format: Optional[AudioFormat] = None
    tools: Optional[List[RealtimeTool]] = None
    tool_choice: Optional[ToolChoice] = None
    temperature: Optional[float] = None
    max_output_tokens: Optional[MaxTokens] = None
    conversation: Optional[Literal["auto", "none"]] = Field(
        None, description="'none' creates an out-of-band response"
    )
    metadata: Optional[Dict[str, str]] = None
    input: Optional[List[ConversationItem]] = None

    @field_validator("tools", mode="before")
    def convert_tools(cls, v):
        """Accept shared function tools alongside realtime tools."""
        return _coerce_tools(v)

    @classmethod
    def out_of_band(cls, **kwargs: Any) -> "ResponseCreateConfig":
        """A response that is not added to the default conversation."""
        return cls(conversation="none", **kwargs)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
