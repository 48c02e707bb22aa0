"""Pydantic models for chat completion responses."""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field

from openai_tools.common.message import ToolCall
from openai_tools.common.structured_output import parse_json_output
from openai_tools.common.usage import Usage

ModelT = TypeVar("ModelT", bound=BaseModel)


class ChatMessage(BaseModel):
    """The assistant message of a choice."""

    role: str = "assistant"
    content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    annotations: Optional[List[Dict[str, Any]]] = None
    audio: Optional[Dict[str, Any]] = None

    def parse_as(self, model_cls: Type[ModelT]) -> ModelT:
        """Parse structured output content into ``model_cls``."""
        return parse_json_output(self.content, model_cls)


class TokenLogprob(BaseModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[Dict[str, Any]] = Field(default_factory=list)


class ChoiceLogprobs(BaseModel):
    content: Optional[List[TokenLogprob]] = None
    refusal: Optional[List[TokenLogprob]] = None


class Choice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None
    logprobs: Optional[ChoiceLogprobs] = None


class ChatCompletionResponse(BaseModel):
    id: str
    object: str = "chat.completion"
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None

    @property
    def content(self) -> Optional[str]:
        """Text of the first choice."""
        return self.choices[0].message.content if self.choices else None
