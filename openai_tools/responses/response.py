"""Pydantic models for responses API results."""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field

from openai_tools.common.structured_output import parse_json_output
from openai_tools.common.usage import Usage

ModelT = TypeVar("ModelT", bound=BaseModel)


class OutputContent(BaseModel):
    type: str
    text: Optional[str] = None
    annotations: Optional[List[Dict[str, Any]]] = None
    logprobs: Optional[List[Dict[str, Any]]] = None
    refusal: Optional[str] = None


class OutputItem(BaseModel):
    """A message, function call, reasoning or tool item of the output."""

    type: str
    id: Optional[str] = None
    status: Optional[str] = None
    role: Optional[str] = None
    content: Optional[List[OutputContent]] = None
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None
    summary: Optional[List[Dict[str, Any]]] = None


class ResponseError(BaseModel):
    code: Optional[str] = None
    message: Optional[str] = None


class Response(BaseModel):
    id: str
    object: str = "response"
    created_at: Optional[int] = None
    status: Optional[str] = None
    model: Optional[str] = None
    output: List[OutputItem] = Field(default_factory=list)
    usage: Optional[Usage] = None
    error: Optional[ResponseError] = None
    incomplete_details: Optional[Dict[str, Any]] = None
    instructions: Optional[Any] = None
    metadata: Optional[Dict[str, Any]] = None
    previous_response_id: Optional[str] = None
    conversation: Optional[Dict[str, Any]] = None
    reasoning: Optional[Dict[str, Any]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    tools: Optional[List[Dict[str, Any]]] = None
    text: Optional[Dict[str, Any]] = None

    def output_text(self) -> Optional[str]:
        """Text of the first ``output_text`` part of the first message."""
        for item in self.output:
            if item.type != "message":
                continue
            for part in item.content or []:
                if part.type == "output_text":
                    return part.text
            return None
        return None

    def function_calls(self) -> List[OutputItem]:
        return [item for item in self.output if item.type == "function_call"]

    def parse_as(self, model_cls: Type[ModelT]) -> ModelT:
        """Parse structured output into ``model_cls``."""
        return parse_json_output(self.output_text(), model_cls)
