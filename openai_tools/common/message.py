"""
Conversation messages and their multimodal content.

``Content`` is one in-memory representation of a text or image block. It is
serialized differently for the two APIs:

- chat completions: ``{"type": "text", ...}`` and
  ``{"type": "image_url", "image_url": {"url": ...}}``
- responses API: ``{"type": "input_text", ...}`` and
  ``{"type": "input_image", "image_url": ...}``
"""

import base64
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Role of a participant in a conversation."""
    SYSTEM = "system"
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"
    TOOL = "tool"


class ContentKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


class Content(BaseModel):
    """A single text or image block."""

    kind: ContentKind
    text: Optional[str] = None
    image_url: Optional[str] = None
    detail: Optional[str] = Field(None, description="Image detail: low, high or auto")

    @classmethod
    def from_text(cls, text: str) -> "Content":
        return cls(kind=ContentKind.TEXT, text=text)

    @classmethod
    def from_image_url(cls, url: str, detail: Optional[str] = None) -> "Content":
        return cls(kind=ContentKind.IMAGE, image_url=url, detail=detail)

    @classmethod
    def from_image_file(cls, path: Union[str, Path], detail: Optional[str] = None) -> "Content":
        """Inline a local image as a base64 data URL."""
        path = Path(path)
        mime_type = mimetypes.guess_type(path.name)[0] or "image/png"
        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        return cls.from_image_url(f"data:{mime_type};base64,{encoded}", detail=detail)

    def to_chat_dict(self) -> Dict[str, Any]:
        if self.kind == ContentKind.TEXT:
            return {"type": "text", "text": self.text}
        image_url: Dict[str, Any] = {"url": self.image_url}
        if self.detail is not None:
            image_url["detail"] = self.detail
        return {"type": "image_url", "image_url": image_url}

    def to_responses_dict(self, role: Role = Role.USER) -> Dict[str, Any]:
        if self.kind == ContentKind.TEXT:
            text_type = "output_text" if role == Role.ASSISTANT else "input_text"
            return {"type": text_type, "text": self.text}
        data: Dict[str, Any] = {"type": "input_image", "image_url": self.image_url}
        if self.detail is not None:
            data["detail"] = self.detail
        return data


class FunctionCall(BaseModel):
    name: str
    arguments: str = ""


class ToolCall(BaseModel):
    """A tool call requested by the assistant."""

    id: str
    type: str = "function"
    function: FunctionCall


class Message(BaseModel):
    """One message of a conversation, usable by both chat and responses requests."""

    role: Role
    content: List[Content] = Field(default_factory=list)
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None

    @classmethod
    def from_string(cls, role: Role, text: str) -> "Message":
        return cls(role=role, content=[Content.from_text(text)])

    @classmethod
    def from_contents(cls, role: Role, contents: List[Content]) -> "Message":
        return cls(role=role, content=list(contents))

    @classmethod
    def tool_result(cls, tool_call_id: str, output: str) -> "Message":
        """The output of a tool call, sent back to the model."""
        return cls(role=Role.TOOL, content=[Content.from_text(output)], tool_call_id=tool_call_id)

    @classmethod
    def assistant_tool_calls(cls, tool_calls: List[ToolCall]) -> "Message":
        return cls(role=Role.ASSISTANT, tool_calls=list(tool_calls))

    def _single_text(self) -> Optional[str]:
        if len(self.content) == 1 and self.content[0].kind == ContentKind.TEXT:
            return self.content[0].text
        return None

    @property
    def text(self) -> str:
        return "".join(c.text or "" for c in self.content if c.kind == ContentKind.TEXT)

    def to_chat_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"role": self.role.value}
        single = self._single_text()
        if single is not None:
            data["content"] = single
        elif self.content:
            data["content"] = [c.to_chat_dict() for c in self.content]
        elif self.tool_calls is None:
            data["content"] = ""
        if self.name is not None:
            data["name"] = self.name
        if self.tool_calls is not None:
            data["tool_calls"] = [call.model_dump() for call in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data

    def to_responses_items(self) -> List[Dict[str, Any]]:
        """Input items for the responses API; tool traffic becomes function_call items."""
        if self.role == Role.TOOL:
            return [
                {"type": "function_call_output", "call_id": self.tool_call_id, "output": self.text}
            ]
        items: List[Dict[str, Any]] = []
        if self.content:
            single = self._single_text()
            item: Dict[str, Any] = {"role": self.role.value}
            if single is not None:
                item["content"] = single
            else:
                item["content"] = [c.to_responses_dict(self.role) for c in self.content]
            items.append(item)
        for call in self.tool_calls or []:
            items.append(
                {
                    "type": "function_call",
                    "call_id": call.id,
                    "name": call.function.name,
                    "arguments": call.function.arguments,
                }
            )
        return items
