"""
Conversation items exchanged with a realtime session.

The same model describes items the client creates and items the server reports
(``conversation.item.created``, ``response.output_item.done`` and so on).
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ItemRole = Literal["system", "user", "assistant"]


class ContentPart(BaseModel):
    """One content part of a message item."""

    type: str = Field(..., description="input_text, input_audio, text, audio or item_reference")
    text: Optional[str] = None
    audio: Optional[str] = Field(None, description="Base64 encoded audio")
    transcript: Optional[str] = None
    id: Optional[str] = Field(None, description="Referenced item id for item_reference")

    @classmethod
    def input_text(cls, text: str) -> "ContentPart":
        return cls(type="input_text", text=text)

    @classmethod
    def input_audio(cls, audio: str, transcript: Optional[str] = None) -> "ContentPart":
        return cls(type="input_audio", audio=audio, transcript=transcript)

    @classmethod
    def output_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def item_reference(cls, item_id: str) -> "ContentPart":
        return cls(type="item_reference", id=item_id)


class ConversationItem(BaseModel):
    """A message, function call or function call output."""

    id: Optional[str] = None
    object: Optional[str] = None
    type: str = Field(..., description="message, function_call or function_call_output")
    status: Optional[str] = None
    role: Optional[str] = None
    content: Optional[List[ContentPart]] = None
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None
    output: Optional[str] = None

    @classmethod
    def message(cls, role: ItemRole, content: List[ContentPart], item_id: Optional[str] = None) -> "ConversationItem":
        return cls(id=item_id, type="message", role=role, content=list(content))

    @classmethod
    def user_text(cls, text: str) -> "ConversationItem":
        return cls.message("user", [ContentPart.input_text(text)])

    @classmethod
    def system_text(cls, text: str) -> "ConversationItem":
        return cls.message("system", [ContentPart.input_text(text)])

    @classmethod
    def assistant_text(cls, text: str) -> "ConversationItem":
        return cls.message("assistant", [ContentPart.output_text(text)])

    @classmethod
    def user_audio(cls, audio: str, transcript: Optional[str] = None) -> "ConversationItem":
        return cls.message("user", [ContentPart.input_audio(audio, transcript)])

    @classmethod
    def function_call(cls, call_id: str, name: str, arguments: str) -> "ConversationItem":
        return cls(type="function_call", call_id=call_id, name=name, arguments=arguments)

    @classmethod
    def function_call_output(cls, call_id: str, output: str) -> "ConversationItem":
        return cls(type="function_call_output", call_id=call_id, output=output)

    @property
    def text(self) -> str:
        """Concatenated text and transcripts of the content parts."""
        parts = []
        for part in self.content or []:
            if part.text:
                parts.append(part.text)
            elif part.transcript:
                parts.append(part.transcript)
        return "".join(parts)
