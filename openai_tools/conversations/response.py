"""Pydantic models for the conversations API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from openai_tools.common.pagination import Page


class Conversation(BaseModel):
    id: str
    object: str = "conversation"
    created_at: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


class ConversationItemContent(BaseModel):
    type: str
    text: Optional[str] = None
    image_url: Optional[str] = None


class ConversationItem(BaseModel):
    """An item stored in a conversation (message, function call, ...)."""

    id: Optional[str] = None
    type: str
    status: Optional[str] = None
    role: Optional[str] = None
    content: Optional[List[ConversationItemContent]] = None
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None
    output: Optional[str] = None


class ConversationItemList(Page[ConversationItem]):
    pass


class ConversationList(Page[Conversation]):
    pass
