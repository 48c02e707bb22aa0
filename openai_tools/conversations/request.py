"""Client for the conversations API (``/conversations``)."""

import logging
from typing import Any, Dict, List, Literal, Optional

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.common.message import Message
from openai_tools.common.pagination import DeletedObject
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.conversations.response import (
    Conversation,
    ConversationItem,
    ConversationItemList,
    ConversationList,
)

logger = logging.getLogger(LOGGER_NAME)

CONVERSATIONS_PATH = "conversations"


def _items_payload(items: List[Message]) -> List[Dict[str, Any]]:
    payload = []
    for message in items:
        for item in message.to_responses_items():
            if "role" in item:
                item = {"type": "message", **item}
            payload.append(item)
    return payload


class Conversations(BaseClient):
    """Create, read, update and delete conversations and their items."""

    def create(
        self,
        metadata: Optional[Dict[str, str]] = None,
        items: Optional[List[Message]] = None,
    ) -> Conversation:
        body: Dict[str, Any] = {}
        if metadata is not None:
            body["metadata"] = dict(metadata)
        if items:
            body["items"] = _items_payload(items)
        conversation = self.http.post(CONVERSATIONS_PATH, Conversation, body)
        logger.info(f"Created conversation {conversation.id}")
        return conversation

    def retrieve(self, conversation_id: str) -> Conversation:
        return self.http.get(f"{CONVERSATIONS_PATH}/{conversation_id}", Conversation)

    def update(self, conversation_id: str, metadata: Dict[str, str]) -> Conversation:
        return self.http.post(
            f"{CONVERSATIONS_PATH}/{conversation_id}", Conversation, {"metadata": dict(metadata)}
        )

    def delete(self, conversation_id: str) -> DeletedObject:
        return self.http.delete(f"{CONVERSATIONS_PATH}/{conversation_id}", DeletedObject)

    def list(self, limit: Optional[int] = None, after: Optional[str] = None) -> ConversationList:
        return self.http.get(CONVERSATIONS_PATH, ConversationList, {"limit": limit, "after": after})

    def create_items(self, conversation_id: str, items: List[Message]) -> ConversationItemList:
        if not items:
            raise ConfigError("At least one item is required")
        return self.http.post(
            f"{CONVERSATIONS_PATH}/{conversation_id}/items",
            ConversationItemList,
            {"items": _items_payload(items)},
        )

    def list_items(
        self,
        conversation_id: str,
        limit: Optional[int] = None,
        after: Optional[str] = None,
        order: Optional[Literal["asc", "desc"]] = None,
        include: Optional[List[str]] = None,
    ) -> ConversationItemList:
        params: Dict[str, Any] = {"limit": limit, "after": after, "order": order}
        if include:
            params["include[]"] = list(include)
        return self.http.get(
            f"{CONVERSATIONS_PATH}/{conversation_id}/items", ConversationItemList, params
        )

    def retrieve_item(self, conversation_id: str, item_id: str) -> ConversationItem:
        return self.http.get(f"{CONVERSATIONS_PATH}/{conversation_id}/items/{item_id}", ConversationItem)

    def delete_item(self, conversation_id: str, item_id: str) -> Conversation:
        """Delete one item; the API returns the parent conversation."""
        return self.http.delete(f"{CONVERSATIONS_PATH}/{conversation_id}/items/{item_id}", Conversation)
