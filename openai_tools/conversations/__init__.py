"""Conversations API."""

from openai_tools.conversations.request import Conversations
