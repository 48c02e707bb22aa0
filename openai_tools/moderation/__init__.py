"""Moderation API."""

from openai_tools.moderation.request import Moderations
