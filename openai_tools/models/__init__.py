"""Models API (list, retrieve, delete)."""

from openai_tools.models.request import Models
