"""Pydantic models for the models API."""

from typing import Optional

from pydantic import BaseModel

from openai_tools.common.pagination import Page


class Model(BaseModel):
    id: str
    object: str = "model"
    created: Optional[int] = None
    owned_by: Optional[str] = None


class ModelList(Page[Model]):
    pass
