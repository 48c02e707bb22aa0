"""Pydantic models for the files API."""

from typing import Optional

from pydantic import BaseModel

from openai_tools.common.pagination import Page


class File(BaseModel):
    id: str
    object: str = "file"
    bytes: Optional[int] = None
    created_at: Optional[int] = None
    expires_at: Optional[int] = None
    filename: Optional[str] = None
    purpose: Optional[str] = None
    status: Optional[str] = None
    status_details: Optional[str] = None


class FileList(Page[File]):
    pass
