"""Pydantic models for image generation results."""

import base64
from typing import List, Optional

import requests
from pydantic import BaseModel, Field

from openai_tools.common.errors import DecodeError, TransportError
from openai_tools.common.usage import Usage


class ImageData(BaseModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None

    def as_bytes(self, timeout: Optional[float] = None) -> bytes:
        """Image bytes, decoded from ``b64_json`` or downloaded from ``url``."""
        if self.b64_json is not None:
            return base64.b64decode(self.b64_json)
        if self.url is None:
            raise DecodeError("Image has neither b64_json nor url")
        try:
            response = requests.get(self.url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Could not download image: {e}") from e
        return response.content


class ImageResponse(BaseModel):
    created: Optional[int] = None
    data: List[ImageData] = Field(default_factory=list)
    background: Optional[str] = None
    output_format: Optional[str] = None
    size: Optional[str] = None
    quality: Optional[str] = None
    usage: Optional[Usage] = None
