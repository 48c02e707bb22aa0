"""Pydantic models for embedding responses."""

import base64
import struct
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from openai_tools.common.usage import Usage


class EmbeddingData(BaseModel):
    object: str = "embedding"
    index: int = 0
    embedding: Union[List[float], str] = Field(..., description="Vector, or base64 little-endian float32")

    @property
    def vector(self) -> List[float]:
        """The embedding as floats, decoding the base64 encoding when used."""
        if isinstance(self.embedding, str):
            raw = base64.b64decode(self.embedding)
            return list(struct.unpack(f"<{len(raw) // 4}f", raw))
        return list(self.embedding)


class EmbeddingResponse(BaseModel):
    object: str = "list"
    data: List[EmbeddingData] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[Usage] = None

    @property
    def vectors(self) -> List[List[float]]:
        return [item.vector for item in sorted(self.data, key=lambda d: d.index)]
