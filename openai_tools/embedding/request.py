"""Embeddings request builder (``POST /embeddings``)."""

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.config.constants import DEFAULT_EMBEDDING_MODEL, LOGGER_NAME
from openai_tools.embedding.response import EmbeddingResponse

logger = logging.getLogger(LOGGER_NAME)

EMBEDDINGS_PATH = "embeddings"

# Native vector size of each embedding model
EMBEDDING_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}

EncodingFormat = Literal["float", "base64"]


class Embedding(BaseClient):
    """Builder and client for embeddings."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._model = DEFAULT_EMBEDDING_MODEL
        self._input: Optional[Union[str, List[str]]] = None
        self._encoding_format: Optional[EncodingFormat] = None
        self._dimensions: Optional[int] = None
        self._user: Optional[str] = None

    def model(self, model: str) -> "Embedding":
        self._model = model
        return self

    def input_text(self, text: str) -> "Embedding":
        self._input = text
        return self

    def input_text_array(self, texts: List[str]) -> "Embedding":
        self._input = list(texts)
        return self

    def encoding_format(self, encoding: EncodingFormat) -> "Embedding":
        self._encoding_format = encoding
        return self

    def dimensions(self, dimensions: int) -> "Embedding":
        """Shorten vectors; only the text-embedding-3 models support this."""
        self._dimensions = dimensions
        return self

    def user(self, user: str) -> "Embedding":
        self._user = user
        return self

    def build(self) -> Dict[str, Any]:
        if self._input is None or (isinstance(self._input, list) and not self._input):
            raise ConfigError("Embedding requires input text")
        native = EMBEDDING_DIMENSIONS.get(self._model)
        if self._dimensions is not None and native is not None and self._dimensions > native:
            raise ConfigError(f"{self._model} produces at most {native} dimensions")
        body: Dict[str, Any] = {"model": self._model, "input": self._input}
        if self._encoding_format is not None:
            body["encoding_format"] = self._encoding_format
        if self._dimensions is not None:
            body["dimensions"] = self._dimensions
        if self._user is not None:
            body["user"] = self._user
        return body

    def embed(self) -> EmbeddingResponse:
        return self.http.post(EMBEDDINGS_PATH, EmbeddingResponse, self.build())
