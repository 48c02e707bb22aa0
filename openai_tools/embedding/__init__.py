"""Embeddings API."""

from openai_tools.embedding.request import EMBEDDING_DIMENSIONS, Embedding
