"""Embeddings module."""

from doctalk.embeddings.base import EmbeddingsRegistry
from doctalk.embeddings.sentence_transformer import SentenceTransformerEmbedder

__all__ = [
    "EmbeddingsRegistry",
    "SentenceTransformerEmbedder",
]
