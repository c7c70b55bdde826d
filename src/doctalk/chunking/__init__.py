"""Chunking strategies module."""

from doctalk.chunking.base import ChunkingRegistry
from doctalk.chunking.paragraph import ParagraphChunker, estimate_tokens

__all__ = [
    "ChunkingRegistry",
    "ParagraphChunker",
    "estimate_tokens",
]
