"""Retrieval module."""

from doctalk.retrieval.base import RetrievalRegistry
from doctalk.retrieval.qdrant import QdrantRetriever

__all__ = [
    "RetrievalRegistry",
    "QdrantRetriever",
]
