"""Embeddings registry."""

from doctalk.core import Registry, BaseEmbedder

# Embeddings Registry - all embedding backends register here
EmbeddingsRegistry = Registry[BaseEmbedder]("embeddings")
