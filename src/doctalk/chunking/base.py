"""Chunking registry."""

from doctalk.core import Registry, BaseChunker

# Chunking Registry - all chunking strategies register here
ChunkingRegistry = Registry[BaseChunker]("chunking")
