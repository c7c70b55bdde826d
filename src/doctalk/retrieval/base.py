"""Retrieval registry."""

from doctalk.core import Registry, BaseRetriever

# Retrieval Registry - all retrieval backends register here
RetrievalRegistry = Registry[BaseRetriever]("retrieval")
