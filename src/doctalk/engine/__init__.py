"""Knowledge engines."""

from doctalk.engine.retrieval import (
    RetrievalKnowledgeEngine,
    NO_RELEVANT_DOCUMENTS,
    NO_ANSWER_IN_DOCUMENTS,
)

__all__ = [
    "RetrievalKnowledgeEngine",
    "NO_RELEVANT_DOCUMENTS",
    "NO_ANSWER_IN_DOCUMENTS",
]
