"""Core components: registry, base classes, exceptions, session identity."""

from doctalk.core.registry import Registry
from doctalk.core.base import (
    TranscriptSegment,
    DocumentChunk,
    RetrievalResult,
    Citation,
    EngineAnswer,
    BaseASR,
    BaseChunker,
    BaseEmbedder,
    BaseRetriever,
    BaseKnowledgeEngine,
)
from doctalk.core.exceptions import (
    DocTalkError,
    ConfigError,
    RegistryError,
    DirectoryNotFoundError,
    EmptyResultError,
    NoIngestibleFilesError,
    UnsupportedFormatError,
    ModelNotInitializedError,
    NotInitializedError,
    ConversionError,
    DownloadCancelledError,
    ASRError,
    DocumentParseError,
    EmbeddingError,
    RetrievalError,
    GenerationError,
)
from doctalk.core.session import compute_session_id, index_name_for

__all__ = [
    # Registry
    "Registry",
    # Data classes
    "TranscriptSegment",
    "DocumentChunk",
    "RetrievalResult",
    "Citation",
    "EngineAnswer",
    # Base classes
    "BaseASR",
    "BaseChunker",
    "BaseEmbedder",
    "BaseRetriever",
    "BaseKnowledgeEngine",
    # Exceptions
    "DocTalkError",
    "ConfigError",
    "RegistryError",
    "DirectoryNotFoundError",
    "EmptyResultError",
    "NoIngestibleFilesError",
    "UnsupportedFormatError",
    "ModelNotInitializedError",
    "NotInitializedError",
    "ConversionError",
    "DownloadCancelledError",
    "ASRError",
    "DocumentParseError",
    "EmbeddingError",
    "RetrievalError",
    "GenerationError",
    # Session identity
    "compute_session_id",
    "index_name_for",
]
