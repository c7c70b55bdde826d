"""Component interfaces and the data passed between them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator


@dataclass
class TranscriptSegment:
    """A segment of transcribed audio with timing info."""
    text: str
    start: float  # seconds
    end: float  # seconds
    language: str | None = None


@dataclass
class DocumentChunk:
    """A chunk of document text ready for embedding."""
    text: str
    source: str  # file path
    index: int = 0
    metadata: dict[str, Any] | None = None


@dataclass
class RetrievalResult:
    """A passage found for a question, higher score is closer."""
    chunk: DocumentChunk
    score: float


@dataclass(frozen=True)
class Citation:
    """A source document supporting an answer."""
    source_name: str
    link: str


@dataclass
class EngineAnswer:
    """Raw answer as produced by a knowledge engine."""
    result: str
    no_result: bool = False
    no_result_reason: str = ""
    sources: list[Citation] = field(default_factory=list)


class BaseASR(ABC):
    """Speech recognizer over local model weights."""

    @abstractmethod
    def download_model(self, cancel_event=None) -> Path:
        """Fetch model weights into the local model directory."""
        pass

    @property
    @abstractmethod
    def is_model_available(self) -> bool:
        """Check if model weights are on disk."""
        pass

    @abstractmethod
    def transcribe_stream(self, audio_path: Path, language: str | None = None) -> Iterator[TranscriptSegment]:
        """Lazily yield transcript segments, one pass only."""
        pass

    @abstractmethod
    def load(self) -> None:
        """Load model into memory."""
        pass

    @abstractmethod
    def unload(self) -> None:
        """Unload model from memory."""
        pass

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        """Check if model is loaded."""
        pass


class BaseChunker(ABC):
    """Splits extracted document text into retrievable passages."""

    @abstractmethod
    def chunk(self, text: str, source: str) -> list[DocumentChunk]:
        """Split document text into chunks for embedding."""
        pass


class BaseEmbedder(ABC):
    """Turns passages and questions into vectors of a fixed dimension."""

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """One vector per passage, same order."""
        pass

    @abstractmethod
    def embed_query(self, query: str) -> list[float]:
        """Vector for a question."""
        pass

    @abstractmethod
    def load(self) -> None:
        """Load model into memory."""
        pass

    @abstractmethod
    def unload(self) -> None:
        """Unload model from memory."""
        pass

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        """Check if model is loaded."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector."""
        pass


class BaseRetriever(ABC):
    """Abstract base class for retrieval backends.

    Each index is write-once: it is created, filled, then only searched.
    """

    @abstractmethod
    def create_index(self, name: str, dimension: int) -> None:
        """Create a fresh index, dropping any previous one with that name."""
        pass

    @abstractmethod
    def add(self, chunks: list[DocumentChunk], embeddings: list[list[float]]) -> None:
        """Add chunks with their embeddings to the current index."""
        pass

    @abstractmethod
    def search(self, query_embedding: list[float], top_k: int | None = None) -> list[RetrievalResult]:
        """Search the current index for similar chunks."""
        pass

    @abstractmethod
    def delete_index(self, name: str) -> None:
        """Delete an index."""
        pass


class BaseKnowledgeEngine(ABC):
    """Abstract base class for retrieval-augmented question answering."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the language model can be used."""
        pass

    @abstractmethod
    def ingest(self, documents: list[Path], index_name: str) -> None:
        """Build a new index from the documents. Blocking, single shot."""
        pass

    @abstractmethod
    def ask(self, question: str) -> EngineAnswer:
        """Answer a question against the ingested documents."""
        pass
