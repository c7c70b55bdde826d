"""Local Qdrant index for document chunks."""

from uuid import uuid4

from doctalk.retrieval.base import RetrievalRegistry
from doctalk.core import BaseRetriever, DocumentChunk, RetrievalResult, RetrievalError
from doctalk.config import RetrievalConfig
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)


@RetrievalRegistry.register("qdrant")
class QdrantRetriever(BaseRetriever):
    """Qdrant in local mode, no server: in memory, or on disk when
    `qdrant_path` is set.

    Each session owns one collection named after its session id. The
    collection is rebuilt by `create_index` and only read afterwards.
    """

    def __init__(self, config: RetrievalConfig):
        self.config = config
        self._client = None
        self._collection: str | None = None

    @property
    def collection_name(self) -> str | None:
        return self._collection

    @property
    def client(self):
        if self._client is None:
            from qdrant_client import QdrantClient

            location = self.config.qdrant_path
            try:
                self._client = QdrantClient(path=location) if location else QdrantClient(":memory:")
            except Exception as e:
                raise RetrievalError(f"Cannot open Qdrant storage {location or ':memory:'}: {e}") from e
            logger.info(f"Qdrant storage: {location or 'in memory'}")
        return self._client

    def _active_collection(self) -> str:
        if self._collection is None:
            raise RetrievalError("No index created, call create_index() first")
        return self._collection

    def create_index(self, name: str, dimension: int) -> None:
        from qdrant_client.models import Distance, VectorParams

        try:
            if self.client.collection_exists(name):
                self.client.delete_collection(collection_name=name)
                logger.info(f"Rebuilding collection {name}")
            self.client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(size=dimension, distance=Distance.COSINE),
            )
        except Exception as e:
            raise RetrievalError(f"Cannot create collection {name}: {e}") from e

        self._collection = name

    @timed
    def add(self, chunks: list[DocumentChunk], embeddings: list[list[float]]) -> None:
        """Store chunks with their vectors in the current collection."""
        if len(chunks) != len(embeddings):
            raise RetrievalError(
                f"Chunks/embeddings mismatch: {len(chunks)} chunks, {len(embeddings)} embeddings"
            )
        if not chunks:
            return

        from qdrant_client.models import PointStruct

        collection = self._active_collection()
        points = [
            PointStruct(
                id=str(uuid4()),
                vector=vector,
                payload={
                    "text": chunk.text,
                    "source": chunk.source,
                    "index": chunk.index,
                    "metadata": chunk.metadata or {},
                },
            )
            for chunk, vector in zip(chunks, embeddings)
        ]

        try:
            self.client.upsert(collection_name=collection, points=points)
        except Exception as e:
            raise RetrievalError(f"Cannot store chunks in {collection}: {e}") from e
        logger.info(f"Stored {len(points)} chunks in {collection}")

    def search(self, query_embedding: list[float], top_k: int | None = None) -> list[RetrievalResult]:
        """Closest chunks by cosine similarity, best first.

        Chunks scoring under `min_relevance` are left out, so the result may
        be empty.
        """
        collection = self._active_collection()
        threshold = self.config.min_relevance or None

        try:
            response = self.client.query_points(
                collection_name=collection,
                query=query_embedding,
                limit=top_k or self.config.top_k,
                score_threshold=threshold,
                with_payload=True,
            )
        except Exception as e:
            raise RetrievalError(f"Search in {collection} failed: {e}") from e

        return [self._to_result(point) for point in response.points]

    @staticmethod
    def _to_result(point) -> RetrievalResult:
        payload = point.payload or {}
        chunk = DocumentChunk(
            text=payload.get("text", ""),
            source=payload.get("source", ""),
            index=payload.get("index", 0),
            metadata=payload.get("metadata"),
        )
        return RetrievalResult(chunk=chunk, score=point.score)

    def delete_index(self, name: str) -> None:
        try:
            self.client.delete_collection(collection_name=name)
        except Exception as e:
            raise RetrievalError(f"Cannot delete collection {name}: {e}") from e

        if self._collection == name:
            self._collection = None

    def count(self) -> int:
        """Number of chunks in the current collection."""
        collection = self._active_collection()
        return self.client.count(collection_name=collection, exact=True).count
