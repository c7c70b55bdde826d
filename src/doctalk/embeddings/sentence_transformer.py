"""Sentence-transformers embedding implementation."""

from pathlib import Path

from doctalk.embeddings.base import EmbeddingsRegistry
from doctalk.core import BaseEmbedder, EmbeddingError
from doctalk.config import EmbeddingConfig
from doctalk.utils import get_logger, timed, require_loaded, resolve_device, release_memory

logger = get_logger(__name__)


@EmbeddingsRegistry.register("sentence-transformers")
class SentenceTransformerEmbedder(BaseEmbedder):
    """Embeds document chunks and questions with a sentence-transformers model.

    Defaults to BGE small (English, 384 dims). With a model directory the
    weights are cached there next to the Whisper and GGUF files, otherwise in
    the Hugging Face cache.
    """

    def __init__(self, config: EmbeddingConfig, model_dir: Path | None = None):
        self.config = config
        self.cache_dir = Path(model_dir) / "embeddings" if model_dir else None
        self.device = resolve_device(config.device)
        self._model = None
        self._dimension: int | None = None

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def load(self) -> None:
        if self._model is not None:
            return

        try:
            from sentence_transformers import SentenceTransformer

            logger.info(f"Loading {self.config.model} on {self.device}...")
            self._model = SentenceTransformer(
                self.config.model,
                device=self.device,
                cache_folder=str(self.cache_dir) if self.cache_dir else None,
            )
        except Exception as e:
            raise EmbeddingError(f"Failed to load embedding model {self.config.model}: {e}") from e

        self._dimension = self._model.get_sentence_embedding_dimension()
        logger.info(f"Embedding model ready (dim={self._dimension})")

    def unload(self) -> None:
        if self._model is None:
            return
        self._model = None
        release_memory()
        logger.info("Embedding model unloaded")

    @property
    @require_loaded
    def dimension(self) -> int:
        return self._dimension

    def _encode(self, texts: str | list[str]):
        try:
            return self._model.encode(
                texts,
                batch_size=self.config.batch_size,
                normalize_embeddings=self.config.normalize,
                show_progress_bar=False,
            )
        except Exception as e:
            raise EmbeddingError(f"Encoding with {self.config.model} failed: {e}") from e

    @timed
    @require_loaded
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed document chunks, in order."""
        if not texts:
            return []
        return self._encode(texts).tolist()

    @require_loaded
    def embed_query(self, query: str) -> list[float]:
        """Embed a question, prefixed with the model's query instruction."""
        return self._encode(f"{self.config.query_instruction}{query}").tolist()
