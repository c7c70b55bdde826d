"""Retrieval-augmented knowledge engine.

Flow: Documents → Text → Chunks → Vectors (ingest, once)
      Question → Vector → Top-k chunks → Prompt → LLM (ask, per question)
"""

from pathlib import Path

from doctalk.core import (
    BaseKnowledgeEngine,
    BaseChunker,
    BaseEmbedder,
    BaseRetriever,
    Citation,
    DocumentChunk,
    EngineAnswer,
    RetrievalResult,
    NotInitializedError,
)
from doctalk.chunking import ChunkingRegistry
from doctalk.documents import extract_text
from doctalk.embeddings import EmbeddingsRegistry
from doctalk.retrieval import RetrievalRegistry
from doctalk.generation import (
    BaseGenerator,
    GeneratorRegistry,
    SYSTEM_PROMPT,
    build_rag_prompt,
    is_info_not_found,
)
from doctalk.config import DocTalkConfig
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)

NO_RELEVANT_DOCUMENTS = "No relevant information found in the documents."
NO_ANSWER_IN_DOCUMENTS = "The documents do not contain an answer to this question."


class RetrievalKnowledgeEngine(BaseKnowledgeEngine):
    """Default knowledge engine composed of registry backends.

    Components are created lazily from config; any of them can be injected
    (tests pass stubs).
    """

    def __init__(
        self,
        config: DocTalkConfig,
        model_dir: Path | None = None,
        *,
        chunker: BaseChunker | None = None,
        embedder: BaseEmbedder | None = None,
        retriever: BaseRetriever | None = None,
        generator: BaseGenerator | None = None,
    ):
        self.config = config
        self.model_dir = model_dir or config.models.resolve_model_dir()

        self._chunker = chunker
        self._embedder = embedder
        self._retriever = retriever
        self._generator = generator

        self._index_name: str | None = None
        logger.info("RetrievalKnowledgeEngine initialized")

    @property
    def chunker(self) -> BaseChunker:
        """Lazy-load chunker."""
        if self._chunker is None:
            self._chunker = ChunkingRegistry.create(
                self.config.chunking.strategy,
                config=self.config.chunking,
            )
        return self._chunker

    @property
    def embedder(self) -> BaseEmbedder:
        """Lazy-load embedder."""
        if self._embedder is None:
            self._embedder = EmbeddingsRegistry.create(
                self.config.embedding.backend,
                config=self.config.embedding,
                model_dir=self.model_dir,
            )
        return self._embedder

    @property
    def retriever(self) -> BaseRetriever:
        """Lazy-load retriever."""
        if self._retriever is None:
            self._retriever = RetrievalRegistry.create(
                self.config.retrieval.backend,
                config=self.config.retrieval,
            )
        return self._retriever

    @property
    def generator(self) -> BaseGenerator:
        """Lazy-load generator."""
        if self._generator is None:
            self._generator = GeneratorRegistry.create(
                self.config.generation.backend,
                config=self.config.generation,
                model_dir=self.model_dir,
            )
        return self._generator

    @property
    def is_available(self) -> bool:
        return self.generator.is_available

    @property
    def index_name(self) -> str | None:
        return self._index_name

    @timed
    def ingest(self, documents: list[Path], index_name: str) -> None:
        """Build a new index over the documents.

        Args:
            documents: Ingestible files
            index_name: Name of the index to (re)build
        """
        chunks: list[DocumentChunk] = []
        for path in documents:
            text = extract_text(path)
            doc_chunks = self.chunker.chunk(text, str(path))
            if not doc_chunks:
                logger.warning(f"No text extracted from {path.name}")
            chunks.extend(doc_chunks)
            logger.info(f"Read {path.name}: {len(doc_chunks)} chunks")

        embeddings = self.embedder.embed([chunk.text for chunk in chunks])

        self.retriever.create_index(index_name, self.embedder.dimension)
        self.retriever.add(chunks, embeddings)
        self._index_name = index_name

        logger.info(f"Ingestion complete: {len(chunks)} chunks from {len(documents)} documents")

    def ask(self, question: str) -> EngineAnswer:
        """Answer a question from the ingested documents."""
        if self._index_name is None:
            raise NotInitializedError("No documents ingested, call ingest() first")

        query_embedding = self.embedder.embed_query(question)
        results = self.retriever.search(query_embedding, top_k=self.config.retrieval.top_k)
        logger.info(f"Retrieved {len(results)} chunks for question")

        if not results:
            return EngineAnswer(result="", no_result=True, no_result_reason=NO_RELEVANT_DOCUMENTS)

        answer = self.generator.generate(SYSTEM_PROMPT, build_rag_prompt(question, results))

        if is_info_not_found(answer):
            return EngineAnswer(result=answer, no_result=True, no_result_reason=NO_ANSWER_IN_DOCUMENTS)

        return EngineAnswer(result=answer, sources=self._citations(results))

    def _citations(self, results: list[RetrievalResult]) -> list[Citation]:
        """One citation per distinct source, best match first."""
        citations: list[Citation] = []
        seen: set[str] = set()
        for result in results:
            source = result.chunk.source
            if source in seen:
                continue
            seen.add(source)
            name = Path(source).name
            citations.append(Citation(source_name=name, link=f"{self._index_name}/{name}"))
        return citations

    def unload(self) -> None:
        """Release model memory."""
        if self._generator is not None:
            self._generator.unload()
        if self._embedder is not None:
            self._embedder.unload()
