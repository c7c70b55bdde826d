"""Knowledge session - one directory, one index, many questions."""

from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path

from doctalk.core import (
    BaseKnowledgeEngine,
    EngineAnswer,
    EmptyResultError,
    NoIngestibleFilesError,
    ModelNotInitializedError,
    NotInitializedError,
    compute_session_id,
    index_name_for,
)
from doctalk.workspace import INGESTIBLE_EXTENSIONS, classify
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)


@dataclass(frozen=True)
class Answer:
    """Answer to one question.

    When `is_empty` is set, `answer_text` explains why there is no answer.
    """
    question: str
    answer_text: str | None
    sources: tuple[str, ...]
    is_empty: bool

    @classmethod
    def from_engine(cls, question: str, answer: EngineAnswer) -> "Answer":
        return cls(
            question=question,
            answer_text=answer.no_result_reason if answer.no_result else answer.result,
            sources=tuple(f"{s.source_name} - {s.link}" for s in answer.sources),
            is_empty=answer.no_result,
        )


class KnowledgeSession:
    """Question answering over the documents of a working directory.

    Usage:
        session = KnowledgeSession(engine)
        session_id = session.initialize("/home/me/notes")
        answer = session.ask("What was decided?")
    """

    def __init__(
        self,
        engine: BaseKnowledgeEngine,
        ingestible_extensions: Collection[str] = INGESTIBLE_EXTENSIONS,
    ):
        self.engine = engine
        self.ingestible_extensions = ingestible_extensions
        self._session_id: str | None = None

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def is_initialized(self) -> bool:
        return self._session_id is not None

    @timed
    def initialize(self, directory: str) -> str:
        """Ingest every document of the directory into a fresh index.

        Args:
            directory: Working directory path as entered by the user

        Returns:
            Session identifier of the directory

        Raises:
            ModelNotInitializedError: If the language model is not available
            DirectoryNotFoundError: If the directory does not exist
            NoIngestibleFilesError: If the directory has no ingestible document
        """
        if not self.engine.is_available:
            raise ModelNotInitializedError(
                "language model",
                hint="Download the model before starting a chat session",
            )

        documents = self._ingestible_files(directory)
        session_id = compute_session_id(directory)

        logger.info(f"Session {session_id}: ingesting {len(documents)} documents")
        self.engine.ingest(documents, index_name_for(session_id))

        self._session_id = session_id
        return session_id

    def _ingestible_files(self, directory: str) -> list[Path]:
        try:
            classified = classify(directory, (), self.ingestible_extensions)
        except EmptyResultError as e:
            raise NoIngestibleFilesError(
                "No ingestible documents",
                directory=directory,
                extensions=tuple(sorted(self.ingestible_extensions)),
            ) from e
        return list(classified.ingestible)

    def ask(self, question: str) -> Answer:
        """Answer a question from the session's documents.

        Raises:
            NotInitializedError: If initialize() has not completed
        """
        if self._session_id is None:
            raise NotInitializedError("Initialize the session first by calling initialize()")

        return Answer.from_engine(question, self.engine.ask(question))
