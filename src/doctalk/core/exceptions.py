"""Custom exceptions for DocTalk.

Exception hierarchy:
    DocTalkError (base)
    ├── ConfigError               - Configuration invalid
    ├── DirectoryNotFoundError    - Working directory missing
    ├── EmptyResultError          - No supported file in directory
    │   └── NoIngestibleFilesError - No document for the knowledge base
    ├── UnsupportedFormatError    - Extension not recognized
    ├── ModelNotInitializedError  - Model not downloaded/available
    ├── NotInitializedError       - Session used before initialize()
    ├── ConversionError           - ffmpeg conversion failed
    ├── DownloadCancelledError    - Caller cancelled a model download
    └── component errors          - ASR, parsing, embedding, retrieval, generation
"""

from __future__ import annotations

from pathlib import Path


class DocTalkError(Exception):
    """Base exception for all DocTalk errors."""
    pass


class ConfigError(DocTalkError):
    """Configuration loading or validation error."""
    pass


class RegistryError(DocTalkError):
    """Component registry error."""
    pass


class DirectoryNotFoundError(DocTalkError):
    """Working directory does not exist or is not a directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = directory
        super().__init__(f"Directory not found: {directory}")


class EmptyResultError(DocTalkError):
    """Directory contains no file the application can use."""

    def __init__(
        self,
        message: str,
        *,
        directory: Path | str | None = None,
        extensions: tuple[str, ...] = (),
    ) -> None:
        self.directory = directory
        self.extensions = extensions

        details = []
        if directory is not None:
            details.append(f"directory={directory}")
        if extensions:
            details.append(f"supported={', '.join(extensions)}")

        full_message = message
        if details:
            full_message = f"{message} ({'; '.join(details)})"

        super().__init__(full_message)


class NoIngestibleFilesError(EmptyResultError):
    """Directory contains no document the knowledge engine can ingest."""
    pass


class UnsupportedFormatError(DocTalkError):
    """File extension is not handled by the component."""

    def __init__(self, path: Path | str, *, extension: str | None = None) -> None:
        self.path = path
        self.extension = extension if extension is not None else Path(path).suffix.lower()
        super().__init__(
            f"Files with '{self.extension}' extension are not supported (path={path})"
        )


class ModelNotInitializedError(DocTalkError):
    """Required model has not been downloaded or is not reachable."""

    def __init__(self, model: str, hint: str | None = None) -> None:
        self.model = model
        message = f"Model missing: {model}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class NotInitializedError(DocTalkError):
    """Session used before it was initialized."""
    pass


class ConversionError(DocTalkError):
    """External audio conversion failed."""

    def __init__(self, message: str, *, source: Path | str, stderr: str | None = None) -> None:
        self.source = source
        self.stderr = stderr

        full_message = f"{message} (source={source})"
        if stderr:
            full_message = f"{full_message}\n{stderr.strip()}"

        super().__init__(full_message)


class DownloadCancelledError(DocTalkError):
    """A model download was cancelled by the caller."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Download cancelled: {url}")


class ASRError(DocTalkError):
    """Speech recognition error."""
    pass


class DocumentParseError(DocTalkError):
    """Text extraction from a document failed."""

    def __init__(self, message: str, *, path: Path | str) -> None:
        self.path = path
        super().__init__(f"{message} (path={path})")


class EmbeddingError(DocTalkError):
    """Embedding generation error."""
    pass


class RetrievalError(DocTalkError):
    """Vector retrieval error."""
    pass


class GenerationError(DocTalkError):
    """LLM answer generation error."""
    pass
