"""Working directory selection and file classification."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path

from doctalk.core.exceptions import DirectoryNotFoundError, EmptyResultError
from doctalk.workspace.formats import INGESTIBLE_EXTENSIONS, TRANSCRIBABLE_EXTENSIONS
from doctalk.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClassifiedFiles:
    """Files of a directory split by how they reach the knowledge base."""
    transcribable: tuple[Path, ...]
    ingestible: tuple[Path, ...]
    unsupported: tuple[Path, ...]

    @property
    def supported(self) -> tuple[Path, ...]:
        """Transcribable and ingestible files, in directory order."""
        keep = set(self.transcribable) | set(self.ingestible)
        return tuple(sorted(keep, key=_sort_key))


@dataclass(frozen=True)
class WorkingDirectory:
    """A directory and the files the application can use inside it."""
    path: str
    files: tuple[Path, ...]


def _sort_key(path: Path) -> str:
    return path.name.lower()


def _normalize(extensions: Collection[str]) -> frozenset[str]:
    return frozenset(ext.lower() for ext in extensions)


def classify(
    directory: Path | str,
    transcribable_extensions: Collection[str] = TRANSCRIBABLE_EXTENSIONS,
    ingestible_extensions: Collection[str] = INGESTIBLE_EXTENSIONS,
) -> ClassifiedFiles:
    """Partition the files directly inside a directory.

    Extensions are compared case-insensitively. A file whose extension is in
    both sets is transcribable. Subdirectories are ignored.

    Args:
        directory: Directory to scan (non-recursive)
        transcribable_extensions: Extensions needing speech recognition
        ingestible_extensions: Extensions the knowledge engine reads directly

    Returns:
        ClassifiedFiles with disjoint buckets, each sorted by file name

    Raises:
        DirectoryNotFoundError: If the path is missing or not a directory
        EmptyResultError: If neither bucket holds a file
    """
    path = Path(directory)
    if not path.is_dir():
        raise DirectoryNotFoundError(directory)

    transcribable_set = _normalize(transcribable_extensions)
    ingestible_set = _normalize(ingestible_extensions)

    transcribable: list[Path] = []
    ingestible: list[Path] = []
    unsupported: list[Path] = []

    for entry in sorted(path.iterdir(), key=_sort_key):
        if not entry.is_file():
            continue

        suffix = entry.suffix.lower()
        if suffix in transcribable_set:
            transcribable.append(entry)
        elif suffix in ingestible_set:
            ingestible.append(entry)
        else:
            unsupported.append(entry)

    if not transcribable and not ingestible:
        raise EmptyResultError(
            "No supported files",
            directory=directory,
            extensions=tuple(sorted(transcribable_set | ingestible_set)),
        )

    logger.debug(
        f"Classified {path}: {len(transcribable)} transcribable, "
        f"{len(ingestible)} ingestible, {len(unsupported)} unsupported"
    )
    return ClassifiedFiles(
        transcribable=tuple(transcribable),
        ingestible=tuple(ingestible),
        unsupported=tuple(unsupported),
    )


def acquire_working_directory(directory: str) -> tuple[WorkingDirectory, ClassifiedFiles]:
    """Classify a directory and wrap its supported files.

    Raises:
        DirectoryNotFoundError: If the path is missing or not a directory
        EmptyResultError: If the directory holds no supported file
    """
    classified = classify(directory)
    return WorkingDirectory(path=directory, files=classified.supported), classified
