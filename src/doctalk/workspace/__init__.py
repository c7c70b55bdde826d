"""Working directory: supported formats and file classification."""

from doctalk.workspace.formats import (
    TRANSCRIBABLE_EXTENSIONS,
    INGESTIBLE_EXTENSIONS,
    TRANSCRIPT_SUFFIX,
    WAVE_SUFFIX,
    RESAMPLED_MARKER,
    supported_extensions,
)
from doctalk.workspace.classifier import (
    ClassifiedFiles,
    WorkingDirectory,
    classify,
    acquire_working_directory,
)

__all__ = [
    "TRANSCRIBABLE_EXTENSIONS",
    "INGESTIBLE_EXTENSIONS",
    "TRANSCRIPT_SUFFIX",
    "WAVE_SUFFIX",
    "RESAMPLED_MARKER",
    "supported_extensions",
    "ClassifiedFiles",
    "WorkingDirectory",
    "classify",
    "acquire_working_directory",
]
