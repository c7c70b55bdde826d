"""Document text extraction."""

from doctalk.documents.extractors import EXTRACTORS, extract_text

__all__ = [
    "EXTRACTORS",
    "extract_text",
]
