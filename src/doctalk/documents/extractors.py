"""Plain-text extraction from ingestible documents."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from doctalk.core.exceptions import DocumentParseError, UnsupportedFormatError
from doctalk.utils import get_logger

logger = get_logger(__name__)

TEXT_ENCODINGS = ("utf-8-sig", "cp1252")


def extract_txt(path: Path) -> str:
    data = path.read_bytes()
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="ignore")


def extract_pdf(path: Path) -> str:
    from pypdf import PdfReader

    reader = PdfReader(str(path))
    if reader.is_encrypted:
        raise DocumentParseError("PDF is password protected", path=path)
    return "\n\n".join(page.extract_text() or "" for page in reader.pages)


def extract_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    parts = [p.text for p in doc.paragraphs if p.text]
    for table in doc.tables:
        for row in table.rows:
            parts.append("\t".join(cell.text or "" for cell in row.cells))
    return "\n\n".join(parts)


def extract_pptx(path: Path) -> str:
    from pptx import Presentation

    slides = []
    for slide in Presentation(str(path)).slides:
        texts = [
            shape.text_frame.text
            for shape in slide.shapes
            if shape.has_text_frame and shape.text_frame.text
        ]
        if texts:
            slides.append("\n".join(texts))
    return "\n\n".join(slides)


def extract_legacy_binary(path: Path) -> str:
    """Pre-2007 Office binaries (.doc, .ppt) have no pure-Python reader."""
    logger.warning(f"Skipping {path.name}: legacy binary Office format is not readable, save it as .docx/.pptx")
    return ""


EXTRACTORS: dict[str, Callable[[Path], str]] = {
    ".txt": extract_txt,
    ".pdf": extract_pdf,
    ".docx": extract_docx,
    ".pptx": extract_pptx,
    ".doc": extract_legacy_binary,
    ".ppt": extract_legacy_binary,
}


def extract_text(path: Path | str) -> str:
    """Extract the text of a document.

    Args:
        path: Document path

    Returns:
        Extracted text, possibly empty

    Raises:
        UnsupportedFormatError: If no extractor handles the extension
        DocumentParseError: If the parser library fails
    """
    path = Path(path)
    extractor = EXTRACTORS.get(path.suffix.lower())
    if extractor is None:
        raise UnsupportedFormatError(path)

    try:
        text = extractor(path)
    except DocumentParseError:
        raise
    except Exception as e:
        raise DocumentParseError(f"Failed to extract text: {e}", path=path) from e

    logger.debug(f"Extracted {len(text)} chars from {path.name}")
    return text
