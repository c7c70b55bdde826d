"""Paragraph chunking strategy with token limits."""

from doctalk.chunking.base import ChunkingRegistry
from doctalk.core import BaseChunker, DocumentChunk
from doctalk.config import ChunkingConfig
from doctalk.utils import get_logger

logger = get_logger(__name__)


def estimate_tokens(text: str) -> int:
    """Estimate token count (rough: ~4 chars per token, at least 1 per word)."""
    return sum(max(1, len(word) // 4) for word in text.split())


@ChunkingRegistry.register("paragraph")
class ParagraphChunker(BaseChunker):
    """Packs document lines into paragraphs of bounded size.

    Long lines are split on word boundaries to `max_tokens_per_line`, lines
    are packed into chunks of at most `max_tokens_per_paragraph`, and each
    new chunk starts with the trailing `overlap_tokens` of the previous one.
    """

    def __init__(self, config: ChunkingConfig):
        self.config = config
        self.max_tokens = config.max_tokens_per_paragraph
        self.max_line_tokens = config.max_tokens_per_line
        self.overlap_tokens = config.overlap_tokens
        logger.info(
            f"ParagraphChunker: paragraph={self.max_tokens}, "
            f"line={self.max_line_tokens}, overlap={self.overlap_tokens}"
        )

    def chunk(self, text: str, source: str) -> list[DocumentChunk]:
        """Split document text into chunks.

        Args:
            text: Full document text
            source: Document path, stored on each chunk

        Returns:
            List of DocumentChunks in document order
        """
        lines = self._split_lines(text)
        if not lines:
            return []

        chunks: list[DocumentChunk] = []
        current: list[str] = []
        current_tokens = 0

        for line in lines:
            line_tokens = estimate_tokens(line)

            if current and current_tokens + line_tokens > self.max_tokens:
                chunks.append(self._make_chunk(current, source, len(chunks)))

                current = self._overlap(current)
                current_tokens = sum(estimate_tokens(x) for x in current)
                if current_tokens + line_tokens > self.max_tokens:
                    current, current_tokens = [], 0

            current.append(line)
            current_tokens += line_tokens

        if current:
            chunks.append(self._make_chunk(current, source, len(chunks)))

        logger.debug(f"Created {len(chunks)} chunks from {source}")
        return chunks

    def _split_lines(self, text: str) -> list[str]:
        """Non-blank lines, long ones broken on word boundaries."""
        result = []
        for raw in text.splitlines():
            words = raw.split()
            if not words:
                continue

            piece: list[str] = []
            piece_tokens = 0
            for word in words:
                word_tokens = estimate_tokens(word)
                if piece and piece_tokens + word_tokens > self.max_line_tokens:
                    result.append(" ".join(piece))
                    piece, piece_tokens = [], 0
                piece.append(word)
                piece_tokens += word_tokens
            result.append(" ".join(piece))

        return result

    def _overlap(self, lines: list[str]) -> list[str]:
        """Trailing words of a chunk that fit in the overlap budget."""
        if self.overlap_tokens == 0:
            return []

        words = " ".join(lines).split()
        tail: list[str] = []
        tokens = 0
        for word in reversed(words):
            tokens += estimate_tokens(word)
            if tokens > self.overlap_tokens:
                break
            tail.append(word)

        return [" ".join(reversed(tail))] if tail else []

    def _make_chunk(self, lines: list[str], source: str, index: int) -> DocumentChunk:
        text = "\n".join(lines)
        return DocumentChunk(
            text=text,
            source=source,
            index=index,
            metadata={"tokens": estimate_tokens(text)},
        )
