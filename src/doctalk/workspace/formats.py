"""Supported file formats."""

# Audio/video that must go through speech recognition
TRANSCRIBABLE_EXTENSIONS: frozenset[str] = frozenset({
    ".wav",
    ".mp3",
    ".mp4",  # audio track is extracted
})

# Documents the knowledge engine reads directly
INGESTIBLE_EXTENSIONS: frozenset[str] = frozenset({
    ".pdf",
    ".doc",
    ".docx",
    ".ppt",
    ".pptx",
    ".txt",
})

TRANSCRIPT_SUFFIX = ".txt"
WAVE_SUFFIX = ".wav"

# Stem marker of converted audio ("a.mp3" -> "a.16k.wav", "a.wav" -> "a.16k.wav")
RESAMPLED_MARKER = ".16k"


def supported_extensions() -> tuple[str, ...]:
    """All supported extensions, sorted for display."""
    return tuple(sorted(TRANSCRIBABLE_EXTENSIONS | INGESTIBLE_EXTENSIONS))
