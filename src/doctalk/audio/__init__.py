"""Audio conversion module."""

from doctalk.audio.converter import AudioConverter

__all__ = [
    "AudioConverter",
]
