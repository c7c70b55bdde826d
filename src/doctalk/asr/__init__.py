"""ASR (Automatic Speech Recognition) module."""

from doctalk.asr.base import ASRRegistry
from doctalk.asr.whisper import FasterWhisperASR

__all__ = [
    "ASRRegistry",
    "FasterWhisperASR",
]
