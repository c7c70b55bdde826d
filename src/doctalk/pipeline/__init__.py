"""Pipeline module - transcription and knowledge session orchestration."""

from doctalk.pipeline.transcription import TranscriptionPipeline, transcript_path
from doctalk.pipeline.session import Answer, KnowledgeSession

__all__ = [
    "TranscriptionPipeline",
    "transcript_path",
    "Answer",
    "KnowledgeSession",
]
