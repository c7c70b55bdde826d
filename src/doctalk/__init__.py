"""DocTalk - Ask questions about a folder of documents, recordings and videos.

Usage:
    from doctalk import KnowledgeSession, TranscriptionPipeline, load_config
    from doctalk.engine import RetrievalKnowledgeEngine

    config = load_config()

    # Transcribe audio/video into .txt sidecars
    TranscriptionPipeline(config).ensure_transcript("meeting.mp3")

    # Query the folder
    session = KnowledgeSession(RetrievalKnowledgeEngine(config))
    session.initialize("/path/to/folder")
    answer = session.ask("What was decided about the budget?")
"""

from doctalk.pipeline import Answer, KnowledgeSession, TranscriptionPipeline
from doctalk.config import DocTalkConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "Answer",
    "KnowledgeSession",
    "TranscriptionPipeline",
    "DocTalkConfig",
    "load_config",
]
