"""Logging setup for the command line application."""

import logging
import sys
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

FORMATS = {
    "simple": "%(levelname)s | %(name)s | %(message)s",
    "detailed": "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
}

# Chatty at INFO, never useful in the chat
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "filelock", "faster_whisper", "sentence_transformers")

_configured = False


def setup_logging(level: LogLevel = "WARNING", format_style: Literal["simple", "detailed"] = "simple") -> None:
    """Send log records to stderr so they stay out of the Q/A on stdout.

    Only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=getattr(logging, level),
        format=FORMATS[format_style],
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
