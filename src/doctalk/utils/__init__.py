"""Utilities: logging, decorators, devices, console styling."""

from doctalk.utils.logging import setup_logging, get_logger
from doctalk.utils.decorators import timed, require_loaded
from doctalk.utils.device import resolve_device, release_memory
from doctalk.utils.console import style

__all__ = [
    "setup_logging",
    "get_logger",
    "timed",
    "require_loaded",
    "resolve_device",
    "release_memory",
    "style",
]
