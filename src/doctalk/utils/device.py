"""Compute device selection and memory release for local models."""

import gc

from doctalk.utils.logging import get_logger

logger = get_logger(__name__)


def resolve_device(device: str) -> str:
    """Map "auto" to "cuda" when torch sees a GPU, else "cpu".

    torch is optional; without it everything runs on the CPU.
    """
    if device != "auto":
        return device

    try:
        import torch
    except ImportError:
        return "cpu"
    return "cuda" if torch.cuda.is_available() else "cpu"


def release_memory() -> None:
    """Collect garbage and drop cached CUDA blocks after a model is freed."""
    gc.collect()

    try:
        import torch
    except ImportError:
        return
    if torch.cuda.is_available():
        torch.cuda.empty_cache()
        logger.debug("CUDA cache emptied")
