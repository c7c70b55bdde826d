"""Local model storage and download."""

from doctalk.models.download import ModelStore, download_file, hf_resolve_url

__all__ = [
    "ModelStore",
    "download_file",
    "hf_resolve_url",
]
