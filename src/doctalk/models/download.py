"""Model file download from the Hugging Face hub."""

from __future__ import annotations

import os
import threading
from pathlib import Path

import httpx

from doctalk.config import GenerationConfig, ModelsConfig
from doctalk.core.exceptions import DownloadCancelledError
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)

DEFAULT_HUB_URL = "https://huggingface.co"


def hf_resolve_url(repo: str, filename: str, hub_url: str = DEFAULT_HUB_URL) -> str:
    """Build the direct download URL of a file in a hub repository.

    Args:
        repo: "<owner>/<model>"
        filename: File inside the repository

    Returns:
        "<hub>/<owner>/<model>/resolve/main/<filename>"
    """
    return f"{hub_url.rstrip('/')}/{repo.strip('/')}/resolve/main/{filename}"


@timed
def download_file(
    url: str,
    destination: Path,
    *,
    client: httpx.Client | None = None,
    cancel_event: threading.Event | None = None,
    chunk_size: int = 1024 * 1024,
) -> Path:
    """Stream a remote file to disk.

    Bytes go to "<destination>.part" and are renamed once complete, so the
    final name only ever exists for a finished download. No resume.

    Args:
        url: Remote file URL (redirects are followed)
        destination: Final local path
        client: Optional HTTP client (a temporary one is created otherwise)
        cancel_event: Checked between chunks
        chunk_size: Bytes per read

    Returns:
        destination

    Raises:
        DownloadCancelledError: If cancel_event is set during the transfer
        httpx.HTTPError: Transport or status failures, as raised by httpx
    """
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(f"{destination.name}.part")

    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=httpx.Timeout(30.0, read=None), follow_redirects=True)

    try:
        with client.stream("GET", url, follow_redirects=True) as response:
            response.raise_for_status()
            total = int(response.headers.get("content-length", 0))
            logger.info(f"Downloading {url} ({total / 1e6:.0f} MB)")

            received = 0
            with open(partial, "wb") as f:
                for chunk in response.iter_bytes(chunk_size):
                    if cancel_event is not None and cancel_event.is_set():
                        raise DownloadCancelledError(url)
                    f.write(chunk)
                    received += len(chunk)

        os.replace(partial, destination)
        logger.info(f"Saved {received} bytes to {destination}")
        return destination

    except BaseException:
        partial.unlink(missing_ok=True)
        raise
    finally:
        if own_client:
            client.close()


class ModelStore:
    """Resolves and fetches the language model file in the model directory."""

    def __init__(
        self,
        models_config: ModelsConfig,
        generation_config: GenerationConfig,
        client: httpx.Client | None = None,
    ):
        self.models_config = models_config
        self.generation_config = generation_config
        self.model_dir = models_config.resolve_model_dir()
        self._client = client

    @property
    def llm_path(self) -> Path:
        return self.model_dir / self.generation_config.model_file

    @property
    def llm_url(self) -> str:
        return hf_resolve_url(
            self.generation_config.model_repo,
            self.generation_config.model_file,
            hub_url=self.models_config.hub_url,
        )

    def ensure_llm(self, cancel_event: threading.Event | None = None) -> Path:
        """Download the GGUF model once; later runs reuse the file."""
        if self.llm_path.is_file():
            logger.debug(f"LLM present: {self.llm_path}")
            return self.llm_path

        return download_file(
            self.llm_url,
            self.llm_path,
            client=self._client,
            cancel_event=cancel_event,
            chunk_size=self.models_config.chunk_size,
        )
