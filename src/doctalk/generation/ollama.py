"""Answer generation through a local Ollama server."""

from pathlib import Path
from typing import Any

import httpx

from doctalk.generation.base import BaseGenerator, GeneratorRegistry
from doctalk.config import GenerationConfig
from doctalk.core import GenerationError
from doctalk.core.resilience import retry_local_service
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)


@GeneratorRegistry.register("ollama")
class OllamaGenerator(BaseGenerator):
    """Generator backed by the Ollama HTTP API.

    For machines that already run Ollama instead of loading the GGUF file
    in-process. The model directory is unused; models are pulled with
    `ollama pull`.
    """

    def __init__(
        self,
        config: GenerationConfig,
        model_dir: Path | None = None,
        client: httpx.Client | None = None,
    ):
        super().__init__(config, model_dir)
        self.base_url = config.base_url.rstrip("/")
        self.model = config.model
        self._client = client or httpx.Client(timeout=config.timeout)
        self._is_available = self.check_availability()

    def _pulled_models(self) -> list[str] | None:
        """Names of locally pulled models, None when the server is unreachable."""
        try:
            response = self._client.get(f"{self.base_url}/api/tags")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"Ollama unreachable at {self.base_url}: {e}")
            return None
        return [m.get("name", "") for m in response.json().get("models", [])]

    def check_availability(self) -> bool:
        """Pick the configured model, or the first pulled fallback."""
        pulled = self._pulled_models()
        if pulled is None:
            logger.warning(f"Ollama not available at {self.base_url}")
            return False

        for candidate in [self.config.model, *self.config.fallback_models]:
            if any(candidate in name for name in pulled):
                if candidate != self.config.model:
                    logger.info(f"{self.config.model} not pulled, using {candidate}")
                self.model = candidate
                return True

        logger.warning(f"No usable model in Ollama (pulled: {', '.join(pulled) or 'none'})")
        return False

    @retry_local_service
    def _post_generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._client.post(f"{self.base_url}/api/generate", json=payload)
        response.raise_for_status()
        return response.json()

    @timed
    def generate(self, system: str, prompt: str, **kwargs: Any) -> str:
        """Single non-streaming completion."""
        if not self._is_available and not self.check_availability():
            raise GenerationError(f"Ollama is not available at {self.base_url}")
        self._is_available = True

        payload = {
            "model": self.model,
            "system": system,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": kwargs.get("temperature", self.config.temperature),
                "num_predict": kwargs.get("max_tokens", self.config.max_tokens),
                "seed": self.config.seed,
                "stop": self.config.stop,
            },
        }

        try:
            body = self._post_generate(payload)
        except httpx.HTTPStatusError as e:
            raise GenerationError(f"Ollama returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Ollama request failed: {e}") from e

        logger.debug(f"Ollama generated {body.get('eval_count', '?')} tokens")
        return body.get("response", "").strip()

    def unload(self) -> None:
        self._client.close()
