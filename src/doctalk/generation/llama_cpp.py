"""llama.cpp generator on a local GGUF model file."""

from pathlib import Path
from typing import Any

from doctalk.generation.base import BaseGenerator, GeneratorRegistry
from doctalk.config import GenerationConfig
from doctalk.core import GenerationError, ModelNotInitializedError
from doctalk.utils import get_logger, timed, require_loaded, release_memory

logger = get_logger(__name__)


@GeneratorRegistry.register("llama-cpp")
class LlamaCppGenerator(BaseGenerator):
    """Runs a quantized chat model in-process with llama-cpp-python.

    The GGUF file must already be in the model directory
    (see `ModelStore.ensure_llm`).
    """

    def __init__(self, config: GenerationConfig, model_dir: Path | None = None):
        super().__init__(config, model_dir)
        if model_dir is None:
            raise GenerationError("llama-cpp backend needs a model directory")
        self.model_path = Path(model_dir) / config.model_file
        self._llm = None

    def check_availability(self) -> bool:
        """The model is usable once the GGUF file is on disk."""
        return self.model_path.is_file()

    @property
    def is_available(self) -> bool:
        return self._llm is not None or self.check_availability()

    @property
    def is_loaded(self) -> bool:
        return self._llm is not None

    def load(self) -> None:
        if self._llm is not None:
            return

        if not self.check_availability():
            raise ModelNotInitializedError(
                str(self.model_path),
                hint="Download the model before starting a chat session",
            )

        try:
            from llama_cpp import Llama

            logger.info(f"Loading {self.model_path.name} (gpu_layers={self.config.gpu_layers})...")
            self._llm = Llama(
                model_path=str(self.model_path),
                n_ctx=self.config.context_size,
                n_gpu_layers=self.config.gpu_layers,
                seed=self.config.seed,
                verbose=False,
            )
            logger.info("LLM loaded")

        except Exception as e:
            raise GenerationError(f"Failed to load {self.model_path.name}: {e}") from e

    def unload(self) -> None:
        if self._llm is None:
            return
        self._llm = None
        release_memory()
        logger.info("LLM unloaded")

    @timed
    @require_loaded
    def generate(self, system: str, prompt: str, **kwargs: Any) -> str:
        """Generate a chat completion for the prompt."""
        try:
            completion = self._llm.create_chat_completion(
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                temperature=kwargs.get("temperature", self.config.temperature),
                max_tokens=kwargs.get("max_tokens", self.config.max_tokens),
                stop=self.config.stop or None,
            )
        except Exception as e:
            raise GenerationError(f"Generation failed: {e}") from e

        answer = completion["choices"][0]["message"]["content"] or ""
        usage = completion.get("usage") or {}
        logger.debug(f"Generated {usage.get('completion_tokens', '?')} tokens")
        return answer.strip()
