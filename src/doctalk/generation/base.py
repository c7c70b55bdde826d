"""Base class and registry for answer generators."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from doctalk.config import GenerationConfig
from doctalk.core import Registry


class BaseGenerator(ABC):
    """Base class for LLM answer generators."""

    def __init__(self, config: GenerationConfig, model_dir: Path | None = None):
        self.config = config
        self.model_dir = model_dir
        self._is_available = False

    @property
    def is_available(self) -> bool:
        return self._is_available

    @abstractmethod
    def check_availability(self) -> bool:
        pass

    @abstractmethod
    def generate(self, system: str, prompt: str, **kwargs: Any) -> str:
        pass

    def unload(self) -> None:
        """Release model memory, if any is held."""
        pass


# Generator Registry - all LLM backends register here
GeneratorRegistry = Registry[BaseGenerator]("generation")
