"""LLM answer generation module."""

from doctalk.generation.base import BaseGenerator, GeneratorRegistry
from doctalk.generation.llama_cpp import LlamaCppGenerator
from doctalk.generation.ollama import OllamaGenerator
from doctalk.generation.prompts import (
    SYSTEM_PROMPT,
    INFO_NOT_FOUND,
    build_rag_prompt,
    is_info_not_found,
)

__all__ = [
    "BaseGenerator",
    "GeneratorRegistry",
    "LlamaCppGenerator",
    "OllamaGenerator",
    "SYSTEM_PROMPT",
    "INFO_NOT_FOUND",
    "build_rag_prompt",
    "is_info_not_found",
]
