"""Configuration management."""

from doctalk.config.schema import (
    DocTalkConfig,
    ASRConfig,
    ConversionConfig,
    ChunkingConfig,
    EmbeddingConfig,
    RetrievalConfig,
    GenerationConfig,
    ModelsConfig,
    app_root,
)
from doctalk.config.loader import load_config, load_yaml, deep_merge

__all__ = [
    # Main config
    "DocTalkConfig",
    "load_config",
    # Sub-configs
    "ASRConfig",
    "ConversionConfig",
    "ChunkingConfig",
    "EmbeddingConfig",
    "RetrievalConfig",
    "GenerationConfig",
    "ModelsConfig",
    # Utilities
    "app_root",
    "load_yaml",
    "deep_merge",
]
