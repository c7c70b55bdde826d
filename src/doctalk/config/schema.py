"""Pydantic configuration schemas with validation."""

import sys
from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, model_validator


def app_root() -> Path:
    """Folder that holds the default model directory.

    The folder of the `doctalk` console script when running as that script.
    Otherwise (`python -m doctalk`, test runners, embedding) the current
    working directory, since argv[0] then points into site-packages or at
    another tool.
    """
    program = Path(sys.argv[0])
    if program.stem.lower() == "doctalk" and program.is_file():
        return program.resolve().parent
    return Path.cwd()


class ASRConfig(BaseModel):
    """ASR (Automatic Speech Recognition) configuration."""
    backend: Literal["faster-whisper"] = "faster-whisper"
    model_size: Literal["tiny", "base", "small", "medium", "large-v2", "large-v3"] = "base"
    device: Literal["cuda", "cpu", "auto"] = "auto"
    compute_type: Literal["float16", "int8", "float32"] = "int8"
    vad_filter: bool = True
    vad_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    language: str | None = None  # None = auto-detect


class ConversionConfig(BaseModel):
    """Audio conversion (ffmpeg) configuration."""
    ffmpeg_binary: str = "ffmpeg"
    sample_rate: int = Field(default=16000, ge=8000, le=48000)
    channels: int = Field(default=1, ge=1, le=2)
    timeout_seconds: int = Field(default=1800, ge=1)


class ChunkingConfig(BaseModel):
    """Document chunking configuration."""
    strategy: Literal["paragraph"] = "paragraph"
    max_tokens_per_paragraph: int = Field(default=300, ge=10, le=4000)
    max_tokens_per_line: int = Field(default=100, ge=5)
    overlap_tokens: int = Field(default=30, ge=0)

    @model_validator(mode="after")
    def _check_limits(self) -> "ChunkingConfig":
        if self.max_tokens_per_line > self.max_tokens_per_paragraph:
            raise ValueError("max_tokens_per_line must not exceed max_tokens_per_paragraph")
        if self.overlap_tokens >= self.max_tokens_per_paragraph:
            raise ValueError("overlap_tokens must be smaller than max_tokens_per_paragraph")
        return self


class EmbeddingConfig(BaseModel):
    """Embedding model configuration."""
    backend: Literal["sentence-transformers"] = "sentence-transformers"
    model: str = "BAAI/bge-small-en-v1.5"
    device: Literal["cuda", "cpu", "auto"] = "auto"
    batch_size: int = Field(default=32, ge=1)
    normalize: bool = True
    # BGE retrieval models expect this prefix on queries, not on passages
    query_instruction: str = "Represent this sentence for searching relevant passages: "


class RetrievalConfig(BaseModel):
    """Vector retrieval configuration."""
    backend: Literal["qdrant"] = "qdrant"
    top_k: int = Field(default=5, ge=1, le=100)
    min_relevance: float = Field(default=0.0, ge=0.0, le=1.0)

    # None keeps the index in memory for the run
    qdrant_path: str | None = None


class GenerationConfig(BaseModel):
    """LLM answer generation configuration."""
    backend: Literal["llama-cpp", "ollama"] = "llama-cpp"

    # llama-cpp: GGUF file fetched from huggingface.co/<model_repo>
    model_repo: str = "TheBloke/Llama-2-7B-Chat-GGUF"
    model_file: str = "llama-2-7b-chat.Q4_K_M.gguf"
    context_size: int = Field(default=4096, ge=512)
    gpu_layers: int = Field(default=32, ge=0)
    seed: int = 1338
    stop: list[str] = Field(default_factory=lambda: ["\n\n"])

    # ollama
    base_url: str = "http://localhost:11434"
    model: str = "llama2:7b-chat"
    fallback_models: list[str] = Field(default_factory=lambda: ["llama3.2", "mistral"])
    timeout: float = Field(default=120.0, gt=0)

    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    max_tokens: int = Field(default=300, ge=1)


class ModelsConfig(BaseModel):
    """Local model storage configuration."""
    model_dir: str | None = None  # None = "model" beside the doctalk script, else in the cwd
    hub_url: str = "https://huggingface.co"
    chunk_size: int = Field(default=1024 * 1024, ge=1024)

    def resolve_model_dir(self) -> Path:
        if self.model_dir:
            return Path(self.model_dir).expanduser()
        return app_root() / "model"


class DocTalkConfig(BaseModel):
    """Root configuration for DocTalk."""
    asr: ASRConfig = Field(default_factory=ASRConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)

    # Global settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["simple", "detailed"] = "simple"
