"""Tests for the backend registry."""

import pytest

from doctalk.core import Registry, RegistryError


class Greeter:
    def __init__(self, name: str = "world"):
        self.name = name


@pytest.fixture
def registry():
    return Registry[Greeter]("greeters")


class TestRegistry:
    def test_register_and_create(self, registry):
        registry.register("plain")(Greeter)

        greeter = registry.create("plain", name="docs")

        assert isinstance(greeter, Greeter)
        assert greeter.name == "docs"

    def test_decorator_returns_class(self, registry):
        @registry.register("plain")
        class Plain(Greeter):
            pass

        assert registry.get("plain") is Plain
        assert "plain" in registry
        assert registry.names() == ["plain"]

    def test_duplicate_key_rejected(self, registry):
        registry.register("plain")(Greeter)

        with pytest.raises(RegistryError, match="already registered"):
            registry.register("plain")(Greeter)

    def test_unknown_key_lists_available(self, registry):
        registry.register("plain")(Greeter)

        with pytest.raises(RegistryError, match=r"available: plain"):
            registry.create("fancy")

    def test_builtin_backends_registered(self):
        from doctalk.asr import ASRRegistry
        from doctalk.chunking import ChunkingRegistry
        from doctalk.embeddings import EmbeddingsRegistry
        from doctalk.generation import GeneratorRegistry
        from doctalk.retrieval import RetrievalRegistry

        assert "faster-whisper" in ASRRegistry
        assert "paragraph" in ChunkingRegistry
        assert "sentence-transformers" in EmbeddingsRegistry
        assert "qdrant" in RetrievalRegistry
        assert GeneratorRegistry.names() == ["llama-cpp", "ollama"]
