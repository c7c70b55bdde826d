"""Shared test fixtures."""

import wave
from pathlib import Path

import pytest

# Import torch once up front: fixtures that patch.dict(sys.modules) would
# otherwise drop a torch first imported inside them, and torch's C extension
# cannot be initialised a second time in the same process.
try:
    import torch  # noqa: F401
except ImportError:
    pass

from doctalk.config import DocTalkConfig
from doctalk.core import BaseASR, BaseKnowledgeEngine, EngineAnswer, TranscriptSegment


class StubASR(BaseASR):
    """Recognizer that records every audio file it is given."""

    def __init__(self, segments=("Hello ", "world."), model_available=True):
        self.segments = list(segments)
        self.model_available = model_available
        self.calls: list[Path] = []
        self.downloads = 0
        self._loaded = False

    def download_model(self, cancel_event=None) -> Path:
        self.downloads += 1
        self.model_available = True
        return Path("stub-model")

    @property
    def is_model_available(self) -> bool:
        return self.model_available

    def transcribe_stream(self, audio_path, language=None):
        self.calls.append(Path(audio_path))
        for i, text in enumerate(self.segments):
            yield TranscriptSegment(text=text, start=float(i), end=float(i + 1))

    def load(self) -> None:
        self._loaded = True

    def unload(self) -> None:
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded


class StubConverter:
    """Converter that pretends every source needs a marked sibling .wav."""

    def __init__(self, events: list | None = None):
        self.calls: list[Path] = []
        self.events = events if events is not None else []

    def prepare(self, source: Path) -> Path:
        source = Path(source)
        self.calls.append(source)
        self.events.append(("convert", source))
        return source.with_name(f"{source.stem}.16k.wav")


class StubEngine(BaseKnowledgeEngine):
    """Knowledge engine returning a canned answer."""

    def __init__(self, answer: EngineAnswer | None = None, available: bool = True):
        self.answer = answer or EngineAnswer(result="42")
        self.available = available
        self.ingested: list[tuple[list[Path], str]] = []
        self.questions: list[str] = []
        self.unloaded = False

    @property
    def is_available(self) -> bool:
        return self.available

    def ingest(self, documents, index_name) -> None:
        self.ingested.append((list(documents), index_name))

    def ask(self, question: str) -> EngineAnswer:
        self.questions.append(question)
        return self.answer

    def unload(self) -> None:
        self.unloaded = True


def write_wav(path: Path, *, rate: int = 16000, channels: int = 1, width: int = 2, frames: int = 160) -> Path:
    """Write a silent PCM WAV file."""
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(width)
        wf.setframerate(rate)
        wf.writeframes(b"\x00" * frames * channels * width)
    return path


@pytest.fixture
def config(tmp_path):
    """Default config with the model directory inside tmp_path."""
    return DocTalkConfig(models={"model_dir": str(tmp_path / "model")})


@pytest.fixture
def stub_asr():
    return StubASR()


@pytest.fixture
def stub_converter():
    return StubConverter()


@pytest.fixture
def stub_engine():
    return StubEngine()


@pytest.fixture
def media_dir(tmp_path):
    """Directory holding a.mp3 and b.pdf."""
    directory = tmp_path / "docs"
    directory.mkdir()
    (directory / "a.mp3").write_bytes(b"ID3fake-mp3")
    (directory / "b.pdf").write_bytes(b"%PDF-1.4 fake")
    return directory


@pytest.fixture
def make_wav():
    return write_wav


@pytest.fixture
def make_engine():
    return StubEngine


@pytest.fixture
def make_asr():
    return StubASR


@pytest.fixture
def make_converter():
    return StubConverter
