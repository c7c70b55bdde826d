"""Tests for the faster-whisper backend with the library mocked out."""

import sys
import threading
import types
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from doctalk.asr import ASRRegistry, FasterWhisperASR
from doctalk.config import ASRConfig
from doctalk.core import ASRError, DownloadCancelledError, ModelNotInitializedError


@pytest.fixture
def asr_config():
    return ASRConfig(model_size="tiny", device="cpu")


@pytest.fixture
def fake_whisper():
    """Stand-ins for the faster_whisper package and its utils module."""
    model = MagicMock()
    segments = [
        SimpleNamespace(text=" Hello", start=0.0, end=1.0),
        SimpleNamespace(text=" world.", start=1.0, end=2.0),
    ]
    model.transcribe.return_value = (iter(segments), SimpleNamespace(language="en", language_probability=0.98))

    package = types.ModuleType("faster_whisper")
    package.WhisperModel = MagicMock(return_value=model)
    utils = types.ModuleType("faster_whisper.utils")

    def download_model(size, output_dir):
        (Path(output_dir) / "model.bin").write_bytes(b"weights")
        return output_dir

    utils.download_model = MagicMock(side_effect=download_model)
    package.utils = utils

    with patch.dict(sys.modules, {"faster_whisper": package, "faster_whisper.utils": utils}):
        yield package


def install_weights(asr):
    asr.model_path.mkdir(parents=True)
    (asr.model_path / "model.bin").write_bytes(b"weights")


class TestFasterWhisperASR:
    def test_created_from_registry(self, asr_config, tmp_path):
        asr = ASRRegistry.create("faster-whisper", config=asr_config, model_dir=tmp_path)

        assert isinstance(asr, FasterWhisperASR)
        assert asr.model_path == tmp_path / "faster-whisper-tiny"

    def test_model_availability(self, asr_config, tmp_path):
        asr = FasterWhisperASR(asr_config, tmp_path)
        assert not asr.is_model_available

        install_weights(asr)

        assert asr.is_model_available

    def test_download_model(self, asr_config, tmp_path, fake_whisper):
        asr = FasterWhisperASR(asr_config, tmp_path)

        path = asr.download_model()

        assert path == asr.model_path
        assert asr.is_model_available
        fake_whisper.utils.download_model.assert_called_once_with("tiny", output_dir=str(asr.model_path))

    def test_download_skipped_when_present(self, asr_config, tmp_path, fake_whisper):
        asr = FasterWhisperASR(asr_config, tmp_path)
        install_weights(asr)

        asr.download_model()

        fake_whisper.utils.download_model.assert_not_called()

    def test_download_cancelled(self, asr_config, tmp_path, fake_whisper):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(DownloadCancelledError):
            FasterWhisperASR(asr_config, tmp_path).download_model(cancel)

    def test_load_without_weights(self, asr_config, tmp_path):
        with pytest.raises(ModelNotInitializedError):
            FasterWhisperASR(asr_config, tmp_path).load()

    def test_transcribe_stream(self, asr_config, tmp_path, fake_whisper):
        asr = FasterWhisperASR(asr_config, tmp_path)
        install_weights(asr)
        audio = tmp_path / "a.wav"
        audio.write_bytes(b"RIFF")

        segments = list(asr.transcribe_stream(audio))

        assert [s.text for s in segments] == [" Hello", " world."]
        assert segments[1].start == 1.0
        assert segments[0].language == "en"
        fake_whisper.WhisperModel.assert_called_once_with(
            str(asr.model_path), device="cpu", compute_type="int8"
        )

    def test_missing_audio(self, asr_config, tmp_path, fake_whisper):
        asr = FasterWhisperASR(asr_config, tmp_path)
        install_weights(asr)

        with pytest.raises(ASRError, match="not found"):
            asr.transcribe_stream(tmp_path / "missing.wav")

    def test_unload(self, asr_config, tmp_path, fake_whisper):
        asr = FasterWhisperASR(asr_config, tmp_path)
        install_weights(asr)
        asr.load()

        asr.unload()

        assert not asr.is_loaded
