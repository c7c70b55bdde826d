"""Speech recognition with faster-whisper (CTranslate2 Whisper models)."""

import threading
from pathlib import Path
from typing import Iterator

from doctalk.asr.base import ASRRegistry
from doctalk.core import (
    BaseASR,
    TranscriptSegment,
    ASRError,
    DownloadCancelledError,
    ModelNotInitializedError,
)
from doctalk.config import ASRConfig
from doctalk.utils import get_logger, timed, require_loaded, resolve_device, release_memory

logger = get_logger(__name__)

# Present in every converted model directory
MODEL_WEIGHTS_FILE = "model.bin"


@ASRRegistry.register("faster-whisper")
class FasterWhisperASR(BaseASR):
    """Transcribes canonical WAV files with a local Whisper model.

    Weights live in "<model_dir>/faster-whisper-<size>" and are fetched once
    with `download_model()`; `load()` never downloads.
    """

    def __init__(self, config: ASRConfig, model_dir: Path):
        self.config = config
        self.model_path = Path(model_dir) / f"faster-whisper-{config.model_size}"
        self.device = resolve_device(config.device)
        self._model = None

    @property
    def is_model_available(self) -> bool:
        return (self.model_path / MODEL_WEIGHTS_FILE).is_file()

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    @timed
    def download_model(self, cancel_event: threading.Event | None = None) -> Path:
        """Fetch the weights from the Hugging Face hub unless already present.

        The hub transfer itself cannot be interrupted; cancel_event is only
        honoured before it starts.
        """
        if self.is_model_available:
            return self.model_path

        if cancel_event is not None and cancel_event.is_set():
            raise DownloadCancelledError(f"whisper/{self.config.model_size}")

        from faster_whisper.utils import download_model

        logger.info(f"Downloading Whisper {self.config.model_size} into {self.model_path}")
        self.model_path.mkdir(parents=True, exist_ok=True)
        download_model(self.config.model_size, output_dir=str(self.model_path))
        return self.model_path

    def load(self) -> None:
        if self._model is not None:
            return

        if not self.is_model_available:
            raise ModelNotInitializedError(
                str(self.model_path),
                hint="Call download_model() before transcribing",
            )

        try:
            from faster_whisper import WhisperModel

            self._model = WhisperModel(
                str(self.model_path),
                device=self.device,
                compute_type=self.config.compute_type,
            )
        except Exception as e:
            raise ASRError(f"Cannot load Whisper from {self.model_path}: {e}") from e

        logger.info(f"Whisper {self.config.model_size} loaded on {self.device} ({self.config.compute_type})")

    def unload(self) -> None:
        if self._model is None:
            return
        self._model = None
        release_memory()
        logger.info("Whisper unloaded")

    @require_loaded
    def transcribe_stream(
        self, audio_path: Path, language: str | None = None
    ) -> Iterator[TranscriptSegment]:
        """Transcribe lazily; decoding advances as segments are consumed.

        Args:
            audio_path: Mono 16 kHz PCM WAV
            language: Language code, None for the configured one (or detection)

        Returns:
            Single-pass iterator of segments in time order
        """
        audio_path = Path(audio_path)
        if not audio_path.is_file():
            raise ASRError(f"Audio file not found: {audio_path}")

        return self._decode(audio_path, language or self.config.language)

    def _decode(self, audio_path: Path, language: str | None) -> Iterator[TranscriptSegment]:
        try:
            segments, info = self._model.transcribe(
                str(audio_path),
                language=language,
                vad_filter=self.config.vad_filter,
                vad_parameters={"threshold": self.config.vad_threshold},
            )
            logger.info(
                f"{audio_path.name}: language {info.language} "
                f"(p={info.language_probability:.2f})"
            )

            for segment in segments:
                yield TranscriptSegment(
                    text=segment.text,
                    start=segment.start,
                    end=segment.end,
                    language=info.language,
                )
        except Exception as e:
            raise ASRError(f"Whisper failed on {audio_path.name}: {e}") from e
