"""Transcription pipeline - Media → Canonical WAV → Transcript sidecar."""

from pathlib import Path

from doctalk.core import BaseASR, UnsupportedFormatError, ModelNotInitializedError
from doctalk.asr import ASRRegistry
from doctalk.audio import AudioConverter
from doctalk.config import DocTalkConfig
from doctalk.workspace.formats import (
    RESAMPLED_MARKER,
    TRANSCRIBABLE_EXTENSIONS,
    TRANSCRIPT_SUFFIX,
    WAVE_SUFFIX,
)
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)


def transcript_path(media_file: Path) -> Path:
    """Sidecar text file of a media file ("talk.mp3" -> "talk.txt").

    A resampled copy shares the sidecar of its source
    ("talk.16k.wav" -> "talk.txt").
    """
    media_file = Path(media_file)
    stem = media_file.stem
    if media_file.suffix.lower() == WAVE_SUFFIX and stem.endswith(RESAMPLED_MARKER):
        stem = stem[: -len(RESAMPLED_MARKER)]
    return media_file.with_name(f"{stem}{TRANSCRIPT_SUFFIX}")


class TranscriptionPipeline:
    """Turns audio/video files into cached text sidecars.

    The sidecar is both the output and the cache: a non-empty sidecar means
    the file is never sent to the recognizer again.
    """

    def __init__(
        self,
        config: DocTalkConfig,
        asr: BaseASR | None = None,
        converter: AudioConverter | None = None,
    ):
        self.config = config
        self._asr = asr
        self.converter = converter or AudioConverter(config.conversion)
        logger.info("TranscriptionPipeline initialized")

    @property
    def asr(self) -> BaseASR:
        """Lazy-create ASR backend."""
        if self._asr is None:
            self._asr = ASRRegistry.create(
                self.config.asr.backend,
                config=self.config.asr,
                model_dir=self.config.models.resolve_model_dir(),
            )
        return self._asr

    @timed
    def ensure_transcript(self, media_file: Path | str) -> Path:
        """Return the transcript of a media file, transcribing only if missing.

        Segments are appended to the sidecar as they arrive; a crash leaves a
        partial file that later runs treat as complete.

        Args:
            media_file: Audio or video file

        Returns:
            Path of the .txt sidecar next to the media file

        Raises:
            UnsupportedFormatError: If the extension is not transcribable
            ModelNotInitializedError: If the recognizer model is not downloaded
            ConversionError: If audio extraction fails
        """
        media_file = Path(media_file)
        if media_file.suffix.lower() not in TRANSCRIBABLE_EXTENSIONS:
            raise UnsupportedFormatError(media_file)

        sidecar = transcript_path(media_file)
        if sidecar.is_file() and sidecar.stat().st_size > 0:
            logger.info(f"Transcript cached: {sidecar.name}")
            return sidecar

        if not self.asr.is_model_available:
            raise ModelNotInitializedError(
                f"{self.config.asr.backend}/{self.config.asr.model_size}",
                hint="Download the speech recognition model before transcribing",
            )

        audio = self.converter.prepare(media_file)

        logger.info(f"Transcribing {audio.name} -> {sidecar.name}")
        with open(sidecar, "w", encoding="utf-8") as f:
            for segment in self.asr.transcribe_stream(audio):
                f.write(segment.text)
                f.flush()

        return sidecar

    def transcribe_all(self, media_files: list[Path]) -> list[Path]:
        """Transcribe files one after the other, in order."""
        return [self.ensure_transcript(path) for path in media_files]
