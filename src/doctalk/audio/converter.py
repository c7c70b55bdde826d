"""Audio normalization with ffmpeg.

The recognizer consumes mono, 16-bit, 16 kHz PCM WAV. Anything else is
decoded by the ffmpeg executable into a sibling "<stem>.16k.wav" file.
"""

from __future__ import annotations

import os
import subprocess
import wave
from pathlib import Path

from doctalk.config import ConversionConfig
from doctalk.core.exceptions import ConversionError
from doctalk.workspace.formats import RESAMPLED_MARKER, WAVE_SUFFIX
from doctalk.utils import get_logger, timed

logger = get_logger(__name__)

SAMPLE_WIDTH_BYTES = 2  # 16-bit PCM


class AudioConverter:
    """Converts media files to the recognizer's canonical waveform."""

    def __init__(self, config: ConversionConfig | None = None):
        self.config = config or ConversionConfig()

    def is_canonical(self, path: Path) -> bool:
        """Check if a file already is mono/16-bit PCM WAV at the target rate."""
        path = Path(path)
        if path.suffix.lower() != WAVE_SUFFIX or not path.is_file():
            return False

        try:
            with wave.open(str(path), "rb") as wf:
                return (
                    wf.getnchannels() == self.config.channels
                    and wf.getframerate() == self.config.sample_rate
                    and wf.getsampwidth() == SAMPLE_WIDTH_BYTES
                )
        except (wave.Error, EOFError):
            return False

    def target_path(self, source: Path) -> Path:
        """Deterministic sibling path for the converted audio.

        Always the marked name ("talk.mp3" -> "talk.16k.wav"): a plain
        "talk.wav" next to the source belongs to the user and is never
        written or reused.
        """
        source = Path(source)
        return source.with_name(f"{source.stem}{RESAMPLED_MARKER}{WAVE_SUFFIX}")

    def prepare(self, source: Path) -> Path:
        """Return a canonical waveform for the source, converting if needed.

        Args:
            source: Media file (mp3, mp4, wav)

        Returns:
            The source itself when already canonical, otherwise the marked
            sibling (converted now, or reused from an earlier run)

        Raises:
            ConversionError: If ffmpeg is missing or fails
        """
        source = Path(source)
        if self.is_canonical(source):
            logger.debug(f"{source.name} already canonical, skipping conversion")
            return source

        target = self.target_path(source)
        if self.is_canonical(target):
            logger.info(f"Reusing converted audio: {target.name}")
            return target

        return self.convert(source, target)

    @timed
    def convert(self, source: Path, destination: Path) -> Path:
        """Extract and resample the audio track of a media file.

        Output is written to a temporary name and renamed on success, so an
        interrupted conversion never leaves a truncated .wav behind.

        Raises:
            ConversionError: If ffmpeg is missing, times out or exits non-zero
        """
        source = Path(source)
        destination = Path(destination)
        partial = destination.with_name(f"{destination.name}.part")

        cmd = [
            self.config.ffmpeg_binary,
            "-y",
            "-hide_banner",
            "-loglevel", "error",
            "-i", str(source),
            "-vn",
            "-ac", str(self.config.channels),
            "-ar", str(self.config.sample_rate),
            "-sample_fmt", "s16",
            "-f", "wav",
            str(partial),
        ]

        logger.info(f"Converting {source.name} -> {destination.name}")
        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                timeout=self.config.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise ConversionError(
                f"ffmpeg executable not found: {self.config.ffmpeg_binary}",
                source=source,
            ) from e
        except subprocess.TimeoutExpired as e:
            partial.unlink(missing_ok=True)
            raise ConversionError(
                f"ffmpeg timed out after {self.config.timeout_seconds}s",
                source=source,
            ) from e
        except subprocess.CalledProcessError as e:
            partial.unlink(missing_ok=True)
            stderr = e.stderr.decode(errors="ignore") if e.stderr else None
            raise ConversionError(
                f"ffmpeg exited with code {e.returncode}",
                source=source,
                stderr=stderr,
            ) from e

        os.replace(partial, destination)
        return destination
