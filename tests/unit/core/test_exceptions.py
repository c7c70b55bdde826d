"""Tests for error messages carrying the offending input."""

import pytest

from doctalk.core import (
    DocTalkError,
    DirectoryNotFoundError,
    EmptyResultError,
    NoIngestibleFilesError,
    UnsupportedFormatError,
    ModelNotInitializedError,
    ConversionError,
)


class TestExceptionMessages:
    def test_directory_not_found(self):
        error = DirectoryNotFoundError("/nowhere")
        assert "/nowhere" in str(error)
        assert error.directory == "/nowhere"

    def test_empty_result_lists_extensions(self):
        error = EmptyResultError("No supported files", directory="/tmp/x", extensions=(".pdf", ".txt"))
        assert str(error) == "No supported files (directory=/tmp/x; supported=.pdf, .txt)"

    def test_unsupported_format_derives_extension(self):
        error = UnsupportedFormatError("/tmp/notes.XYZ")
        assert error.extension == ".xyz"
        assert "'.xyz'" in str(error)
        assert "/tmp/notes.XYZ" in str(error)

    def test_model_not_initialized_hint(self):
        error = ModelNotInitializedError("whisper", hint="Download it first")
        assert str(error) == "Model missing: whisper. Download it first"

    def test_conversion_error_includes_stderr(self):
        error = ConversionError("ffmpeg exited with code 1", source="a.mp4", stderr="bad header\n")
        assert str(error) == "ffmpeg exited with code 1 (source=a.mp4)\nbad header"

    @pytest.mark.parametrize("error", [
        DirectoryNotFoundError("x"),
        NoIngestibleFilesError("none"),
        UnsupportedFormatError("a.b"),
    ])
    def test_rooted_at_doctalk_error(self, error):
        assert isinstance(error, DocTalkError)

    def test_no_ingestible_is_empty_result(self):
        assert issubclass(NoIngestibleFilesError, EmptyResultError)
