"""Unit tests for CLI interface."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from heic_jpeg.cli import main
from heic_jpeg.errors import ErrorKind
from heic_jpeg.filesystem import FileSystemHandler
from heic_jpeg.logging_config import setup_logging
from heic_jpeg.models import ConversionResult, ConversionStatus


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("heic_jpeg.cli.setup_logging") as mock_setup_logging:
        yield mock_setup_logging


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCLIVersionAndHelp:
    """Test CLI version and help flags."""

    def test_version_flag(self, runner: CliRunner) -> None:
        """Test --version flag displays version information."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "HEIC to JPEG Converter" in result.output
        assert "0.1.0" in result.output

    def test_help_flag(self, runner: CliRunner) -> None:
        """Test --help flag lists the commands."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Convert HEIC/HEIF images to JPEG" in result.output
        for command in ("convert", "config", "stage", "save", "cleanup", "size"):
            assert command in result.output
        assert "--verbose" in result.output

    def test_verbose_flag_reaches_logging(self, runner: CliRunner, quiet_logging) -> None:
        """-v enables verbose logging."""
        runner.invoke(main, ["-v", "config"])
        quiet_logging.assert_called_once_with(level=None, verbose=True, log_file=None)

    def test_log_options_reach_logging(self, runner: CliRunner, quiet_logging) -> None:
        """--log-level and --log-file are passed through to logging setup."""
        result = runner.invoke(main, ["--log-level", "warning", "--log-file", "run.log", "config"])

        assert result.exit_code == 0
        _, kwargs = quiet_logging.call_args
        assert kwargs["level"].upper() == "WARNING"
        assert kwargs["log_file"] == Path("run.log")

    def test_invalid_log_level_rejected(self, runner: CliRunner) -> None:
        """Unknown level names are a usage error."""
        result = runner.invoke(main, ["--log-level", "loud", "config"])
        assert result.exit_code == 2

    def test_log_file_receives_records(self, runner: CliRunner, tmp_path: Path) -> None:
        """--log-file appends log records to the named file."""
        log_file = tmp_path / "logs" / "run.log"
        with patch("heic_jpeg.cli.setup_logging", wraps=setup_logging):
            result = runner.invoke(
                main, ["--log-level", "debug", "--log-file", str(log_file), "config"]
            )

        assert result.exit_code == 0
        assert "Logging configured: level=DEBUG" in log_file.read_text(encoding="utf-8")


class TestConvertCommand:
    """Test the convert command."""

    def test_missing_file_fails(self, runner: CliRunner) -> None:
        """A path that cannot be resolved exits with status 1."""
        result = runner.invoke(main, ["convert", "missing.heic"])

        assert result.exit_code == 1
        assert "Failed" in result.output
        assert "Cannot resolve path" in result.output

    def test_traversal_fails(self, runner: CliRunner) -> None:
        """Traversal attempts are refused."""
        result = runner.invoke(main, ["convert", "../secret.heic"])

        assert result.exit_code == 1
        assert "Path traversal not allowed" in result.output

    def test_invalid_content_fails(self, runner: CliRunner, make_file) -> None:
        """A file without a HEIC signature is rejected."""
        make_file("fake.heic", b"not a heic file at all")
        result = runner.invoke(main, ["convert", "fake.heic"])

        assert result.exit_code == 1
        assert "magic" in result.output

    @patch("heic_jpeg.cli.ConversionOrchestrator")
    def test_success_with_output(
        self, mock_orchestrator: MagicMock, runner: CliRunner, make_file, tmp_path
    ) -> None:
        """--output copies the result and removes the temporary file."""
        converted = make_file("abc_converted.jpg", b"\xff\xd8jpeg")
        mock_instance = MagicMock()
        mock_instance.filesystem = FileSystemHandler(temp_dir=tmp_path)
        mock_instance.convert_single.return_value = ConversionResult(
            input_path="photo.heic",
            output_path=converted,
            status=ConversionStatus.SUCCESS,
            processing_time=0.5,
        )
        mock_orchestrator.return_value = mock_instance

        result = runner.invoke(main, ["convert", "photo.heic", "-o", "final.jpg"])

        assert result.exit_code == 0
        assert "Converted" in result.output
        assert "Saved to" in result.output
        assert (tmp_path / "final.jpg").read_bytes() == b"\xff\xd8jpeg"
        assert not converted.exists()
        mock_instance.convert_single.assert_called_once_with("photo.heic")

    @patch("heic_jpeg.cli.ConversionOrchestrator")
    def test_failure_result_exits_nonzero(
        self, mock_orchestrator: MagicMock, runner: CliRunner
    ) -> None:
        """A FAILED result exits with status 1 and shows the message."""
        mock_orchestrator.return_value.convert_single.return_value = ConversionResult(
            input_path="photo.heic",
            output_path=None,
            status=ConversionStatus.FAILED,
            error_kind=ErrorKind.CONVERSION_FAILED,
            error_message="Conversion failed: sips command failed: x",
        )

        result = runner.invoke(main, ["convert", "photo.heic"])

        assert result.exit_code == 1
        assert "sips command failed" in result.output


class TestBookkeepingCommands:
    """Test config, stage, save, cleanup and size commands."""

    def test_config_shows_defaults(self, runner: CliRunner) -> None:
        """The settings table lists the resolved values."""
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "conversion.jpegQuality" in result.output
        assert "90" in result.output

    def test_config_reflects_environment(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Environment overrides are shown."""
        monkeypatch.setenv("HEIC_JPEG_QUALITY", "42")
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "42" in result.output

    def test_stage(self, runner: CliRunner, make_file, tmp_path, monkeypatch) -> None:
        """stage copies the file into the temporary directory."""
        staging = tmp_path / "staging"
        staging.mkdir()
        monkeypatch.setattr("tempfile.tempdir", str(staging))
        make_file("upload.heic", b"payload")

        result = runner.invoke(main, ["stage", "upload.heic"])

        assert result.exit_code == 0
        staged = list(staging.iterdir())
        assert len(staged) == 1
        assert staged[0].name.endswith("_upload.heic")
        assert staged[0].read_bytes() == b"payload"

    def test_save(self, runner: CliRunner, make_file, tmp_path) -> None:
        """save copies the converted file to the destination."""
        make_file("converted.jpg", b"jpeg")
        result = runner.invoke(main, ["save", "converted.jpg", "out/final.jpg"])

        assert result.exit_code == 0
        assert "Saved to" in result.output
        assert (tmp_path / "out" / "final.jpg").read_bytes() == b"jpeg"

    def test_save_missing_source(self, runner: CliRunner) -> None:
        """Saving a missing file fails."""
        result = runner.invoke(main, ["save", "gone.jpg", "final.jpg"])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_cleanup(self, runner: CliRunner, make_file) -> None:
        """cleanup removes the file."""
        path = make_file("old.jpg", b"jpeg")
        result = runner.invoke(main, ["cleanup", str(path)])

        assert result.exit_code == 0
        assert not path.exists()

    def test_cleanup_absent_file(self, runner: CliRunner) -> None:
        """Cleaning up an absent file succeeds."""
        result = runner.invoke(main, ["cleanup", "never-existed.jpg"])
        assert result.exit_code == 0

    def test_size(self, runner: CliRunner, make_file) -> None:
        """size prints a human-readable size."""
        make_file("photo.jpg", b"x" * 1536)
        result = runner.invoke(main, ["size", "photo.jpg"])

        assert result.exit_code == 0
        assert "1.5 KB" in result.output

    def test_size_missing(self, runner: CliRunner) -> None:
        """size fails for a missing file."""
        result = runner.invoke(main, ["size", Path("nope.jpg").name])

        assert result.exit_code == 1
        assert "File not found" in result.output
