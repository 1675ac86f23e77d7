"""Tests for logging configuration."""

import io
import logging

import pytest

from pdfbatch.utils.logging import (
    _filter_event_dict,
    create_task_log_path,
    get_logger,
    setup_logging,
    setup_task_logging,
)


class _CapturedStderr:
    """Expose pytest's captured stderr through a ``getvalue()`` interface."""

    def __init__(self, capsys):
        self._capsys = capsys
        self._buffer = io.StringIO()

    def getvalue(self):
        self._buffer.write(self._capsys.readouterr().err)
        return self._buffer.getvalue()


@pytest.fixture
def log_stream(capsys):
    """Route console log output to a buffer.

    pytest swaps ``sys.stderr`` for its capture stream when the test body
    starts, so the console handler is read back through ``capsys``.
    """
    yield _CapturedStderr(capsys)
    logging.getLogger().handlers.clear()


class TestTaskLogging:
    """Tests for per-run log files."""

    def test_create_task_log_path(self, tmp_path):
        """Test unique log file names per run."""
        task_id, log_path = create_task_log_path(tmp_path / ".logs", "convert")

        assert len(task_id) == 8
        assert log_path.parent.exists()
        assert log_path.name.startswith("convert_")
        assert log_path.name.endswith(f"_{task_id}.log")

    def test_file_captures_debug(self, tmp_path, log_stream):
        """Test the log file records DEBUG while the console stays at INFO."""
        _, log_path = setup_task_logging(tmp_path / ".logs", "convert", verbose=False)
        log = get_logger("pdfbatch.test")

        log.debug("Trying rendering method", method="playwright")
        log.info("Converted", file="a.md")

        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        assert "Trying rendering method" in content
        assert "Converted" in content

        console = log_stream.getvalue()
        assert "Converted" in console
        assert "Trying rendering method" not in console

    def test_verbose_console(self, tmp_path, log_stream):
        """Test verbose mode shows DEBUG on the console."""
        setup_task_logging(tmp_path / ".logs", "convert", verbose=True)

        get_logger("pdfbatch.test").debug("Starting chunk", chunk=1)

        assert "Starting chunk" in log_stream.getvalue()

    def test_noisy_loggers_quieted(self, tmp_path, log_stream):  # noqa: ARG002
        """Test HTTP client loggers stay at WARNING even when verbose."""
        setup_task_logging(tmp_path / ".logs", "convert", verbose=True)

        assert logging.getLogger("httpx").level == logging.WARNING


class TestSetupLogging:
    """Tests for handler levels and formatting."""

    def test_file_lines_are_plain(self, tmp_path, log_stream):  # noqa: ARG002
        """Test the log file carries no terminal color codes."""
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(level="INFO", log_file=log_file)

        get_logger("pdfbatch.test").warning("Sources share an output path", output="a.pdf")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "Sources share an output path |" in content
        assert "output=a.pdf" in content
        assert "\x1b[" not in content

    def test_console_level_override(self, log_stream):
        """Test the console handler can be stricter than the root level."""
        setup_logging(level="DEBUG", console_level="WARNING")
        log = get_logger("pdfbatch.test")

        log.info("Converted", file="a.md")
        log.warning("Rendering method failed", method="playwright")

        console = log_stream.getvalue()
        assert "Rendering method failed" in console
        assert "Converted" not in console


class TestFilterEventDict:
    """Tests for the long-value truncation processor."""

    def test_long_strings_truncated(self):
        """Test oversized string values are shortened."""
        event = {"event": "Rendered", "html": "x" * 2000}

        result = _filter_event_dict(None, "info", event)

        assert result["html"].startswith("x" * 500)
        assert "[2000 chars total]" in result["html"]

    def test_binary_replaced(self):
        """Test large binary values are summarized."""
        event = {"event": "Downloaded", "body": b"%PDF" * 300}

        result = _filter_event_dict(None, "info", event)

        assert result["body"] == "[BINARY DATA: 1200 bytes]"
