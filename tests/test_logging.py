from __future__ import annotations

import logging
from pathlib import Path

import pytest

from heavy_metals.logging_config import configure_logging


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    configure_logging(log_file)
    logging.getLogger("heavy_metals.test").info("hello file")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")
    configure_logging(None)


def test_configure_logging_streams_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(None)
    logging.getLogger("heavy_metals.test").warning("to stderr")
    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out
    configure_logging(None)
