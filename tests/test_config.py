"""Behavior tests for logging configuration."""

import logging
from pathlib import Path

import pytest

import config


def test_configure_logging_uses_stream_and_optional_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """A log file adds a file handler next to the terminal handler."""
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.configure_logging(logging.DEBUG)
    config.configure_logging(log_file=str(tmp_path / "elrc.log"))

    assert calls[0]["level"] == logging.DEBUG
    assert calls[0]["format"] == config.LOG_FORMAT
    assert [type(h) for h in calls[0]["handlers"]] == [logging.StreamHandler]
    assert [type(h) for h in calls[1]["handlers"]] == [logging.StreamHandler, logging.FileHandler]
    calls[1]["handlers"][1].close()
