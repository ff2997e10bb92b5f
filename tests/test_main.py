"""Tests for the HeartTacToe server entry point."""

import logging

import pytest

from hearttactoe.__main__ import resolve_log_level, setup_logging


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (" warning ", logging.WARNING),
        ("verbose", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_resolve_log_level(name, expected):
    assert resolve_log_level(name) == expected


def test_unknown_log_level_does_not_stop_startup(caplog):
    with caplog.at_level(logging.WARNING, logger="hearttactoe.__main__"):
        setup_logging("verbose")
    assert "Unknown log level" in caplog.text
