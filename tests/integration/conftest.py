"""Fixtures for CLI integration tests."""

import logging

import pytest

import ffdiag.cli


@pytest.fixture(autouse=True)
def fresh_cli_logging(monkeypatch):
    """Let every invocation configure logging, then restore the root logger."""
    monkeypatch.setattr(ffdiag.cli, "_logging_configured", False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
