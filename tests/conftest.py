"""Pytest configuration and shared fixtures for chit-parse tests."""

import logging

import pytest

import chit_parse.io.logging_setup as logging_setup


# ---------------------------------------------------------------------------
# Settings isolation
# ---------------------------------------------------------------------------

@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp dir so settings never touch ~/.config."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture
def fresh_logging(tmp_path, monkeypatch):
    """Reset the configured logging runtime and route the log file into tmp_path."""
    log_file = tmp_path / "logs" / "test.log"
    monkeypatch.setenv("CHIT_PARSE_LOG_FILE", str(log_file))
    monkeypatch.delenv("CHIT_PARSE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CHIT_PARSE_LOG_DIR", raising=False)
    monkeypatch.setattr(logging_setup, "_RUNTIME", None)
    yield log_file
    logger = logging.getLogger(logging_setup.LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
