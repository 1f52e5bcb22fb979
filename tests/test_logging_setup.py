"""Tests for the logging bootstrap."""

import logging

import chit_parse.io.logging_setup as logging_setup


def chit_logger():
    return logging.getLogger(logging_setup.LOGGER_NAME)


# ─── Handler wiring ──────────────────────────────────────────────────────────


def test_configure_defaults_to_warning(fresh_logging):
    runtime = logging_setup.configure()
    assert runtime.level_name == "WARNING"
    assert runtime.level == logging.WARNING
    assert runtime.file_path == str(fresh_logging)


def test_no_log_file_unless_requested(fresh_logging, tmp_path, monkeypatch):
    monkeypatch.delenv("CHIT_PARSE_LOG_FILE")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    runtime = logging_setup.configure()
    assert runtime.file_path is None
    assert len(chit_logger().handlers) == 1
    assert not (tmp_path / "home").exists()
    assert not fresh_logging.parent.exists()


def test_log_dir_gives_one_fixed_file(fresh_logging, tmp_path, monkeypatch):
    monkeypatch.delenv("CHIT_PARSE_LOG_FILE")
    monkeypatch.setenv("CHIT_PARSE_LOG_DIR", str(tmp_path / "logs"))
    runtime = logging_setup.configure(session_name="my session")
    assert runtime.file_path == str(tmp_path / "logs" / "my-session.log")
    assert len(chit_logger().handlers) == 2


def test_level_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("CHIT_PARSE_LOG_LEVEL", "debug")
    runtime = logging_setup.configure()
    assert runtime.level_name == "DEBUG"
    assert chit_logger().level == logging.DEBUG


def test_configure_is_idempotent(fresh_logging):
    first = logging_setup.configure()
    second = logging_setup.configure(session_name="other")
    assert first is second
    assert logging_setup.get_runtime() is first
    assert len(chit_logger().handlers) == 2


def test_module_loggers_write_to_file(fresh_logging):
    logging_setup.configure()
    logging.getLogger("chit_parse.cli").warning("parse failed path=%s", "x.txt")
    for handler in chit_logger().handlers:
        handler.flush()
    assert "parse failed path=x.txt" in fresh_logging.read_text(encoding="utf-8")


def test_logger_does_not_propagate(fresh_logging):
    logging_setup.configure()
    assert chit_logger().propagate is False


# ─── Helpers ─────────────────────────────────────────────────────────────────


def test_unknown_level_falls_back_to_warning():
    assert logging_setup._parse_level("bogus") == ("WARNING", logging.WARNING)
    assert logging_setup._parse_level("") == ("WARNING", logging.WARNING)
    assert logging_setup._parse_level(" info ") == ("INFO", logging.INFO)


def test_safe_name():
    assert logging_setup._safe_name("my session/1") == "my-session-1"
    assert logging_setup._safe_name("///") == "run"


def test_explicit_file_wins_over_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("CHIT_PARSE_LOG_FILE", str(tmp_path / "a.log"))
    monkeypatch.setenv("CHIT_PARSE_LOG_DIR", str(tmp_path / "logs"))
    assert logging_setup.resolve_log_path("cli") == str(tmp_path / "a.log")
