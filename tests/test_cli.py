"""Tests for the chit-parse command line."""

import io
import json

import pytest

import chit_parse.io.logging_setup
import chit_parse.settings
from chit_parse.cli import build_parser, main, segments_for
from chit_parse.core.segmentation import CodeSegment, TextSegment


@pytest.fixture
def cli_env(fresh_logging, config_home):
    """Isolate logging and settings for each CLI run."""
    return config_home


@pytest.fixture
def message_file(tmp_path):
    def _write(content, name="message.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.path == "-"
    assert args.format == "rich"
    assert args.preview is None
    assert not args.detect and not args.scores and not args.trust_extension


def test_json_output(cli_env, message_file, capsys):
    path = message_file("intro\n```py\nprint(1)\n```")
    assert main([path, "--format", "json"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"kind": "text", "content": "intro"},
        {"kind": "code", "language": "python", "code": "print(1)\n"},
    ]


def test_rich_output(cli_env, message_file, capsys):
    path = message_file("Run this:\n```py\nprint(1)\n```")
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert "Run this:" in out
    assert "print(1)" in out


def test_html_output(cli_env, message_file, capsys):
    path = message_file("```sql\nSELECT 1;\n```")
    assert main([path, "--format", "html", "--theme", "monokai"]) == 0
    assert "<!DOCTYPE html>" in capsys.readouterr().out


def test_detect(cli_env, message_file, capsys):
    path = message_file("def foo(x):\n    return x + 1")
    assert main([path, "--detect"]) == 0
    assert capsys.readouterr().out.strip() == "python"


def test_detect_from_stdin(cli_env, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("SELECT * FROM users WHERE id = 1;"))
    assert main(["--detect"]) == 0
    assert capsys.readouterr().out.strip() == "sql"


def test_scores(cli_env, message_file, capsys):
    path = message_file("def foo(x):\n    return x + 1")
    assert main([path, "--scores"]) == 0
    out = capsys.readouterr().out
    assert "language scores" in out
    assert "detected: python" in out


def test_preview_with_length(cli_env, message_file, capsys):
    path = message_file("hello world, this is long")
    assert main([path, "--preview", "8"]) == 0
    assert capsys.readouterr().out.strip() == "hello..."


def test_preview_uses_saved_length(cli_env, message_file, capsys):
    chit_parse.settings.save_setting("preview_length", 6)
    path = message_file("**bold** statement")
    assert main([path, "--preview"]) == 0
    assert capsys.readouterr().out.strip() == "bol..."


def test_trust_extension(cli_env, message_file, capsys):
    source = "package main\n\nfunc main() {}\n"
    path = message_file(source, name="main.go")
    assert main([path, "--format", "json", "--trust-extension"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"kind": "code", "language": "go", "code": source},
    ]


def test_trust_extension_ignored_for_fenced_content():
    content = "see\n```js\nlet x = 1;\n```"
    assert segments_for(content, "notes.py", True) == [
        TextSegment("see"),
        CodeSegment("let x = 1;\n", "javascript"),
    ]


def test_trust_extension_ignored_for_unknown_extension():
    assert segments_for("hello there", "notes.txt", True) == [TextSegment("hello there")]


def test_missing_file_returns_error(cli_env, tmp_path):
    assert main([str(tmp_path / "nope.txt")]) == 1


def test_save_theme(cli_env, capsys):
    assert main(["--save-theme", "dracula"]) == 0
    assert capsys.readouterr().out.strip() == "Saved theme: dracula"
    assert chit_parse.settings.load_code_theme() == "dracula"


@pytest.mark.parametrize("raw", ["0", "-3", "abc"])
def test_preview_length_must_be_positive(cli_env, message_file, raw):
    path = message_file("hello there")
    with pytest.raises(SystemExit) as exc:
        main([path, "--preview", raw])
    assert exc.value.code == 2


def test_default_run_writes_no_log_file(cli_env, tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("CHIT_PARSE_LOG_FILE")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr("sys.stdin", io.StringIO("SELECT * FROM users WHERE id = 1;"))
    assert main(["--detect"]) == 0
    assert capsys.readouterr().out.strip() == "sql"
    assert chit_parse.io.logging_setup.get_runtime().file_path is None
    assert not (tmp_path / "home").exists()
    assert list(tmp_path.rglob("*.log")) == []
