"""CLI entry point for chit-parse."""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

import chit_parse.io.logging_setup
import chit_parse.rendering
import chit_parse.settings
from chit_parse.core.code_heuristic import code_score, is_conversational, looks_like_code
from chit_parse.core.language_detect import detect, language_scores
from chit_parse.core.languages import DEFAULT_LANGUAGE, language_for_filename
from chit_parse.core.preview import message_preview
from chit_parse.core.segmentation import FENCE_RE, CodeSegment, parse, segments_to_dicts

logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {raw}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chit-parse",
        description="Split a chat message into prose and code segments",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Message file to read (default: - for stdin)",
    )
    parser.add_argument(
        "--format",
        choices=("rich", "json", "html"),
        default="rich",
        help="Output format (default: rich)",
    )
    parser.add_argument(
        "--theme",
        type=str,
        default=None,
        help="Highlighter theme for code segments (default: saved setting or monokai)",
    )
    parser.add_argument(
        "--detect",
        action="store_true",
        default=False,
        help="Print only the detected language of the whole message",
    )
    parser.add_argument(
        "--scores",
        action="store_true",
        default=False,
        help="Print per-language scores and the code score, then exit",
    )
    parser.add_argument(
        "--preview",
        nargs="?",
        const=0,  # bare --preview: saved preview length
        type=_positive_int,
        default=None,
        help="Print a one-line preview (optional max length; default: saved setting)",
    )
    parser.add_argument(
        "--trust-extension",
        action="store_true",
        default=False,
        help="Treat a fence-free source file as code in the language of its extension",
    )
    parser.add_argument(
        "--save-theme",
        type=str,
        default=None,
        metavar="THEME",
        help="Persist the default highlighter theme and exit",
    )
    return parser


def read_message(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def segments_for(content: str, path: str, trust_extension: bool) -> list:
    """Parse content; optionally let a source-file extension name the language."""
    if trust_extension and path != "-" and not FENCE_RE.search(content):
        language = language_for_filename(path)
        if language != DEFAULT_LANGUAGE:
            logger.info("using extension language=%s path=%s", language, path)
            return [CodeSegment(content, language)]
    return parse(content)


def _print_scores(console: Console, content: str) -> None:
    table = Table(title="language scores")
    table.add_column("language")
    table.add_column("score", justify="right")
    for tag, score in language_scores(content):
        table.add_row(tag, str(score))
    console.print(table)
    console.print(f"code score: {code_score(content)}")
    console.print(f"conversational: {is_conversational(content)}")
    console.print(f"looks like code: {looks_like_code(content)}")
    console.print(f"detected: {detect(content)}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = chit_parse.io.logging_setup.configure(session_name="cli")
    logger.info(
        "logging configured level=%s file=%s",
        log_runtime.level_name,
        log_runtime.file_path,
    )

    if args.save_theme is not None:
        chit_parse.settings.save_code_theme(args.save_theme)
        print(f"Saved theme: {args.save_theme}")
        return 0

    try:
        content = read_message(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("failed to read message path=%s error=%s", args.path, exc)
        return 1

    console = Console()

    if args.scores:
        _print_scores(console, content)
        return 0

    if args.detect:
        print(detect(content))
        return 0

    if args.preview is not None:
        length = args.preview or chit_parse.settings.load_preview_length()
        print(message_preview(content, length))
        return 0

    theme = args.theme or chit_parse.settings.load_code_theme()
    segments = segments_for(content, args.path, args.trust_extension)
    logger.debug("parsed segments count=%d", len(segments))

    if args.format == "json":
        print(json.dumps(segments_to_dicts(segments), indent=2, ensure_ascii=False))
    elif args.format == "html":
        print(chit_parse.rendering.export_html(segments, theme=theme))
    else:
        console.print(chit_parse.rendering.render_segments(segments, theme=theme))
    return 0


if __name__ == "__main__":
    sys.exit(main())
