"""Rich rendering for parsed message segments.

Turns the segment list from core.segmentation into Rich renderables: prose
goes through Markdown (bold/italic/inline-code/line breaks), code goes through
Syntax with the lexer chosen by the segment's language tag.

# [LAW:single-enforcer] Segmentation decisions are made only in core.segmentation.
# Renderers here never re-split or re-classify text.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from io import StringIO

from rich.console import Console, ConsoleRenderable, Group
from rich.markdown import Markdown
from rich.syntax import Syntax

from chit_parse.core.languages import DEFAULT_LANGUAGE
from chit_parse.core.segmentation import CodeSegment, Segment, SegmentKind, parse
from chit_parse.settings import DEFAULT_CODE_THEME

logger = logging.getLogger(__name__)

RENDER_WIDTH = 100


def lexer_for_language(language: str) -> str:
    """Lexer name for a canonical language tag.

    Canonical tags are already Pygments lexer aliases. Unknown names fall back
    to plain text inside rich.syntax.Syntax.
    """
    return language or DEFAULT_LANGUAGE


def highlight(code: str, language: str, *, theme: str = DEFAULT_CODE_THEME) -> Syntax:
    """Syntax-highlighted renderable for one code span."""
    return Syntax(
        code.rstrip("\n"),
        lexer_for_language(language),
        theme=theme,
        background_color="default",
        word_wrap=True,
    )


def _render_segment(segment: Segment, theme: str) -> ConsoleRenderable | None:
    if segment.kind is SegmentKind.CODE:
        assert isinstance(segment, CodeSegment)
        return highlight(segment.code, segment.language, theme=theme)
    if not segment.content.strip():
        return None
    return Markdown(segment.content, code_theme=theme)


def render_segments(
    segments: Sequence[Segment], *, theme: str = DEFAULT_CODE_THEME
) -> Group:
    """Render segments in order as one Rich Group."""
    parts = [
        renderable
        for renderable in (_render_segment(seg, theme) for seg in segments)
        if renderable is not None
    ]
    return Group(*parts)


def render_message(content: str, *, theme: str = DEFAULT_CODE_THEME) -> Group:
    """Parse and render a raw message."""
    segments = parse(content)
    logger.debug(
        "rendering message kinds=%s",
        [seg.kind.value for seg in segments],
    )
    return render_segments(segments, theme=theme)


def export_html(
    segments: Sequence[Segment],
    *,
    theme: str = DEFAULT_CODE_THEME,
    width: int = RENDER_WIDTH,
) -> str:
    """Render segments to a standalone HTML document with inline styles."""
    console = Console(file=StringIO(), record=True, width=width, force_terminal=True)
    console.print(render_segments(segments, theme=theme))
    return console.export_html(inline_styles=True)


def render_to_text(
    renderable: ConsoleRenderable, *, width: int = RENDER_WIDTH, color: bool = False
) -> str:
    """Render to a string, with or without ANSI styling."""
    buf = StringIO()
    console = Console(
        file=buf,
        width=width,
        force_terminal=color,
        color_system="truecolor" if color else None,
    )
    console.print(renderable)
    return buf.getvalue()
