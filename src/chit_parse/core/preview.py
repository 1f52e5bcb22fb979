"""One-line plain-text previews of chat messages for conversation lists."""

from __future__ import annotations

import re

DEFAULT_PREVIEW_LENGTH = 50
ELLIPSIS = "..."

# Applied in order; fenced blocks must go before inline code.
_SUBSTITUTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"```[\s\S]*?```"), "[code]"),
    (re.compile(r"`[^`]+`"), "[code]"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"#+\s"), ""),
    (re.compile(r"\n"), " "),
)


def plain_text(content: str) -> str:
    """Strip markdown decoration and flatten to a single line."""
    plain = content
    for pattern, replacement in _SUBSTITUTIONS:
        plain = pattern.sub(replacement, plain)
    return plain.strip()


def message_preview(content: str, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Plain one-liner, truncated with ``...`` to at most max_length chars."""
    if not content:
        return ""
    plain = plain_text(content)
    if len(plain) <= max_length:
        return plain
    keep = max(max_length - len(ELLIPSIS), 0)
    return plain[:keep] + ELLIPSIS
