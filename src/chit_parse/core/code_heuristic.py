"""Decide whether an unfenced chat message is source code at all.

Runs before language detection: only text that passes looks_like_code()
is handed to language_detect.detect().

Pure computation module with no I/O and no state.
"""

from __future__ import annotations

import re

from chit_parse.core.language_detect import PATTERN_SETS, count_matches

MIN_CODE_LENGTH = 10
CODE_SCORE_THRESHOLD = 2


# ─── Conversational short-circuit ────────────────────────────────────────────

# Any match on the stripped text means "chat, not code", regardless of score.
NOT_CODE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"^(hi|hello|hey|thanks|ok|yes|no|sure|okay|please|sorry|thank you|bye|goodbye)[\s!?.]*$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(what|how|why|when|where|who|can|could|would|should|is|are|do|does|did|have|has|had)[^{};=<>]*\?$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(I|you|we|they|he|she|it)\s+(am|is|are|was|were|will|would|can|could|should|have|has|had)\s+[^{};=<>]*$",
        re.IGNORECASE,
    ),
    # Short ASCII-only lines. Accented prose goes on to scoring.
    re.compile(r"^[\w\s,.'!?-]{1,50}$", re.ASCII),
)

ALL_CODE_PATTERNS = tuple(p for _, patterns in PATTERN_SETS for p in patterns)


# ─── Structural bonuses ──────────────────────────────────────────────────────

_INDENTED_LINE_RE = re.compile(r"\n[ \t]{2,}")
_BRACE_RE = re.compile(r"[{}]")
_STATEMENT_END_RE = re.compile(r";\s*(\n|$)")
_PAREN_GROUP_RE = re.compile(r"\([^)]*\)")
_OPERATOR_RE = re.compile(r"[=!<>]=|&&|\|\|")


def _structural_bonus(text: str) -> int:
    multiline = "\n" in text
    bonus = 0
    if _INDENTED_LINE_RE.search(text):
        bonus += 3
    if multiline and _BRACE_RE.search(text):
        bonus += 2
    if _STATEMENT_END_RE.search(text):
        bonus += 1
    if _OPERATOR_RE.search(text):
        bonus += 1
    if multiline and _PAREN_GROUP_RE.search(text):
        bonus += 1
    return bonus


def is_conversational(text: str) -> bool:
    """True when the stripped text matches a chat-only pattern."""
    stripped = text.strip()
    return any(pattern.search(stripped) for pattern in NOT_CODE_PATTERNS)


def code_score(text: str) -> int:
    """Raw code-likeness: pattern hits over every language plus structure bonuses."""
    return count_matches(text, ALL_CODE_PATTERNS) + _structural_bonus(text)


def looks_like_code(text: str) -> bool:
    """Heuristic gate: is this unfenced message source code?"""
    if len(text) < MIN_CODE_LENGTH:
        return False
    if is_conversational(text):
        return False
    return code_score(text) >= CODE_SCORE_THRESHOLD
