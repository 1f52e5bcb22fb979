"""Segment a raw chat message into typed Text / Code segments for rendering.

Two paths, decided once per message:
- explicit: the message contains ``` fences. Fence bodies become CodeSegments
  (language from the fence tag), the gaps between them become TextSegments.
  The code heuristic is never consulted on this path.
- implicit: no fences. The whole message is one CodeSegment when
  looks_like_code() says so, otherwise one TextSegment.

// [LAW:dataflow-not-control-flow] parse() is a pure function: text in, segments out.
// [LAW:one-source-of-truth] All message segmentation logic lives here; renderers
//   (web, webview, terminal) consume the result and never re-split text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from chit_parse.core.code_heuristic import looks_like_code
from chit_parse.core.language_detect import detect
from chit_parse.core.languages import DEFAULT_LANGUAGE, resolve_language


# ─── Data model ──────────────────────────────────────────────────────────────


class SegmentKind(Enum):
    TEXT = "text"
    CODE = "code"


@dataclass(frozen=True)
class TextSegment:
    content: str
    kind: SegmentKind = field(default=SegmentKind.TEXT, init=False)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "content": self.content}


@dataclass(frozen=True)
class CodeSegment:
    code: str
    language: str = DEFAULT_LANGUAGE
    kind: SegmentKind = field(default=SegmentKind.CODE, init=False)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "language": self.language, "code": self.code}


Segment = TextSegment | CodeSegment


# ─── Regex patterns ──────────────────────────────────────────────────────────

# ```tag\n body ```: the tag only counts when it is a bare word alone on the
# opener line (or directly closed). Otherwise the opener text stays in the body.
FENCE_RE = re.compile(r"```(?:(\w+)(?=\r?\n|```))?(?:\r?\n)?(.*?)```", re.DOTALL)


# ─── Segmentation ────────────────────────────────────────────────────────────


def _text_between(content: str, start: int, end: int) -> TextSegment | None:
    text = content[start:end].strip()
    return TextSegment(text) if text else None


def parse(content: str) -> list[Segment]:
    """Split a message into Text/Code segments. Never raises.

    Empty input yields a single empty TextSegment.
    """
    segments: list[Segment] = []
    pos = 0
    found_fence = False

    for m in FENCE_RE.finditer(content):
        found_fence = True
        gap = _text_between(content, pos, m.start())
        if gap is not None:
            segments.append(gap)
        segments.append(CodeSegment(m.group(2), resolve_language(m.group(1))))
        pos = m.end()

    if found_fence:
        tail = _text_between(content, pos, len(content))
        if tail is not None:
            segments.append(tail)
        return segments

    if looks_like_code(content):
        return [CodeSegment(content, detect(content))]
    return [TextSegment(content)]


def is_code_message(content: str) -> bool:
    """True when the whole message renders as a single code block."""
    segments = parse(content)
    return len(segments) == 1 and segments[0].kind is SegmentKind.CODE


def segments_to_dicts(segments: list[Segment]) -> list[dict[str, str]]:
    """JSON-ready form: ``{kind, content}`` / ``{kind, language, code}``."""
    return [seg.to_dict() for seg in segments]
