"""Inline tokenization of a single answer line."""

import re
from dataclasses import dataclass

from .macros import translate
from .models import (
    BoldSpan,
    CodeSpan,
    InlineMathSpan,
    InlineSpan,
    ItalicSpan,
    TextSpan,
)

# Alternatives are tried in order at each position; the first one wins.
_INLINE_RE = re.compile(
    r"\\\((?P<math>.+?)\\\)"
    r"|\*\*(?P<bold>.+?)\*\*"
    r"|\*_(?P<star_italic>.+?)_\*"
    r"|_(?P<italic>.+?)_"
    r"|`(?P<code>.+?)`"
)

_KIND_BY_GROUP = {
    "math": "inline_math",
    "bold": "bold",
    "star_italic": "italic",
    "italic": "italic",
    "code": "code",
}


@dataclass(frozen=True)
class InlineMatch:
    """A matched inline construct and its offsets within the line.

    Attributes:
        kind: "inline_math", "bold", "italic" or "code".
        start: Offset of the opening delimiter.
        end: Offset just past the closing delimiter.
        content: Text between the delimiters.
    """

    kind: str
    start: int
    end: int
    content: str


def scan(line: str) -> list[InlineMatch]:
    """Find inline constructs in `line`, leftmost-first and non-overlapping."""
    matches = []
    for match in _INLINE_RE.finditer(line):
        group = match.lastgroup
        matches.append(
            InlineMatch(
                kind=_KIND_BY_GROUP[group],
                start=match.start(),
                end=match.end(),
                content=match.group(group),
            )
        )
    return matches


def tokenize(line: str) -> list[InlineSpan]:
    """Split one line into typed inline spans.

    Text between matched constructs becomes a TextSpan verbatim. Only inline
    math content is macro-translated.

    Args:
        line: A single line of answer text.

    Returns:
        Spans in source order. A line with no constructs yields one TextSpan.
    """
    spans: list[InlineSpan] = []
    position = 0
    for match in scan(line):
        if match.start > position:
            spans.append(TextSpan(text=line[position : match.start]))
        spans.append(_to_span(match))
        position = match.end
    if position < len(line) or not spans:
        spans.append(TextSpan(text=line[position:]))
    return spans


def _to_span(match: InlineMatch) -> InlineSpan:
    if match.kind == "inline_math":
        return InlineMathSpan(rendered=translate(match.content), source=match.content)
    if match.kind == "bold":
        return BoldSpan(text=match.content)
    if match.kind == "italic":
        return ItalicSpan(text=match.content)
    return CodeSpan(text=match.content)
