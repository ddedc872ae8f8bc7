"""Header-delimited segmentation of a full model answer."""

import re

from .lines import classify
from .models import Block, Document, Header

# Zero-width split point before every line that starts with 1-3 '#' markers
_SECTION_SPLIT_RE = re.compile(r"^(?=#{1,3}[ \t])", re.MULTILINE)

# Checked deepest first so "### x" is never read as a level-1 header
_HEADER_PATTERNS = (
    (3, re.compile(r"###[ \t]+(?P<title>[^\n]*)")),
    (2, re.compile(r"##[ \t]+(?P<title>[^\n]*)")),
    (1, re.compile(r"#[ \t]+(?P<title>[^\n]*)")),
)


def split_sections(response_text: str) -> list[str]:
    """Split text into sections, each starting at a header line or the text start."""
    return [section for section in _SECTION_SPLIT_RE.split(response_text) if section]


def segment(response_text: str) -> Document:
    """Build the document tree for one model answer.

    Args:
        response_text: The full answer text returned by the vision model.

    Returns:
        A Document with header sections and loose blocks in source order.
    """
    blocks: list[Block] = []
    for section in split_sections(response_text):
        header = _section_header(section)
        if header is not None:
            blocks.append(header)
        else:
            blocks.extend(classify(section))
    return Document(blocks=blocks)


def _section_header(section: str) -> Header | None:
    for level, pattern in _HEADER_PATTERNS:
        match = pattern.match(section)
        if match is None:
            continue
        return Header(
            level=level,
            title=match.group("title").strip(),
            body=classify(section[match.end() :]),
        )
    return None
