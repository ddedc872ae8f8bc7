"""Classification of section body lines into blocks."""

import re

from .inline import tokenize
from .macros import translate
from .models import BodyBlock, BoxedAnswer, MathBlock, Paragraph

MATH_OPEN = "\\["
MATH_CLOSE = "\\]"
BOXED_MARKER = "$\\boxed{"

_BOXED_RE = re.compile(r"\$\\boxed\{(?P<content>.*?)\}\$")


def classify(body_text: str) -> list[BodyBlock]:
    """Turn each non-blank line of `body_text` into a block.

    A line holding both \\[ and \\] is display math. Otherwise, a line
    holding $\\boxed{ is a final answer. Anything else is a paragraph.
    """
    blocks: list[BodyBlock] = []
    for line in body_text.splitlines():
        if not line.strip():
            continue
        blocks.append(classify_line(line))
    return blocks


def classify_line(line: str) -> BodyBlock:
    if MATH_OPEN in line and MATH_CLOSE in line:
        return _math_block(line)
    if BOXED_MARKER in line:
        return _boxed_answer(line)
    return Paragraph(spans=tokenize(line))


def _math_block(line: str) -> MathBlock:
    start = line.index(MATH_OPEN)
    end = line.rfind(MATH_CLOSE)
    if end < start + len(MATH_OPEN):
        # \] before \[: drop both delimiters and treat the rest as the formula
        content = line.replace(MATH_OPEN, "", 1).replace(MATH_CLOSE, "", 1)
        return MathBlock(rendered=translate(content.strip()))
    return MathBlock(
        rendered=translate(line[start + len(MATH_OPEN) : end].strip()),
        before=line[:start].strip(),
        after=line[end + len(MATH_CLOSE) :].strip(),
    )


def _boxed_answer(line: str) -> BoxedAnswer:
    match = _BOXED_RE.search(line)
    if match is None:
        return BoxedAnswer(rendered="", before=line.strip())
    return BoxedAnswer(
        rendered=translate(match.group("content")),
        before=line[: match.start()].strip(),
        after=line[match.end() :].strip(),
    )
