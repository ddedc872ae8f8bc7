"""Document tree produced by the response formatter."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Inline spans ---


class TextSpan(_Node):
    """Plain text, carried verbatim."""

    type: Literal["text"] = "text"
    text: str

    @property
    def literal(self) -> str:
        return self.text


class BoldSpan(_Node):
    type: Literal["bold"] = "bold"
    text: str

    @property
    def literal(self) -> str:
        return self.text


class ItalicSpan(_Node):
    type: Literal["italic"] = "italic"
    text: str

    @property
    def literal(self) -> str:
        return self.text


class CodeSpan(_Node):
    type: Literal["code"] = "code"
    text: str

    @property
    def literal(self) -> str:
        return self.text


class InlineMathSpan(_Node):
    """Inline math, macro-translated. The untranslated text is kept in `source`."""

    type: Literal["inline_math"] = "inline_math"
    rendered: str
    source: str = ""

    @property
    def literal(self) -> str:
        return self.source


InlineSpan = Annotated[
    Union[TextSpan, BoldSpan, ItalicSpan, CodeSpan, InlineMathSpan],
    Field(discriminator="type"),
]


# --- Blocks ---


class MathBlock(_Node):
    """One display-math line.

    `before` and `after` hold any line text outside the \\[ \\] delimiters.
    """

    type: Literal["math_block"] = "math_block"
    rendered: str
    before: str = ""
    after: str = ""


class BoxedAnswer(_Node):
    """A highlighted final-answer line from a $\\boxed{...}$ construct."""

    type: Literal["boxed_answer"] = "boxed_answer"
    rendered: str
    before: str = ""
    after: str = ""


class Paragraph(_Node):
    """One source line split into inline spans."""

    type: Literal["paragraph"] = "paragraph"
    spans: tuple[InlineSpan, ...] = ()

    def plain_text(self) -> str:
        """Concatenate the literal text of every span, without delimiters."""
        return "".join(span.literal for span in self.spans)


BodyBlock = Annotated[
    Union[MathBlock, BoxedAnswer, Paragraph],
    Field(discriminator="type"),
]


class Header(_Node):
    """A header section. Its body never contains another header."""

    type: Literal["header"] = "header"
    level: Literal[1, 2, 3]
    title: str
    body: tuple[BodyBlock, ...] = ()


Block = Annotated[
    Union[Header, MathBlock, BoxedAnswer, Paragraph],
    Field(discriminator="type"),
]


class Document(_Node):
    """An ordered, immutable sequence of blocks in reading order."""

    blocks: tuple[Block, ...] = ()

    def is_empty(self) -> bool:
        return not self.blocks
