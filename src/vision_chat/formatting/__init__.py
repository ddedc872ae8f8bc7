from .models import (
    Block,
    BodyBlock,
    BoldSpan,
    BoxedAnswer,
    CodeSpan,
    Document,
    Header,
    InlineMathSpan,
    InlineSpan,
    ItalicSpan,
    MathBlock,
    Paragraph,
    TextSpan,
)
from .macros import SYMBOLS, translate
from .inline import InlineMatch, scan, tokenize
from .lines import classify, classify_line
from .segmenter import segment, split_sections

__all__ = [
    # Models
    "Document",
    "Block",
    "BodyBlock",
    "Header",
    "MathBlock",
    "BoxedAnswer",
    "Paragraph",
    "InlineSpan",
    "TextSpan",
    "BoldSpan",
    "ItalicSpan",
    "CodeSpan",
    "InlineMathSpan",
    # Macro translation
    "SYMBOLS",
    "translate",
    # Inline tokenization
    "InlineMatch",
    "scan",
    "tokenize",
    # Line classification
    "classify",
    "classify_line",
    # Segmentation
    "segment",
    "split_sections",
]
