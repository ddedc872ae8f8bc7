"""LaTeX macro to Unicode translation for model answers.

Rewrites run in a fixed order: symbols, fractions, exponents, subscripts,
square roots, n-th roots, then text wrappers. Each step works on the output
of the previous one. Anything that fails to match, such as a group with a
missing closing brace, is left in place as literal text.
"""

import re
from types import MappingProxyType
from typing import Callable

SYMBOLS = MappingProxyType(
    {
        # Greek, lowercase
        "alpha": "α",
        "beta": "β",
        "gamma": "γ",
        "delta": "δ",
        "epsilon": "ε",
        "varepsilon": "ε",
        "zeta": "ζ",
        "eta": "η",
        "theta": "θ",
        "iota": "ι",
        "kappa": "κ",
        "lambda": "λ",
        "mu": "μ",
        "nu": "ν",
        "xi": "ξ",
        "pi": "π",
        "rho": "ρ",
        "sigma": "σ",
        "tau": "τ",
        "upsilon": "υ",
        "phi": "φ",
        "varphi": "φ",
        "chi": "χ",
        "psi": "ψ",
        "omega": "ω",
        # Greek, uppercase
        "Gamma": "Γ",
        "Delta": "Δ",
        "Theta": "Θ",
        "Lambda": "Λ",
        "Pi": "Π",
        "Sigma": "Σ",
        "Phi": "Φ",
        "Psi": "Ψ",
        "Omega": "Ω",
        # Operators and relations
        "times": "×",
        "cdot": "·",
        "div": "÷",
        "pm": "±",
        "mp": "∓",
        "infty": "∞",
        "approx": "≈",
        "neq": "≠",
        "leq": "≤",
        "geq": "≥",
        "equiv": "≡",
        "propto": "∝",
        "partial": "∂",
        "nabla": "∇",
        "sum": "∑",
        "prod": "∏",
        "int": "∫",
        "circ": "∘",
        "degree": "°",
        "to": "→",
        "rightarrow": "→",
        "leftarrow": "←",
        # Sets and logic
        "in": "∈",
        "notin": "∉",
        "subset": "⊂",
        "subseteq": "⊆",
        "cup": "∪",
        "cap": "∩",
        "emptyset": "∅",
        "forall": "∀",
        "exists": "∃",
        "neg": "¬",
        "land": "∧",
        "lor": "∨",
        "Rightarrow": "⇒",
        "Leftarrow": "⇐",
        "Leftrightarrow": "⇔",
        "therefore": "∴",
    }
)

FRACTION_MACROS = ("frac", "dfrac", "tfrac")
TEXT_MACROS = ("text", "mathrm", "mathbf", "operatorname")

SUPERSCRIPT_BRACKETS = ("⁽", "⁾")
SUBSCRIPT_BRACKETS = ("₍", "₎")

_MACRO_RE = re.compile(r"\\([A-Za-z]+)")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

# Characters that end a bare script base when scanning backwards
_BASE_STOP = set("^_{}()[]")

_PAIRS = {"{": "}", "(": ")", "[": "]"}
_REVERSE_PAIRS = {close: open_ for open_, close in _PAIRS.items()}

# Groups nested deeper than this are left as literal text
MAX_NESTING = 64

# Argument groups taken along when a rewritable macro is used as a script
_SCRIPT_MACRO_ARITY = {
    **{name: 2 for name in FRACTION_MACROS},
    **{name: 1 for name in TEXT_MACROS},
    "sqrt": 1,
}

# handler(text, index just past the macro name, depth) -> (replacement, end) or None
_MacroHandler = Callable[[str, int, int], "tuple[str, int] | None"]


def translate(text: str) -> str:
    """Convert LaTeX-style macros in `text` into readable Unicode.

    Args:
        text: A fragment of math text, e.g. the content of \\( \\).

    Returns:
        The translated text. Malformed macros, and anything nested more than
        MAX_NESTING groups deep, are returned verbatim.
    """
    return _translate(text, 0)


def _translate(text: str, depth: int) -> str:
    if not text or depth >= MAX_NESTING:
        return text
    text = _replace_symbols(text)
    text = _rewrite_macro(text, FRACTION_MACROS, _fraction, depth)
    text = _rewrite_scripts(text, "^", SUPERSCRIPT_BRACKETS, depth)
    text = _rewrite_scripts(text, "_", SUBSCRIPT_BRACKETS, depth)
    text = _rewrite_macro(text, ("sqrt",), _square_root, depth)
    text = _rewrite_macro(text, ("sqrt",), _nth_root, depth)
    text = _rewrite_macro(text, TEXT_MACROS, _text_wrapper, depth)
    return text


def _replace_symbols(text: str) -> str:
    def replace(match: re.Match) -> str:
        return SYMBOLS.get(match.group(1), match.group(0))

    return _MACRO_RE.sub(replace, text)


# --- Group matching ---


def _match_forward(text: str, start: int) -> int | None:
    """Return the index just past the group opening at `start`, if balanced."""
    open_ = text[start]
    close = _PAIRS[open_]
    depth = 0
    for i in range(start, len(text)):
        if text[i] == open_:
            depth += 1
        elif text[i] == close:
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def _match_backward(text: str, end: int, floor: int) -> int | None:
    """Return the start of the group closing at `end - 1`, not below `floor`."""
    close = text[end - 1]
    open_ = _REVERSE_PAIRS[close]
    depth = 0
    for i in range(end - 1, floor - 1, -1):
        if text[i] == close:
            depth += 1
        elif text[i] == open_:
            depth -= 1
            if depth == 0:
                return i
    return None


def _group(text: str, start: int, open_: str = "{") -> tuple[str, int] | None:
    """Read a balanced group at `start`. Returns (inner text, end index)."""
    if start >= len(text) or text[start] != open_:
        return None
    end = _match_forward(text, start)
    if end is None:
        return None
    return text[start + 1 : end - 1], end


# --- Named macros: \frac, \sqrt, \text ---


def _rewrite_macro(
    text: str, names: tuple[str, ...], handler: _MacroHandler, depth: int
) -> str:
    """Apply `handler` to every \\name occurrence, left to right."""
    out = []
    last = 0
    for match in _MACRO_RE.finditer(text):
        if match.start() < last or match.group(1) not in names:
            continue
        result = handler(text, match.end(), depth)
        if result is None:
            continue
        replacement, end = result
        out.append(text[last : match.start()])
        out.append(replacement)
        last = end
    out.append(text[last:])
    return "".join(out)


def _fraction(text: str, pos: int, depth: int) -> tuple[str, int] | None:
    numerator = _group(text, pos)
    if numerator is None:
        return None
    denominator = _group(text, numerator[1])
    if denominator is None:
        return None
    inner = depth + 1
    return (
        f"({_translate(numerator[0], inner)}/{_translate(denominator[0], inner)})",
        denominator[1],
    )


def _square_root(text: str, pos: int, depth: int) -> tuple[str, int] | None:
    radicand = _group(text, pos)
    if radicand is None:
        return None
    return f"√({_translate(radicand[0], depth + 1)})", radicand[1]


def _nth_root(text: str, pos: int, depth: int) -> tuple[str, int] | None:
    index = _group(text, pos, "[")
    if index is None:
        return None
    radicand = _group(text, index[1])
    if radicand is None:
        return None
    inner = depth + 1
    return (
        f"√[{_translate(index[0], inner)}]({_translate(radicand[0], inner)})",
        radicand[1],
    )


def _text_wrapper(text: str, pos: int, depth: int) -> tuple[str, int] | None:
    inner = _group(text, pos)
    if inner is None:
        return None
    return _translate(inner[0], depth + 1), inner[1]


# --- Exponents and subscripts ---


def _rewrite_scripts(
    text: str, marker: str, brackets: tuple[str, str], depth: int
) -> str:
    """Rewrite every base<marker>script in one left-to-right pass.

    A base never reaches back into text rewritten earlier in the same pass.
    """
    open_, close = brackets
    inner = depth + 1
    out = []
    last = 0
    pos = text.find(marker)
    while pos != -1:
        base_start = _base_start(text, pos, last)
        script = _script(text, pos + 1)
        if base_start is None or script is None:
            pos = text.find(marker, pos + 1)
            continue
        script_text, end = script
        base = text[base_start:pos]
        if base.startswith("{") and _match_forward(base, 0) == len(base):
            base = base[1:-1]
        out.append(text[last:base_start])
        out.append(
            f"{_translate(base, inner)}{open_}{_translate(script_text, inner)}{close}"
        )
        last = end
        pos = text.find(marker, end)
    out.append(text[last:])
    return "".join(out)


def _base_start(text: str, pos: int, floor: int) -> int | None:
    """Find where the base ending just before `pos` begins.

    A group that is itself the script of an earlier ^ or _ (as in x_{n+1}^2)
    is not a base on its own; the base then spans the whole scripted atom.
    """
    if pos <= floor:
        return None
    while True:
        start = _atom_start(text, pos, floor)
        if start is None:
            return None
        if (
            text[pos - 1] in _REVERSE_PAIRS
            and start > floor
            and text[start - 1] in "^_"
            and start - 1 > floor
        ):
            pos = start - 1
            continue
        return start


def _atom_start(text: str, pos: int, floor: int) -> int | None:
    prev = text[pos - 1]
    if prev in _REVERSE_PAIRS:
        start = _match_backward(text, pos, floor)
        if start is None:
            return None
        return _extend_to_macro(text, start, floor)
    start = pos
    while start > floor and not text[start - 1].isspace() and text[start - 1] not in _BASE_STOP:
        start -= 1
    if start == pos:
        return None
    return start


def _extend_to_macro(text: str, start: int, floor: int) -> int:
    """Pull a group start back over an attached macro such as \\sqrt[3]."""
    if text[start] == "{" and start > floor and text[start - 1] == "]":
        bracket = _match_backward(text, start, floor)
        if bracket is not None:
            macro = _macro_before(text, bracket, floor)
            if macro is not None:
                return macro
    macro = _macro_before(text, start, floor)
    return start if macro is None else macro


def _macro_before(text: str, pos: int, floor: int) -> int | None:
    start = pos
    while start > floor and text[start - 1].isalpha() and text[start - 1].isascii():
        start -= 1
    if start < pos and start > floor and text[start - 1] == "\\":
        return start - 1
    return None


def _script(text: str, pos: int) -> tuple[str, int] | None:
    """Read the exponent or subscript operand starting at `pos`."""
    if pos >= len(text):
        return None
    if text[pos] == "{":
        return _group(text, pos)
    number = _NUMBER_RE.match(text, pos)
    if number:
        return number.group(0), number.end()
    macro = _MACRO_RE.match(text, pos)
    if macro:
        return _macro_script(text, macro)
    char = text[pos]
    if char.isspace() or char in _BASE_STOP:
        return None
    return char, pos + 1


def _macro_script(text: str, macro: re.Match) -> tuple[str, int] | None:
    """Take a macro script together with the groups a later step rewrites."""
    arity = _SCRIPT_MACRO_ARITY.get(macro.group(1), 0)
    end = macro.end()
    if arity and macro.group(1) == "sqrt" and end < len(text) and text[end] == "[":
        index = _group(text, end, "[")
        if index is None:
            return None
        end = index[1]
    for _ in range(arity):
        group = _group(text, end)
        if group is None:
            return None
        end = group[1]
    return text[macro.start() : end], end
