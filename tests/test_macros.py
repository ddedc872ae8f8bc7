"""Tests for LaTeX macro translation."""

import pytest

from vision_chat.formatting.macros import MAX_NESTING, SYMBOLS, translate


class TestSymbolTable:
    """Tests for symbol substitution."""

    def test_greek_letter(self):
        """Test a Greek macro followed by an exponent."""
        assert translate("\\pi r^2") == "π r⁽2⁾"

    @pytest.mark.parametrize(
        "macro,glyph",
        [
            ("\\alpha", "α"),
            ("\\omega", "ω"),
            ("\\times", "×"),
            ("\\cdot", "·"),
            ("\\pm", "±"),
            ("\\approx", "≈"),
            ("\\leq", "≤"),
            ("\\geq", "≥"),
            ("\\nabla", "∇"),
            ("\\forall", "∀"),
            ("\\Rightarrow", "⇒"),
        ],
    )
    def test_single_symbols(self, macro, glyph):
        """Test individual table entries."""
        assert translate(macro) == glyph

    def test_whole_name_only(self):
        """Test that \\in does not rewrite part of \\int or \\infty."""
        assert translate("\\int x \\in S, x < \\infty") == "∫ x ∈ S, x < ∞"

    def test_unknown_macro_left_literal(self):
        """Test that macros outside the table pass through."""
        assert translate("\\foo + \\alphax") == "\\foo + \\alphax"

    def test_table_is_read_only(self):
        """Test that the symbol table cannot be modified."""
        with pytest.raises(TypeError):
            SYMBOLS["alpha"] = "a"


class TestFraction:
    """Tests for \\frac rewriting."""

    def test_simple_fraction(self):
        """Test the basic fraction form."""
        assert translate("\\frac{1}{2}") == "(1/2)"

    def test_nested_fraction(self):
        """Test a fraction inside a numerator."""
        assert translate("\\frac{\\frac{1}{2}}{3}") == "((1/2)/3)"

    def test_fraction_with_symbols(self):
        """Test that fraction arguments are translated."""
        assert translate("\\frac{\\pi}{2}") == "(π/2)"

    def test_dfrac_synonym(self):
        """Test that \\dfrac is handled like \\frac."""
        assert translate("\\dfrac{a}{b}") == "(a/b)"

    def test_missing_closing_brace(self):
        """Test that an unbalanced fraction is returned unchanged."""
        assert translate("\\frac{1}{2") == "\\frac{1}{2"

    def test_missing_denominator(self):
        """Test that a fraction without a second group is left alone."""
        assert translate("\\frac{1} x") == "\\frac{1} x"


class TestScripts:
    """Tests for exponent and subscript rewriting."""

    def test_exponent_single_token(self):
        """Test an exponent given as one character."""
        assert translate("e^x") == "e⁽x⁾"

    def test_exponent_number(self):
        """Test that a multi-digit exponent stays together."""
        assert translate("x^10") == "x⁽10⁾"

    def test_negative_exponent(self):
        """Test a signed exponent."""
        assert translate("x^-1") == "x⁽-1⁾"

    def test_exponent_brace_group(self):
        """Test an exponent given as a brace group."""
        assert translate("e^{i\\pi}") == "e⁽iπ⁾"

    def test_nested_exponent(self):
        """Test an exponent inside an exponent."""
        assert translate("e^{x^{2}}") == "e⁽x⁽2⁾⁾"

    def test_subscript(self):
        """Test a subscript."""
        assert translate("a_n") == "a₍n₎"

    def test_subscript_brace_group(self):
        """Test a braced subscript."""
        assert translate("x_{i+1}") == "x₍i+1₎"

    def test_braced_base_is_unwrapped(self):
        """Test that a brace-group base loses its braces."""
        assert translate("{a+b}^2") == "a+b⁽2⁾"

    def test_parenthesized_base_is_kept(self):
        """Test that a parenthesized base keeps its parentheses."""
        assert translate("(a+b)^2") == "(a+b)⁽2⁾"

    def test_fraction_as_base(self):
        """Test that a rewritten fraction can carry an exponent."""
        assert translate("\\frac{1}{2}^2") == "(1/2)⁽2⁾"

    def test_exponent_before_subscript(self):
        """Test the fixed order when one base has both scripts."""
        assert translate("x^2_3") == "x⁽2⁾₍3₎"

    def test_subscript_before_exponent(self):
        """Test the reverse order on one base."""
        assert translate("x_3^2") == "x₍3₎⁽2⁾"

    def test_braced_subscript_then_exponent(self):
        """Test that a braced subscript stays whole when an exponent follows."""
        assert translate("x_{n+1}^2") == "x₍n+1₎⁽2⁾"

    def test_sum_limits(self):
        """Test the usual lower and upper limits on a sum."""
        assert translate("\\sum_{i=1}^{n} x_{n+1}^2") == "∑₍i=1₎⁽n⁾ x₍n+1₎⁽2⁾"

    def test_braced_exponent_then_subscript(self):
        """Test the mirror case with the exponent written first."""
        assert translate("x^{n+1}_{i}") == "x⁽n+1⁾₍i₎"

    def test_root_as_exponent(self):
        """Test that a root used as an exponent keeps its radicand."""
        assert translate("x^\\sqrt{2}") == "x⁽√(2)⁾"

    def test_text_macro_as_subscript(self):
        """Test that a text wrapper used as a subscript keeps its content."""
        assert translate("v_\\text{max}") == "v₍max₎"

    def test_macro_script_missing_argument(self):
        """Test that a root script without a radicand is left alone."""
        assert translate("x^\\sqrt") == "x^\\sqrt"

    def test_marker_without_script(self):
        """Test that a trailing marker is left alone."""
        assert translate("x^") == "x^"

    def test_marker_without_base(self):
        """Test that a leading marker is left alone."""
        assert translate("^2") == "^2"

    def test_unbalanced_script_group(self):
        """Test that an unclosed script group is left alone."""
        assert translate("x^{2") == "x^{2"


class TestRoots:
    """Tests for square and n-th roots."""

    def test_square_root(self):
        """Test the square root form."""
        assert translate("\\sqrt{2}") == "√(2)"

    def test_square_root_with_exponent_inside(self):
        """Test a radicand that contains a script."""
        assert translate("\\sqrt{x^2+1}") == "√(x⁽2⁾+1)"

    def test_nth_root(self):
        """Test the indexed root form."""
        assert translate("\\sqrt[3]{8}") == "√[3](8)"

    def test_root_as_exponent_base(self):
        """Test that a root keeps its macro when carrying an exponent."""
        assert translate("\\sqrt{x}^2") == "√(x)⁽2⁾"

    def test_unbalanced_root(self):
        """Test that an unclosed radicand is left alone."""
        assert translate("\\sqrt{2") == "\\sqrt{2"


class TestTextWrappers:
    """Tests for \\text and related wrappers."""

    def test_text_unwrapped(self):
        """Test that \\text keeps only its content."""
        assert translate("5 \\text{cm}") == "5 cm"

    def test_mathrm_unwrapped(self):
        """Test that \\mathrm keeps only its content."""
        assert translate("\\mathrm{kg}") == "kg"


class TestTranslateProperties:
    """Tests for general translation behavior."""

    def test_empty_text(self):
        """Test with empty string."""
        assert translate("") == ""

    def test_plain_text_unchanged(self):
        """Test that text with no math syntax passes through."""
        text = "The area is 12 square units."
        assert translate(text) == text

    @pytest.mark.parametrize(
        "text",
        ["x^2 + y^2", "a_n + b_{n+1}", "plain words", "(a+b)^{10}"],
    )
    def test_idempotent_on_macro_free_text(self, text):
        """Test that translating twice equals translating once."""
        once = translate(text)
        assert translate(once) == once

    def test_deterministic(self):
        """Test that the same input always yields the same output."""
        text = "\\frac{\\alpha}{\\beta} + x^2_i"
        assert translate(text) == translate(text)

    def test_deep_nesting_does_not_raise(self):
        """Test that very deep fractions degrade to literal text."""
        text = "\\frac{" * 400 + "1" + "}{2}" * 400
        result = translate(text)
        assert result.startswith("(" * MAX_NESTING + "\\frac{")

    def test_deep_script_nesting_does_not_raise(self):
        """Test that very deep exponents degrade to literal text."""
        text = "e^{" * 400 + "x" + "}" * 400
        result = translate(text)
        assert result.startswith("e⁽" * MAX_NESTING)
        assert result.endswith("⁾" * MAX_NESTING)
