"""
tests/test_thresholds.py

Unit tests for threshold expression coercion and evaluation.

Coverage
--------
- Per-value coercion into bool / number / text
- Equality across and within kinds
- Ordering for numbers, and False for every other kind pairing
- Malformed expressions and unknown operators
"""

from __future__ import annotations

import pytest

from sitewatch.thresholds import (
    InvalidExpressionError,
    InvalidOperatorError,
    ThresholdError,
    ValueKind,
    coerce,
    compile_threshold,
    evaluate,
)


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


class TestCoerce:
    @pytest.mark.parametrize(
        "raw, kind, value",
        [
            ("true", ValueKind.BOOL, True),
            ("false", ValueKind.BOOL, False),
            ("5", ValueKind.NUMBER, 5.0),
            ("5.0", ValueKind.NUMBER, 5.0),
            ("-1.5e3", ValueKind.NUMBER, -1500.0),
            (".25", ValueKind.NUMBER, 0.25),
            ("abc", ValueKind.TEXT, "abc"),
            ("True", ValueKind.TEXT, "True"),
            ("", ValueKind.TEXT, ""),
        ],
    )
    def test_infers_kind(self, raw: str, kind: ValueKind, value: object) -> None:
        coerced = coerce(raw)
        assert coerced.kind is kind
        assert coerced.value == value

    @pytest.mark.parametrize(
        "raw", [" 5", "5 ", "1_000", "0x10", "5,0", "\u0663", "\uff15", "1e400", "-1e400"]
    )
    def test_non_plain_numbers_stay_text(self, raw: str) -> None:
        assert coerce(raw).kind is ValueKind.TEXT


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


class TestEquality:
    def test_bool_equals_bool(self) -> None:
        assert evaluate("== true", "true") is True

    def test_numeric_coercion_on_both_sides(self) -> None:
        assert evaluate("== 5", "5.0") is True

    def test_text_equality(self) -> None:
        assert evaluate("== sold-out", "sold-out") is True
        assert evaluate("== sold-out", "available") is False

    def test_cross_kind_is_unequal(self) -> None:
        assert evaluate("== 1", "true") is False
        assert evaluate("== true", "1") is False
        assert evaluate("== 5", "five") is False

    def test_not_equal(self) -> None:
        assert evaluate("!= 3", "4") is True
        assert evaluate("!= 3", "3") is False

    def test_not_equal_across_kinds_is_true(self) -> None:
        assert evaluate("!= false", "0") is True


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    @pytest.mark.parametrize(
        "expression, observed, expected",
        [
            (">= 10", "10", True),
            ("<= 9", "10", False),
            ("> 5", "5.01", True),
            ("> 5", "5", False),
            ("< 0", "-3", True),
            ("<= -2.5", "-2.5", True),
        ],
    )
    def test_numbers(self, expression: str, observed: str, expected: bool) -> None:
        assert evaluate(expression, observed) is expected

    def test_type_mismatch_is_false_not_error(self) -> None:
        assert evaluate("> 5", "abc") is False

    def test_out_of_range_literal_compares_as_text(self) -> None:
        assert evaluate("> 5", "1e400") is False
        assert evaluate("== 1e400", "1e400") is True

    def test_explicit_infinity_is_a_number(self) -> None:
        assert evaluate("> 5", "inf") is True
        assert evaluate("< 0", "-Infinity") is True

    @pytest.mark.parametrize(
        "expression, observed",
        [
            ("> abc", "abd"),
            ("< false", "true"),
            (">= true", "true"),
            ("<= 5", "false"),
        ],
    )
    def test_non_numeric_ordering_is_false(self, expression: str, observed: str) -> None:
        assert evaluate(expression, observed) is False

    def test_empty_observed_value_does_not_match(self) -> None:
        assert evaluate("> 0", "") is False


# ---------------------------------------------------------------------------
# Malformed expressions
# ---------------------------------------------------------------------------


class TestMalformedExpressions:
    @pytest.mark.parametrize("expression", ["", ">", "> 5 6", "==5"])
    def test_wrong_token_count(self, expression: str) -> None:
        with pytest.raises(InvalidExpressionError):
            evaluate(expression, "5")

    @pytest.mark.parametrize("expression", ["=> 5", "=== 5", "gt 5", "~ 5"])
    def test_unknown_operator(self, expression: str) -> None:
        with pytest.raises(InvalidOperatorError):
            evaluate(expression, "5")

    def test_errors_share_base_class(self) -> None:
        assert issubclass(InvalidExpressionError, ThresholdError)
        assert issubclass(InvalidOperatorError, ThresholdError)
        assert issubclass(ThresholdError, ValueError)

    @pytest.mark.parametrize("op", ["==", "!=", ">", "<", ">=", "<="])
    def test_valid_operators_never_raise(self, op: str) -> None:
        for observed in ("1", "true", "text", ""):
            assert evaluate(f"{op} 1", observed) in (True, False)


class TestCompileThreshold:
    def test_predicate_is_reusable(self) -> None:
        above_ten = compile_threshold("> 10")
        assert above_ten("11") is True
        assert above_ten("9") is False
        assert above_ten("n/a") is False

    def test_extra_whitespace_between_tokens_is_allowed(self) -> None:
        assert evaluate("  >=   2 ", "2") is True
