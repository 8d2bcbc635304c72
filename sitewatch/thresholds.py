"""
sitewatch/thresholds.py

Threshold expression parsing and evaluation.

A threshold expression is two whitespace-separated tokens, an operator and a
literal, e.g. ``"> 100"`` or ``"== true"``. The literal and the observed value
are coerced independently into a tagged value (bool, number or text) and
compared by kind:

- ``==`` / ``!=`` compare kind and value, so values of different kinds are
  never equal.
- ``>``, ``<``, ``>=``, ``<=`` are defined for two numbers only; every other
  pairing evaluates to False.
"""

from __future__ import annotations

import math
import operator
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

# Plain decimal/exponent floats plus inf/nan; rejects whitespace and "1_000".
_NUMBER_REGEX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    flags=re.ASCII | re.IGNORECASE,
)
_INFINITY_REGEX = re.compile(r"[+-]?inf(?:inity)?", flags=re.ASCII | re.IGNORECASE)

_ORDERING_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}
_EQUALITY_OPERATORS = {"==", "!="}

OPERATORS = frozenset(_EQUALITY_OPERATORS | _ORDERING_OPERATORS.keys())


class ThresholdError(ValueError):
    """Base exception for malformed threshold expressions."""


class InvalidExpressionError(ThresholdError):
    """Raised when an expression is not exactly `<operator> <literal>`."""


class InvalidOperatorError(ThresholdError):
    """Raised when an expression uses an unsupported comparison operator."""


class ValueKind(str, Enum):
    BOOL = "bool"
    NUMBER = "number"
    TEXT = "text"


@dataclass(frozen=True)
class ThresholdValue:
    kind: ValueKind
    value: bool | float | str

    def same_as(self, other: ThresholdValue) -> bool:
        return self.kind is other.kind and self.value == other.value


def coerce(raw: str) -> ThresholdValue:
    """
    Infer a tagged value from a raw string.
    """

    if raw == "true":
        return ThresholdValue(ValueKind.BOOL, True)
    if raw == "false":
        return ThresholdValue(ValueKind.BOOL, False)
    if _NUMBER_REGEX.fullmatch(raw):
        number = float(raw)
        # Out-of-range literals such as "1e400" are not numbers.
        if not math.isinf(number) or _INFINITY_REGEX.fullmatch(raw):
            return ThresholdValue(ValueKind.NUMBER, number)
    return ThresholdValue(ValueKind.TEXT, raw)


def _compare(op: str, observed: ThresholdValue, expected: ThresholdValue) -> bool:
    if op == "==":
        return observed.same_as(expected)
    if op == "!=":
        return not observed.same_as(expected)

    if (observed.kind, expected.kind) == (ValueKind.NUMBER, ValueKind.NUMBER):
        return _ORDERING_OPERATORS[op](observed.value, expected.value)
    return False


def compile_threshold(expression: str) -> Callable[[str], bool]:
    """
    Parse `expression` once and return a predicate over observed values.

    Raises InvalidExpressionError or InvalidOperatorError.
    """

    tokens = expression.split()
    if len(tokens) != 2:
        raise InvalidExpressionError(
            f"invalid threshold string {expression!r}: expected '<operator> <value>'"
        )

    op, raw_literal = tokens
    if op not in OPERATORS:
        raise InvalidOperatorError(
            f"invalid comparison operator {op!r}; allowed: {', '.join(sorted(OPERATORS))}"
        )
    expected = coerce(raw_literal)

    def predicate(observed: str) -> bool:
        return _compare(op, coerce(observed), expected)

    return predicate


def evaluate(expression: str, observed: str) -> bool:
    """
    Return whether `observed` satisfies the threshold `expression`.
    """

    return compile_threshold(expression)(observed)
