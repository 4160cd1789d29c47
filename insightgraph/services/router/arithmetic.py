"""
Safe evaluation of simple arithmetic questions.

Expressions are parsed with ast and evaluated against a whitelist of numeric
literals and arithmetic operators; nothing is ever passed to eval().
"""

import ast
import math
import operator
import re

# Longest first so "calculate" is stripped before "calc"
FILLER_PHRASES = ("what is", "what's", "calculate", "compute", "calc")

_ALLOWED_CHARACTERS = re.compile(r"[0-9+\-*/().^e\s]+")
_DIGIT = re.compile(r"\d")

MAX_EXPONENT = 1000
MAX_RESULT_DIGITS = 4000

_BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class UnsupportedExpression(ValueError):
    """Raised when an expression uses anything outside the whitelist."""


def normalize_expression(query: str) -> str:
    """Strip filler phrases and trailing question marks or equals signs."""
    clean = query.lower()
    for phrase in FILLER_PHRASES:
        clean = clean.replace(phrase, "")
    return clean.strip().rstrip("?=").strip()


def is_arithmetic(expression: str) -> bool:
    """Check that an expression only uses arithmetic characters and has a digit."""
    return bool(_ALLOWED_CHARACTERS.fullmatch(expression)) and bool(_DIGIT.search(expression))


def _digit_count(value: int) -> float:
    return value.bit_length() * math.log10(2)


def _check_power(base: int | float, exponent: int | float) -> None:
    """Decline powers whose result would not fit in MAX_RESULT_DIGITS."""
    if abs(exponent) > MAX_EXPONENT:
        raise UnsupportedExpression("Exponent too large")
    if isinstance(base, int) and abs(base) > 1 and exponent > 0:
        if exponent * math.log10(abs(base)) > MAX_RESULT_DIGITS:
            raise UnsupportedExpression("Result too large")


def _evaluate(node: ast.AST) -> int | float:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body)

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise UnsupportedExpression(f"Unsupported literal: {node.value!r}")
        return node.value

    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand))

    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left = _evaluate(node.left)
        right = _evaluate(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        result = _BINARY_OPERATORS[type(node.op)](left, right)
        if isinstance(result, int) and _digit_count(result) > MAX_RESULT_DIGITS:
            raise UnsupportedExpression("Result too large")
        return result

    raise UnsupportedExpression(f"Unsupported syntax: {type(node).__name__}")


def format_number(value: int | float) -> str:
    """Render a result without a trailing .0 for whole numbers."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return f"{value:.10g}"


def solve_math(query: str) -> str | None:
    """
    Evaluate an arithmetic question.

    "^" means power. Any parse or evaluation failure (division by zero,
    overflow, stray letters) means the query is not arithmetic.

    Args:
        query: User utterance, e.g. "what is 2+2*5"

    Returns:
        Formatted result, or None if the query is not a valid expression
    """
    expression = normalize_expression(query)
    if not is_arithmetic(expression):
        return None

    try:
        tree = ast.parse(expression.replace("^", "**"), mode="eval")
        value = _evaluate(tree)
        if isinstance(value, complex):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return format_number(value)
    except (SyntaxError, ValueError, TypeError, ZeroDivisionError, OverflowError, RecursionError):
        return None
