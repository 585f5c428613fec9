"""Arithmetic evaluator for the agent's calculate tool.

Expressions are parsed with :mod:`ast` and only numeric literals, the usual
binary and unary operators and parentheses are accepted. Names, calls,
attribute access and everything else are rejected.
"""

from __future__ import annotations

import ast
import operator
from typing import Any, Callable

from ggvercel.errors import ExpressionError

MAX_EXPRESSION_LENGTH = 1000
MAX_EXPONENT = 1000
# Integer results and operands wider than this are rejected.
MAX_INT_BITS = 4096

_BINARY_OPERATORS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def evaluate(expression: str) -> int | float:
    if not expression or len(expression) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError("Invalid expression")
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as exc:
        raise ExpressionError("Invalid expression") from exc
    try:
        result = _eval(tree.body)
    except (ArithmeticError, ValueError) as exc:
        raise ExpressionError(f"Invalid expression: {exc}") from exc
    # (-8) ** 0.5 is complex
    if isinstance(result, complex):
        raise ExpressionError("Invalid expression: complex result")
    return result


def _bounded(value: int | float) -> int | float:
    if isinstance(value, int) and value.bit_length() > MAX_INT_BITS:
        raise ExpressionError("Result too large")
    return value


def _check_power(base: int | float, exponent: int | float) -> None:
    if abs(exponent) > MAX_EXPONENT:
        raise ExpressionError("Exponent too large")
    # Lower bound on the bit length of base ** exponent.
    if isinstance(base, int) and exponent > 0 and (abs(base).bit_length() - 1) * exponent > MAX_INT_BITS:
        raise ExpressionError("Result too large")


def _eval(node: ast.AST) -> int | float:
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return _bounded(node.value)
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left = _eval(node.left)
        right = _eval(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return _bounded(_BINARY_OPERATORS[type(node.op)](left, right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_eval(node.operand))
    raise ExpressionError(f"Unsupported syntax: {node.__class__.__name__}")
