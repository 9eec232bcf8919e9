"""
minic Expression Evaluator
==========================

This module folds two already-evaluated operands and a binary operator
into a single value. The parser calls it term by term while it
recognizes an expression, so no expression tree is ever built.

Supported Operations
--------------------
| Operator      | Operands     | Result                                   |
|---------------|--------------|------------------------------------------|
| + - * /       | integers     | integer; '/' truncates toward zero       |
| > <           | integers     | 1 or 0                                   |
| == !=         | any          | 1 or 0, comparing the operands' spelling |
| && \\|\\|        | integers     | 1 or 0, zero is false                    |

Equality compares spelling, not numeric value: '007' == '7' is 0.

Example Usage
-------------
>>> from minic.evaluator import fold_text
>>> fold_text("2", "3", "+")
'5'
>>> fold_text("7", "2", "/")
'3'
>>> fold_text("a", "a", "==")
'1'
"""

from enum import Enum
from typing import Optional

from minic.errors import DivisionByZeroError, TypeMismatchError
from minic.lexer import TokenKind
from minic.values import IntValue, TextValue, Value, from_bool, from_text


# =============================================================================
# Operator Enumeration
# =============================================================================

class Operator(Enum):
    """Binary operators understood by fold()."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    GREATER = ">"
    LESS = "<"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LOGICAL_AND = "&&"
    LOGICAL_OR = "||"

    @classmethod
    def from_token(cls, kind: TokenKind) -> "Operator":
        """Map an operator token kind to its Operator."""
        return TOKEN_OPERATORS[kind]


TOKEN_OPERATORS: dict[TokenKind, Operator] = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUBTRACT,
    TokenKind.STAR: Operator.MULTIPLY,
    TokenKind.SLASH: Operator.DIVIDE,
    TokenKind.GT: Operator.GREATER,
    TokenKind.LT: Operator.LESS,
    TokenKind.EQ: Operator.EQUAL,
    TokenKind.NE: Operator.NOT_EQUAL,
    TokenKind.AND: Operator.LOGICAL_AND,
    TokenKind.OR: Operator.LOGICAL_OR,
}

# Operators the parser folds at term level; everything else is expression level
TERM_OPERATORS = frozenset({TokenKind.STAR, TokenKind.SLASH})
EXPRESSION_OPERATORS = frozenset(TOKEN_OPERATORS) - TERM_OPERATORS


# =============================================================================
# Folding
# =============================================================================

def fold(
    left: Value,
    right: Value,
    op: Operator | str,
    line: Optional[int] = None,
) -> Value:
    """
    Combine two values with a binary operator.

    Args:
        left: Left operand
        right: Right operand
        op: Operator, or its spelling (e.g. "+")
        line: Source line used when reporting errors

    Returns:
        The folded value

    Raises:
        TypeMismatchError: If a non-integer operand reaches an operator
                           other than '==' or '!='
        DivisionByZeroError: If the divisor of '/' is zero
    """
    op = Operator(op)

    if op == Operator.EQUAL:
        return from_bool(left.text == right.text)
    if op == Operator.NOT_EQUAL:
        return from_bool(left.text != right.text)

    a = _integer(left, op, line)
    b = _integer(right, op, line)

    if op == Operator.ADD:
        return IntValue(a + b)
    if op == Operator.SUBTRACT:
        return IntValue(a - b)
    if op == Operator.MULTIPLY:
        return IntValue(a * b)
    if op == Operator.DIVIDE:
        if b == 0:
            raise DivisionByZeroError(left.text, line)
        return IntValue(_truncating_divide(a, b))
    if op == Operator.GREATER:
        return from_bool(a > b)
    if op == Operator.LESS:
        return from_bool(a < b)
    if op == Operator.LOGICAL_AND:
        return from_bool(a != 0 and b != 0)
    return from_bool(a != 0 or b != 0)


def fold_text(
    left: str,
    right: str,
    op: Operator | str,
    line: Optional[int] = None,
) -> str:
    """Fold two operands given as text and return the result as text."""
    return fold(from_text(left), from_text(right), op, line).text


def _integer(value: Value, op: Operator, line: Optional[int]) -> int:
    if isinstance(value, TextValue):
        raise TypeMismatchError(op.value, value.text, line)
    return value.number


def _truncating_divide(a: int, b: int) -> int:
    # Python's // floors; C-style division truncates toward zero
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient
