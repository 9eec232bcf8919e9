"""
minic Error Hierarchy
=====================

This module defines the exception hierarchy for the minic front end.
All exceptions inherit from MinicError, allowing callers to catch every
front-end failure with a single except clause.

Exception Hierarchy
-------------------
MinicError (base)
├── LexicalError - unexpected character, unterminated literal, bad number
├── MinicSyntaxError - token does not match the grammar
├── RedeclarationError - identifier declared twice
├── UndeclaredSymbolError - identifier used before its declaration
├── TypeMismatchError - non-integer operand to an integer operator
└── DivisionByZeroError - division with a zero divisor

Error Message Format
--------------------
Every error carries a kind, a message and the source line. The one-line
report has this shape:

    UndeclaredSymbolError: undeclared identifier 'y' on line 3

When a hint is available, str(error) adds it on a second line:

    UndeclaredSymbolError: undeclared identifier 'cout' on line 3
    hint: did you mean 'count'?

The front end is fail-fast: the first error raised is the one reported.
"""

from typing import Optional, List


# =============================================================================
# Base Exception
# =============================================================================

class MinicError(Exception):
    """
    Base exception for all minic front-end errors.

    Attributes:
        kind: Error kind name used in reports (e.g. "LexicalError")
        message: The error description
        line: Source line where the error was detected (1-indexed)
        hint: A suggestion for fixing the error
    """

    kind = "MinicError"

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.hint = hint
        super().__init__(self._format_message())

    def report(self) -> str:
        """Return the single-line diagnostic '<kind>: <message> on line <N>'."""
        if self.line is not None:
            return f"{self.kind}: {self.message} on line {self.line}"
        return f"{self.kind}: {self.message}"

    def _format_message(self) -> str:
        parts = [self.report()]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


# =============================================================================
# Lexical and Syntax Errors
# =============================================================================

class LexicalError(MinicError):
    """
    Source text that cannot be tokenized.

    Examples:
        - Unexpected character (e.g. '@' or a lone '&')
        - Unterminated string or character literal
        - Numeric literal ending in a bare decimal point
    """

    kind = "LexicalError"


class MinicSyntaxError(MinicError):
    """
    Token stream does not match the grammar.

    Raised by the parser at the first token that fails an expectation.
    """

    kind = "SyntaxError"

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        hint: Optional[str] = None,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(message, line, hint)


# =============================================================================
# Symbol Errors
# =============================================================================

class RedeclarationError(MinicError):
    """
    Identifier declared more than once.

    The namespace is flat, so a second declaration anywhere in the program
    (including inside a block or a for-loop header) is an error.
    """

    kind = "RedeclarationError"

    def __init__(
        self,
        identifier: str,
        line: Optional[int] = None,
        original_line: Optional[int] = None,
    ):
        self.identifier = identifier
        self.original_line = original_line

        hint = None
        if original_line is not None:
            hint = f"'{identifier}' was first declared on line {original_line}"

        super().__init__(f"redeclaration of '{identifier}'", line, hint)


class UndeclaredSymbolError(MinicError):
    """
    Reference to an identifier that was never declared.

    Similarly-named identifiers are offered as a hint to help catch typos.
    """

    kind = "UndeclaredSymbolError"

    def __init__(
        self,
        identifier: str,
        line: Optional[int] = None,
        similar_identifiers: Optional[List[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(f"undeclared identifier '{identifier}'", line, hint)


# =============================================================================
# Evaluation Errors
# =============================================================================

class TypeMismatchError(MinicError):
    """
    Operand of the wrong kind for an operator.

    Arithmetic, relational and logical operators accept integer operands
    only; string, character and decimal literals may appear only on either
    side of '==' and '!='.
    """

    kind = "TypeMismatchError"

    def __init__(
        self,
        operator: str,
        operand: str,
        line: Optional[int] = None,
    ):
        self.operator = operator
        self.operand = operand
        super().__init__(
            f"operator '{operator}' requires integer operands, got '{operand}'",
            line,
            hint="only '==' and '!=' accept non-integer operands",
        )


class DivisionByZeroError(MinicError):
    """Integer division with a zero divisor."""

    kind = "DivisionByZeroError"

    def __init__(self, dividend: str, line: Optional[int] = None):
        self.dividend = dividend
        super().__init__(f"division of '{dividend}' by zero", line)
