"""
minic Runtime Values
====================

Values produced while folding expressions. Each value is either an
integer or a piece of text, and every value keeps the spelling it is
formatted with:

- IntValue: integer literal, arithmetic result, or true/false
- TextValue: string literal, character literal, or decimal literal

Numeric literals keep their source spelling (so '007' stays '007'),
while computed results use canonical decimal text. Equality operators
compare that spelling; every other operator works on the integer.
"""

import re
from dataclasses import dataclass
from typing import Union


INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class IntValue:
    """
    Integer value.

    Attributes:
        number: The integer
        text: Spelling used for display and for '==' / '!='
    """
    number: int
    text: str = ""

    def __post_init__(self):
        if not self.text:
            object.__setattr__(self, "text", str(self.number))

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class TextValue:
    """Non-integer value (string, character or decimal literal)."""
    text: str

    def __str__(self) -> str:
        return self.text


Value = Union[IntValue, TextValue]

ZERO = IntValue(0)
ONE = IntValue(1)


def from_bool(flag: bool) -> IntValue:
    """Encode a truth value as 1 or 0."""
    return ONE if flag else ZERO


def from_text(text: str) -> Value:
    """
    Classify raw text as a value.

    Signed decimal integers become IntValue (keeping the given spelling);
    everything else becomes TextValue.
    """
    if INTEGER_PATTERN.fullmatch(text):
        return IntValue(int(text), text)
    return TextValue(text)
