"""
minic Symbol Table
==================

A flat mapping from identifier name to its declared type, current value
and declaration line. The table lives for one parse and has a single
namespace: blocks do not open scopes, and nothing is ever removed.

Example Usage
-------------
>>> from minic.symbols import SymbolTable
>>> from minic.values import IntValue
>>> table = SymbolTable()
>>> table.insert("x", "int", IntValue(5), line=1)
>>> table.update("x", IntValue(15))
>>> table.lookup_value("x").text
'15'
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from minic.errors import RedeclarationError, UndeclaredSymbolError
from minic.values import TextValue, Value

logger = logging.getLogger(__name__)


@dataclass
class SymbolEntry:
    """
    A declared identifier.

    Attributes:
        declared_type: Type keyword from the declaration (e.g. "int")
        value: Current value
        decl_line: Line of the declaration
    """
    declared_type: str
    value: Value
    decl_line: int


class SymbolTable:
    """
    Flat symbol table for one parse.

    Entries are kept in declaration order, which is also the order used
    by iteration and dump().
    """

    def __init__(self):
        self._entries: dict[str, SymbolEntry] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[tuple[str, SymbolEntry]]:
        return iter(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    # =========================================================================
    # Mutation
    # =========================================================================

    def insert(self, name: str, declared_type: str, value: Value, line: int) -> None:
        """
        Declare a new identifier.

        Raises:
            RedeclarationError: If the name is already declared
        """
        self.check_redeclaration(name, line)
        self._entries[name] = SymbolEntry(declared_type, value, line)
        logger.debug(f"declared {declared_type} '{name}' = {value} (line {line})")

    def update(self, name: str, value: Value, line: Optional[int] = None) -> None:
        """
        Overwrite the value of a declared identifier.

        Raises:
            UndeclaredSymbolError: If the name was never declared
        """
        entry = self.lookup(name, line)
        entry.value = value
        logger.debug(f"assigned '{name}' = {value}")

    def check_redeclaration(self, name: str, line: int) -> None:
        """Raise RedeclarationError if name is already declared."""
        if name in self._entries:
            raise RedeclarationError(name, line, self._entries[name].decl_line)

    # =========================================================================
    # Queries
    # =========================================================================

    def exists(self, name: str) -> bool:
        """Return True if name has been declared."""
        return name in self._entries

    def lookup(self, name: str, line: Optional[int] = None) -> SymbolEntry:
        """
        Return the entry for a declared identifier.

        Args:
            name: Identifier to look up
            line: Line of the reference, for error reporting

        Raises:
            UndeclaredSymbolError: If the name was never declared
        """
        entry = self._entries.get(name)
        if entry is None:
            raise UndeclaredSymbolError(name, line, self._find_similar(name))
        return entry

    def lookup_type(self, name: str, line: Optional[int] = None) -> str:
        return self.lookup(name, line).declared_type

    def lookup_value(self, name: str, line: Optional[int] = None) -> Value:
        return self.lookup(name, line).value

    def dump(self) -> list[str]:
        """
        Format every entry as 'name: type=<t>, value=<v>, line=<n>'.

        Text values are quoted and escaped so each entry is one line.
        """
        lines = []
        for name, entry in self._entries.items():
            value = entry.value
            shown = repr(value.text) if isinstance(value, TextValue) else str(value)
            lines.append(f"{name}: type={entry.declared_type}, value={shown}, line={entry.decl_line}")
        return lines

    # =========================================================================
    # Suggestions
    # =========================================================================

    def _find_similar(self, name: str) -> list[str]:
        """Declared names within a small edit distance of name."""
        similar = []
        for candidate in self._entries:
            if (
                abs(len(candidate) - len(name)) <= 1 and
                _edit_distance(name, candidate) <= 2
            ):
                similar.append(candidate)
        return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(
                    distances[j],
                    distances[j + 1],
                    new_distances[-1],
                ))
        distances = new_distances

    return distances[-1]
