"""
minic Front End Driver
======================

This module ties the pieces together:

    Source → Lexer → Parser (+ SymbolTable, Evaluator) → FrontEndResult

Usage
-----
Command line:
    $ minic program.mc

Programmatic:
    >>> from minic import check_source
    >>> result = check_source('int a; a = 5;')
    >>> result.symbols.lookup_value("a").text
    '5'

Configuration
-------------
FrontEndOptions holds the localized keyword aliases and whether the
symbol dump is printed. Options can also come from the environment:

    MINIC_ALIASES="si=if,sino=else"
    MINIC_DUMP_SYMBOLS=0

Error Handling
--------------
The front end stops at the first error and raises it. Callers decide how
to report it and which exit status to use.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from minic.errors import LexicalError
from minic.lexer import DEFAULT_ALIASES, Token, tokenize
from minic.parser import Parser
from minic.symbols import SymbolTable
from minic.values import Value

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Parsing completed successfully! No Syntax Error"


def parse_alias_spec(spec: str) -> dict[str, str]:
    """
    Parse 'alias=keyword' pairs separated by commas.

    An empty string means no aliases at all.

    Raises:
        ValueError: If a pair is not of the form alias=keyword
    """
    aliases = {}
    for pair in spec.split(","):
        pair = pair.strip()
        if not pair:
            continue
        alias, sep, keyword = pair.partition("=")
        if not sep or not alias.strip() or not keyword.strip():
            raise ValueError(f"invalid alias definition '{pair}', expected ALIAS=KEYWORD")
        aliases[alias.strip()] = keyword.strip()
    return aliases


def read_source(path: str | Path) -> str:
    """
    Read a source file as UTF-8 text.

    Raises:
        OSError: If the file cannot be read
        LexicalError: If the file is not valid UTF-8
    """
    data = Path(path).read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line = data.count(b"\n", 0, e.start) + 1
        raise LexicalError(f"invalid UTF-8 byte 0x{data[e.start]:02X}", line) from None


@dataclass
class FrontEndOptions:
    """
    Front-end configuration options.

    Attributes:
        aliases: Localized keyword spellings mapped to canonical keywords
                 (e.g. {"si": "if"}). Defaults to the Spanish if/else pair.
        dump_symbols: Print the final symbol table after a successful parse
    """
    aliases: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))
    dump_symbols: bool = True

    @classmethod
    def from_env(cls) -> "FrontEndOptions":
        """
        Create FrontEndOptions from environment variables.

        Environment variables:
            MINIC_ALIASES: Comma-separated alias=keyword pairs
            MINIC_DUMP_SYMBOLS: "0" disables the symbol dump

        Raises:
            ValueError: If MINIC_ALIASES is malformed
        """
        options = cls()

        if (spec := os.environ.get("MINIC_ALIASES")) is not None:
            options.aliases = parse_alias_spec(spec)

        if dump := os.environ.get("MINIC_DUMP_SYMBOLS"):
            options.dump_symbols = dump.strip().lower() not in ("0", "false", "no")

        return options


@dataclass
class FrontEndResult:
    """
    Outcome of a successful front-end run.

    Attributes:
        filename: Source filename
        symbols: Final symbol table
        token_count: Number of tokens, including EOF
        returns: Values of the return statements, in source order
        message: Human-readable confirmation
    """
    filename: str
    symbols: SymbolTable
    token_count: int = 0
    returns: list[Value] = field(default_factory=list)
    message: str = SUCCESS_MESSAGE


class FrontEnd:
    """
    minic front end.

    Example:
        front_end = FrontEnd()
        result = front_end.run_file("program.mc")
        for line in result.symbols.dump():
            print(line)

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontEndOptions] = None):
        self.options = options or FrontEndOptions()

    def tokenize(self, source: str, filename: str = "<input>") -> list[Token]:
        """Tokenize source with the configured aliases."""
        return tokenize(source, filename, self.options.aliases)

    def run_source(self, source: str, filename: str = "<input>") -> FrontEndResult:
        """
        Lex, parse and evaluate source text.

        Raises:
            MinicError: The first error encountered
        """
        tokens = self.tokenize(source, filename)
        parser = Parser(tokens, filename)
        symbols = parser.parse()

        logger.debug(f"{filename}: {SUCCESS_MESSAGE}")
        return FrontEndResult(
            filename=filename,
            symbols=symbols,
            token_count=len(tokens),
            returns=parser.returns,
        )

    def run_file(self, path: str | Path) -> FrontEndResult:
        """
        Read a source file and run the front end on it.

        Raises:
            OSError: If the file cannot be read
            MinicError: The first error encountered, including
                        LexicalError for bytes that are not UTF-8
        """
        path = Path(path)
        logger.debug(f"reading {path}")
        return self.run_source(read_source(path), str(path))


def check_source(
    source: str,
    filename: str = "<input>",
    options: Optional[FrontEndOptions] = None,
) -> FrontEndResult:
    """Convenience wrapper: run the front end on source text."""
    return FrontEnd(options).run_source(source, filename)
