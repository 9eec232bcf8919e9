"""
minic Lexer (Tokenizer)
=======================

This module converts minic source text into a flat list of tokens for
the parser. The scan is a single forward pass with one character of
lookahead.

Token Categories
----------------
- Type keywords: int, float, double, string, bool, char
- Control keywords: if, else, while, for, return
- Boolean literals: true, false
- Identifiers: [A-Za-z][A-Za-z0-9]*
- Numbers: digit runs with at most one decimal point (12, 3.5)
- Strings: "double quoted", may span lines
- Characters: 'c' (exactly one character)
- Operators: = + - * / > < == != && ||
- Punctuation: ( ) { } ;

Comments
--------
- Single-line: // comment

Keyword Aliases
---------------
Localized spellings map onto the canonical keyword kinds. The default
alias set is the Spanish pair:

| Alias | Keyword |
|-------|---------|
| si    | if      |
| sino  | else    |

Example Usage
-------------
>>> from minic.lexer import tokenize
>>> for token in tokenize('int x = 5;'):
...     print(token)
Token(INT, 'int', 1)
Token(IDENTIFIER, 'x', 1)
Token(ASSIGN, '=', 1)
Token(NUMBER, '5', 1)
Token(SEMICOLON, ';', 1)
Token(EOF, '', 1)
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from minic.errors import LexicalError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the minic language.

    The set is closed: every token the lexer produces has exactly one of
    these kinds, and the stream always ends with a single EOF.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable names
    NUMBER = auto()         # Numeric literals (12, 3.5)
    STRING_LITERAL = auto() # String literals "..."
    CHAR_LITERAL = auto()   # Character literals 'c'

    # === Keywords - Type Specifiers ===
    INT = auto()            # int
    FLOAT = auto()          # float
    DOUBLE = auto()         # double
    STRING = auto()         # string
    BOOL = auto()           # bool
    CHAR = auto()           # char

    # === Keywords - Control Flow ===
    IF = auto()             # if
    ELSE = auto()           # else
    WHILE = auto()          # while
    FOR = auto()            # for
    RETURN = auto()         # return

    # === Boolean Literals ===
    TRUE = auto()           # true
    FALSE = auto()          # false

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /

    # === Comparison Operators ===
    EQ = auto()             # ==
    NE = auto()             # !=
    LT = auto()             # <
    GT = auto()             # >

    # === Logical Operators ===
    AND = auto()            # &&
    OR = auto()             # ||

    # === Assignment ===
    ASSIGN = auto()         # =

    # === Punctuation ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenKind] = {
    # Type specifiers
    "int": TokenKind.INT,
    "float": TokenKind.FLOAT,
    "double": TokenKind.DOUBLE,
    "string": TokenKind.STRING,
    "bool": TokenKind.BOOL,
    "char": TokenKind.CHAR,

    # Control flow
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "for": TokenKind.FOR,
    "return": TokenKind.RETURN,

    # Boolean literals
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

TYPE_KEYWORDS = frozenset({
    TokenKind.INT,
    TokenKind.FLOAT,
    TokenKind.DOUBLE,
    TokenKind.STRING,
    TokenKind.BOOL,
    TokenKind.CHAR,
})

# Keywords that may be given a localized alias
ALIASABLE_KEYWORDS = frozenset({
    "if", "else", "while", "for", "return", "true", "false",
})

DEFAULT_ALIASES: dict[str, str] = {
    "si": "if",
    "sino": "else",
}


def resolve_aliases(aliases: Optional[dict[str, str]]) -> dict[str, TokenKind]:
    """
    Turn an alias -> keyword mapping into an alias -> TokenKind mapping.

    Args:
        aliases: Alias spellings mapped to canonical keywords, or None for
                 the default set

    Returns:
        Mapping used by the lexer during keyword classification

    Raises:
        ValueError: If an alias is not a valid identifier, shadows a
                    keyword, or names a keyword that cannot be aliased
    """
    if aliases is None:
        aliases = DEFAULT_ALIASES

    resolved = {}
    for alias, keyword in aliases.items():
        if not alias or alias[0] not in Lexer.IDENT_START or any(
            c not in Lexer.IDENT_CHARS for c in alias
        ):
            raise ValueError(f"alias '{alias}' is not a valid identifier")
        if alias in KEYWORDS:
            raise ValueError(f"alias '{alias}' shadows the keyword '{alias}'")
        if keyword not in ALIASABLE_KEYWORDS:
            raise ValueError(f"keyword '{keyword}' cannot be aliased")
        resolved[alias] = KEYWORDS[keyword]
    return resolved


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from minic source code.

    Attributes:
        kind: The TokenKind classification
        lexeme: Exact source spelling (literals keep their quotes)
        line: Line number in source (1-indexed)
    """
    kind: TokenKind
    lexeme: str
    line: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.line})"

    @property
    def value(self) -> str:
        """
        Literal content of the token.

        String literals lose their quotes and have escapes decoded;
        character literals lose their quotes. Every other kind returns
        its lexeme unchanged.
        """
        if self.kind == TokenKind.STRING_LITERAL:
            return _decode_string(self.lexeme[1:-1])
        if self.kind == TokenKind.CHAR_LITERAL:
            return self.lexeme[1:-1]
        return self.lexeme

    def is_type_keyword(self) -> bool:
        """Return True if this token is a type keyword."""
        return self.kind in TYPE_KEYWORDS


# Escape sequences decoded in string literals
ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}


def _decode_string(body: str) -> str:
    chars = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            escaped = body[i + 1]
            # Unknown escapes are kept verbatim
            chars.append(ESCAPE_SEQUENCES.get(escaped, "\\" + escaped))
            i += 2
            continue
        chars.append(char)
        i += 1
    return "".join(chars)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes minic source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for log messages)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits

    # Single character tokens
    SINGLE_TOKENS = {
        "=": TokenKind.ASSIGN,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "/": TokenKind.SLASH,
        ">": TokenKind.GT,
        "<": TokenKind.LT,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        ";": TokenKind.SEMICOLON,
    }

    # Two character operators, tried before SINGLE_TOKENS
    DOUBLE_TOKENS = {
        "==": TokenKind.EQ,
        "!=": TokenKind.NE,
        "&&": TokenKind.AND,
        "||": TokenKind.OR,
    }

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        aliases: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The minic source code to tokenize
            filename: Name of the source file
            aliases: Localized keyword aliases (alias -> keyword); None
                     selects DEFAULT_ALIASES
        """
        self.source = source
        self.filename = filename
        self._aliases = resolve_aliases(aliases)

        self._pos = 0
        self._line = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, ending with exactly one EOF token

        Raises:
            LexicalError: On the first character sequence that cannot be
                          tokenized
        """
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield Token(TokenKind.EOF, "", self._line)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, counting newlines."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
        return char

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r\f\v":
                self._advance()
                continue

            # Single-line comment: //
            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_word()

        if char and char in string.digits:
            return self._scan_number()

        if char == '"':
            return self._scan_string()

        if char == "'":
            return self._scan_char()

        return self._scan_operator()

    def _scan_word(self) -> Token:
        """
        Scan an identifier, keyword or keyword alias.

        The run is matched maximally, then classified against the keyword
        table, then the alias table; anything else is an identifier.
        """
        line = self._line
        start = self._pos
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        word = self.source[start:self._pos]

        if word in KEYWORDS:
            return Token(KEYWORDS[word], word, line)
        if word in self._aliases:
            return Token(self._aliases[word], word, line)
        return Token(TokenKind.IDENTIFIER, word, line)

    def _scan_number(self) -> Token:
        """
        Scan a numeric literal.

        Allows at most one decimal point. A second point ends the literal
        rather than raising; a literal whose last character is the point
        is rejected.
        """
        line = self._line
        start = self._pos
        has_decimal_point = False

        while self._peek() and self._peek() in string.digits + ".":
            if self._peek() == ".":
                if has_decimal_point:
                    break
                has_decimal_point = True
            self._advance()

        number = self.source[start:self._pos]
        if number.endswith("."):
            raise LexicalError(
                f"invalid number format '{number}'",
                line,
                hint="add digits after the decimal point",
            )
        return Token(TokenKind.NUMBER, number, line)

    def _scan_string(self) -> Token:
        """
        Scan a double-quoted string literal.

        Consumes up to the next unescaped '"'. Newlines inside the literal
        are allowed and counted. An unterminated literal is reported at the
        line where it starts.
        """
        line = self._line
        start = self._pos
        self._advance()  # consume opening "

        while not self._at_end():
            char = self._advance()
            if char == "\\":
                self._advance()  # escaped character never closes the literal
                continue
            if char == '"':
                return Token(TokenKind.STRING_LITERAL, self.source[start:self._pos], line)

        raise LexicalError(
            "unterminated string literal",
            line,
            hint="add closing '\"' to complete the string",
        )

    def _scan_char(self) -> Token:
        """Scan a character literal: exactly one character between quotes."""
        line = self._line
        start = self._pos
        self._advance()  # consume opening '

        if self._at_end() or self._peek() == "\n":
            raise LexicalError(
                "unterminated character literal",
                line,
                hint="add closing ' to complete the character literal",
            )
        self._advance()

        if self._peek() != "'":
            raise LexicalError(
                "invalid character literal",
                line,
                hint="character literals contain exactly one character",
            )
        self._advance()  # consume closing '

        return Token(TokenKind.CHAR_LITERAL, self.source[start:self._pos], line)

    def _scan_operator(self) -> Token:
        """Scan an operator or punctuation, two-character forms first."""
        line = self._line
        pair = self._peek() + self._peek(1)

        if pair in self.DOUBLE_TOKENS:
            self._advance()
            self._advance()
            return Token(self.DOUBLE_TOKENS[pair], pair, line)

        char = self._advance()
        if char in self.SINGLE_TOKENS:
            return Token(self.SINGLE_TOKENS[char], char, line)

        shown = f"'{char}'" if char.isprintable() else repr(char)
        raise LexicalError(f"unexpected character {shown}", line)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    source: str,
    filename: str = "<input>",
    aliases: Optional[dict[str, str]] = None,
) -> list[Token]:
    """
    Tokenize source text into a complete token list.

    Args:
        source: The minic source code
        filename: Source filename
        aliases: Localized keyword aliases, None for the defaults

    Returns:
        List of tokens ending with a single EOF token

    Raises:
        LexicalError: If the source cannot be tokenized
    """
    tokens = list(Lexer(source, filename, aliases).tokenize())
    logger.debug(f"{filename}: {len(tokens)} tokens over {tokens[-1].line} lines")
    return tokens
