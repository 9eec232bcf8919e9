"""
minic - Single-Pass Front End for a Minimal C-like Language
===========================================================

This package lexes, parses and evaluates programs written in a small
C-like language in one pass:

- A lexer (tokenizer) with multi-character operators and // comments
- A recursive descent parser that evaluates as it recognizes
- A flat symbol table of declared names, types and values
- An expression evaluator folding integer, comparison and logical operators

Pipeline
--------
    Source → Lexer → Parser (SymbolTable + Evaluator) → final symbol values

No syntax tree is kept. Both branches of an if statement and every loop
body are evaluated exactly once; there is no runtime control flow.

Usage
-----
>>> from minic import check_source
>>> result = check_source('''
... int a;
... a = 5;
... int b;
... b = a + 10;
... if (b > 10) { return b; } else { return 0; }
... ''')
>>> result.symbols.dump()
['a: type=int, value=5, line=2', 'b: type=int, value=15, line=4']

Language Subset
---------------
- Types: int, float, double, string, bool, char (one flat namespace)
- Statements: declaration, assignment, if/else, while, for, return, blocks
- Operators: + - * / > < == != && ||
- Literals: integers, decimals, "strings", 'c', true, false
"""

# =============================================================================
# Version Information
# =============================================================================

__version__ = "1.0.0"

# =============================================================================
# Public API Imports
# =============================================================================

from minic.errors import (
    MinicError,
    LexicalError,
    MinicSyntaxError,
    RedeclarationError,
    UndeclaredSymbolError,
    TypeMismatchError,
    DivisionByZeroError,
)
from minic.lexer import Lexer, Token, TokenKind, tokenize
from minic.values import IntValue, TextValue, Value
from minic.evaluator import Operator, fold, fold_text
from minic.symbols import SymbolEntry, SymbolTable
from minic.parser import Parser, parse_source
from minic.frontend import FrontEnd, FrontEndOptions, FrontEndResult, check_source

__all__ = [
    # Version
    "__version__",
    # Main API
    "FrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "check_source",
    # Errors
    "MinicError",
    "LexicalError",
    "MinicSyntaxError",
    "RedeclarationError",
    "UndeclaredSymbolError",
    "TypeMismatchError",
    "DivisionByZeroError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
    # Values and evaluation
    "IntValue",
    "TextValue",
    "Value",
    "Operator",
    "fold",
    "fold_text",
    # Symbol table
    "SymbolEntry",
    "SymbolTable",
    # Parser
    "Parser",
    "parse_source",
]
