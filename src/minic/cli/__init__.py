"""
minic Command-Line Interface
============================

This package provides the `minic` command, a Click-based front end that
reads a source file, runs the lexer/parser/evaluator over it and prints
either a confirmation with the final symbol table or the first error.
"""

__all__ = ["minic"]
