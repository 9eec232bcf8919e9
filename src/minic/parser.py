"""
minic Recursive Descent Parser
==============================

This module recognizes a minic token stream and evaluates it in the
same pass. Declarations and assignments go straight into the symbol
table, and expressions are folded to values term by term. No syntax
tree is built; the call stack is the only structural memory.

Grammar (EBNF)
--------------
program         ::= statement* EOF
statement       ::= declaration | assignment | if_stmt | while_stmt
                  | for_stmt | return_stmt | block
declaration     ::= type_kw IDENTIFIER ('=' expression)? ';'
assignment      ::= IDENTIFIER '=' expression ';'
if_stmt         ::= 'if' '(' expression ')' statement ('else' statement)?
while_stmt      ::= 'while' '(' expression ')' statement
for_stmt        ::= 'for' '(' (declaration | assignment) expression ';'
                    update? ')' statement
update          ::= IDENTIFIER '=' expression | expression
return_stmt     ::= 'return' expression ';'
block           ::= '{' statement* '}'

expression      ::= term (('+' | '-' | '>' | '<' | '==' | '!='
                         | '&&' | '||') term)*
term            ::= factor (('*' | '/') factor)*
factor          ::= NUMBER | IDENTIFIER | STRING | CHAR
                  | 'true' | 'false' | '(' expression ')'

All expression-level operators share one precedence tier and fold left
to right; only '*' and '/' bind tighter.

Evaluation Model
----------------
Everything is evaluated exactly once, in source order:

- Both branches of an if statement are parsed and evaluated regardless
  of the condition.
- Loop bodies, conditions and for-loop updates are evaluated once; there
  is no loop-back.

The first error stops the parse; there is no recovery.

Example Usage
-------------
>>> from minic.parser import parse_source
>>> symbols = parse_source('int x = 5; x = x + 10;')
>>> symbols.lookup_value("x").text
'15'
"""

import logging
from typing import Optional

from minic.errors import MinicSyntaxError
from minic.evaluator import EXPRESSION_OPERATORS, TERM_OPERATORS, Operator, fold
from minic.lexer import Token, TokenKind, tokenize
from minic.symbols import SymbolTable
from minic.values import IntValue, TextValue, Value, ZERO, from_text

logger = logging.getLogger(__name__)


# Readable names for tokens in error messages
TOKEN_NAMES: dict[TokenKind, str] = {
    TokenKind.EOF: "end of file",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.NUMBER: "number",
    TokenKind.STRING_LITERAL: "string literal",
    TokenKind.CHAR_LITERAL: "char literal",
    TokenKind.INT: "'int'",
    TokenKind.FLOAT: "'float'",
    TokenKind.DOUBLE: "'double'",
    TokenKind.STRING: "'string'",
    TokenKind.BOOL: "'bool'",
    TokenKind.CHAR: "'char'",
    TokenKind.IF: "'if'",
    TokenKind.ELSE: "'else'",
    TokenKind.WHILE: "'while'",
    TokenKind.FOR: "'for'",
    TokenKind.RETURN: "'return'",
    TokenKind.TRUE: "'true'",
    TokenKind.FALSE: "'false'",
    TokenKind.PLUS: "'+'",
    TokenKind.MINUS: "'-'",
    TokenKind.STAR: "'*'",
    TokenKind.SLASH: "'/'",
    TokenKind.EQ: "'=='",
    TokenKind.NE: "'!='",
    TokenKind.LT: "'<'",
    TokenKind.GT: "'>'",
    TokenKind.AND: "'&&'",
    TokenKind.OR: "'||'",
    TokenKind.ASSIGN: "'='",
    TokenKind.LPAREN: "'('",
    TokenKind.RPAREN: "')'",
    TokenKind.LBRACE: "'{'",
    TokenKind.RBRACE: "'}'",
    TokenKind.SEMICOLON: "';'",
}


def describe(token: Token) -> str:
    """Describe a token for an error message."""
    if token.kind == TokenKind.EOF:
        return "end of file"
    return f"'{token.lexeme}'"


class Parser:
    """
    Single-pass recursive descent parser and evaluator for minic.

    The parser owns the token list (read-only) and the symbol table
    (mutated by declarations and assignments). The cursor only moves
    forward, one token per consume.

    Attributes:
        tokens: Tokens from the lexer, ending with EOF
        filename: Source filename for log messages
        symbols: Symbol table populated during the parse
        returns: Values of every return statement, in source order
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        symbols: Optional[SymbolTable] = None,
    ):
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token list must end with an EOF token")

        self.tokens = tokens
        self.filename = filename
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.returns: list[Value] = []

        # Current position in token stream
        self._pos = 0

    def parse(self) -> SymbolTable:
        """
        Parse and evaluate the whole program.

        Returns:
            The populated symbol table

        Raises:
            MinicError: The first lexical, syntax, symbol or evaluation
                        error encountered
        """
        statements = 0
        try:
            while not self._at_end():
                self._parse_statement()
                statements += 1
        except RecursionError:
            # Nested parentheses and blocks recurse once per level
            raise MinicSyntaxError(
                "program nested too deeply",
                self._peek().line,
                hint="Split deeply nested expressions or blocks into separate statements",
            ) from None

        logger.debug(
            f"{self.filename}: parsed {statements} top-level statements, "
            f"{len(self.symbols)} symbols"
        )
        return self.symbols

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().kind == TokenKind.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *kinds: TokenKind) -> bool:
        return self._peek().kind in kinds

    def _match(self, *kinds: TokenKind) -> Optional[Token]:
        """Consume the current token if it is one of kinds."""
        if self._check(*kinds):
            return self._advance()
        return None

    def _expect(self, kind: TokenKind) -> Token:
        """
        Expect and consume a specific token kind.

        Raises:
            MinicSyntaxError: If the current token is of another kind
        """
        if self._check(kind):
            return self._advance()

        expected = TOKEN_NAMES[kind]
        raise self._error(f"expected {expected}", expected)

    def _error(self, message: str, expected: Optional[str] = None) -> MinicSyntaxError:
        token = self._peek()
        found = describe(token)
        return MinicSyntaxError(
            f"{message}, found {found}",
            token.line,
            expected=expected,
            found=found,
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> None:
        token = self._peek()

        if token.is_type_keyword():
            self._parse_declaration()
        elif token.kind == TokenKind.IDENTIFIER:
            self._parse_assignment()
        elif token.kind == TokenKind.IF:
            self._parse_if_statement()
        elif token.kind == TokenKind.WHILE:
            self._parse_while_statement()
        elif token.kind == TokenKind.FOR:
            self._parse_for_statement()
        elif token.kind == TokenKind.RETURN:
            self._parse_return_statement()
        elif token.kind == TokenKind.LBRACE:
            self._parse_block()
        else:
            raise self._error("expected a statement", "statement")

    def _parse_block(self) -> None:
        """Parse { statement* }. Blocks do not open a scope."""
        self._expect(TokenKind.LBRACE)
        while not self._check(TokenKind.RBRACE) and not self._at_end():
            self._parse_statement()
        self._expect(TokenKind.RBRACE)

    def _parse_declaration(self) -> None:
        """
        Parse a declaration and insert it into the symbol table.

        The name is checked for redeclaration before the initializer is
        evaluated, so errors are reported in source order. Without an
        initializer the value is 0.
        """
        type_token = self._advance()
        name_token = self._expect(TokenKind.IDENTIFIER)
        self.symbols.check_redeclaration(name_token.lexeme, name_token.line)

        value = ZERO
        if self._match(TokenKind.ASSIGN):
            value = self._parse_expression()
        self._expect(TokenKind.SEMICOLON)

        self.symbols.insert(name_token.lexeme, type_token.lexeme, value, name_token.line)

    def _parse_assignment(self, terminated: bool = True) -> None:
        """Parse IDENT '=' expression, followed by ';' when terminated."""
        name_token = self._expect(TokenKind.IDENTIFIER)
        # Resolve before the right-hand side so an undeclared target is
        # reported ahead of anything in the expression
        self.symbols.lookup(name_token.lexeme, name_token.line)
        self._expect(TokenKind.ASSIGN)
        value = self._parse_expression()
        if terminated:
            self._expect(TokenKind.SEMICOLON)

        self.symbols.update(name_token.lexeme, value, name_token.line)

    def _parse_if_statement(self) -> None:
        """Parse an if statement; both branches are always evaluated."""
        self._expect(TokenKind.IF)
        self._expect(TokenKind.LPAREN)
        self._parse_expression()
        self._expect(TokenKind.RPAREN)

        self._parse_statement()
        if self._match(TokenKind.ELSE):
            self._parse_statement()

    def _parse_while_statement(self) -> None:
        """Parse a while loop; the body is evaluated once."""
        self._expect(TokenKind.WHILE)
        self._expect(TokenKind.LPAREN)
        self._parse_expression()
        self._expect(TokenKind.RPAREN)
        self._parse_statement()

    def _parse_for_statement(self) -> None:
        """
        Parse a for loop.

        The initializer is a full declaration or assignment (with its own
        ';'). The update is optional and may be an assignment without ';'.
        Each section and the body are evaluated once.
        """
        self._expect(TokenKind.FOR)
        self._expect(TokenKind.LPAREN)

        if self._peek().is_type_keyword():
            self._parse_declaration()
        elif self._check(TokenKind.IDENTIFIER):
            self._parse_assignment()
        else:
            raise self._error("expected a declaration or assignment", "initializer")

        self._parse_expression()
        self._expect(TokenKind.SEMICOLON)

        if not self._check(TokenKind.RPAREN):
            if self._check(TokenKind.IDENTIFIER) and self._peek(1).kind == TokenKind.ASSIGN:
                self._parse_assignment(terminated=False)
            else:
                self._parse_expression()
        self._expect(TokenKind.RPAREN)

        self._parse_statement()

    def _parse_return_statement(self) -> None:
        self._expect(TokenKind.RETURN)
        value = self._parse_expression()
        self._expect(TokenKind.SEMICOLON)
        self.returns.append(value)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Value:
        """Fold term (op term)* left to right at a single precedence tier."""
        value = self._parse_term()
        while self._peek().kind in EXPRESSION_OPERATORS:
            op_token = self._advance()
            right = self._parse_term()
            value = fold(value, right, Operator.from_token(op_token.kind), op_token.line)
        return value

    def _parse_term(self) -> Value:
        """Fold factor (('*' | '/') factor)* left to right."""
        value = self._parse_factor()
        while self._peek().kind in TERM_OPERATORS:
            op_token = self._advance()
            right = self._parse_factor()
            value = fold(value, right, Operator.from_token(op_token.kind), op_token.line)
        return value

    def _parse_factor(self) -> Value:
        """Parse a literal, a declared identifier, or a parenthesized expression."""
        token = self._peek()

        if token.kind == TokenKind.NUMBER:
            self._advance()
            return from_text(token.lexeme)

        if token.kind == TokenKind.IDENTIFIER:
            self._advance()
            return self.symbols.lookup_value(token.lexeme, token.line)

        if token.kind in (TokenKind.STRING_LITERAL, TokenKind.CHAR_LITERAL):
            self._advance()
            return TextValue(token.value)

        if token.kind == TokenKind.TRUE:
            self._advance()
            return IntValue(1)

        if token.kind == TokenKind.FALSE:
            self._advance()
            return IntValue(0)

        if token.kind == TokenKind.LPAREN:
            self._advance()
            value = self._parse_expression()
            self._expect(TokenKind.RPAREN)
            return value

        raise self._error("expected an expression", "expression")


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    aliases: Optional[dict[str, str]] = None,
) -> SymbolTable:
    """
    Tokenize, parse and evaluate minic source code.

    Args:
        source: The minic source code
        filename: Source filename
        aliases: Localized keyword aliases, None for the defaults

    Returns:
        The symbol table after the whole program has been evaluated

    Raises:
        MinicError: The first error encountered
    """
    tokens = tokenize(source, filename, aliases)
    return Parser(tokens, filename).parse()
