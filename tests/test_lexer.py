# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the minic lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords, localized aliases and identifiers
#   - Numeric literals, including the single decimal point rule
#   - String and character literals
#   - Two-character operator disambiguation
#   - Comments, whitespace and line tracking
#   - Error conditions
#   - Re-lexing the joined lexemes gives the same kinds
# =============================================================================

import pytest
from minic.lexer import Lexer, Token, TokenKind, tokenize, resolve_aliases
from minic.errors import LexicalError


# =============================================================================
# Helper Functions
# =============================================================================

def kinds(source: str, aliases: dict = None) -> list:
    """Token kinds for source, without the trailing EOF."""
    return [t.kind for t in tokenize(source, "<test>", aliases)[:-1]]


def lexemes(source: str) -> list:
    return [t.lexeme for t in tokenize(source, "<test>")[:-1]]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces exactly one EOF token."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].line == 1

    def test_whitespace_only(self):
        """EOF carries the final line number."""
        tokens = tokenize("  \n\t \r\n  ")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].line == 3

    def test_single_eof(self):
        tokens = tokenize("int x;")
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
        assert tokens[-1].kind == TokenKind.EOF

    def test_declaration(self):
        assert kinds("int x = 5;") == [
            TokenKind.INT,
            TokenKind.IDENTIFIER,
            TokenKind.ASSIGN,
            TokenKind.NUMBER,
            TokenKind.SEMICOLON,
        ]

    def test_tokens_are_immutable(self):
        token = tokenize("x")[0]
        with pytest.raises(AttributeError):
            token.lexeme = "y"

    def test_repr(self):
        assert repr(tokenize("x")[0]) == "Token(IDENTIFIER, 'x', 1)"


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestKeywords:
    """Keyword classification."""

    def test_type_keywords(self):
        assert kinds("int float double string bool char") == [
            TokenKind.INT,
            TokenKind.FLOAT,
            TokenKind.DOUBLE,
            TokenKind.STRING,
            TokenKind.BOOL,
            TokenKind.CHAR,
        ]

    def test_control_keywords(self):
        assert kinds("if else while for return") == [
            TokenKind.IF,
            TokenKind.ELSE,
            TokenKind.WHILE,
            TokenKind.FOR,
            TokenKind.RETURN,
        ]

    def test_boolean_literals(self):
        assert kinds("true false") == [TokenKind.TRUE, TokenKind.FALSE]

    def test_keywords_are_case_sensitive(self):
        assert kinds("Int IF While") == [TokenKind.IDENTIFIER] * 3

    def test_keyword_prefix_is_identifier(self):
        """Maximal munch: 'integer' is one identifier, not 'int' + 'eger'."""
        tokens = tokenize("integer iffy")
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].lexeme == "integer"
        assert tokens[1].kind == TokenKind.IDENTIFIER

    def test_identifier_with_digits(self):
        tokens = tokenize("count2")
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].lexeme == "count2"

    def test_is_type_keyword(self):
        tokens = tokenize("bool x")
        assert tokens[0].is_type_keyword()
        assert not tokens[1].is_type_keyword()


class TestAliases:
    """Localized keyword aliases."""

    def test_default_aliases(self):
        tokens = tokenize("si sino")
        assert tokens[0].kind == TokenKind.IF
        assert tokens[1].kind == TokenKind.ELSE
        # The lexeme keeps the localized spelling
        assert tokens[0].lexeme == "si"

    def test_custom_aliases(self):
        aliases = {"agar": "if", "warna": "else"}
        assert kinds("agar warna si", aliases) == [
            TokenKind.IF,
            TokenKind.ELSE,
            TokenKind.IDENTIFIER,
        ]

    def test_no_aliases(self):
        assert kinds("si sino", {}) == [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER]

    def test_alias_cannot_shadow_keyword(self):
        with pytest.raises(ValueError):
            resolve_aliases({"int": "if"})

    def test_type_keyword_cannot_be_aliased(self):
        with pytest.raises(ValueError):
            resolve_aliases({"entero": "int"})

    def test_alias_must_be_identifier(self):
        with pytest.raises(ValueError):
            resolve_aliases({"1f": "if"})

    def test_lexer_rejects_bad_alias(self):
        with pytest.raises(ValueError):
            Lexer("x", aliases={"si": "nothing"})


# =============================================================================
# Number Format Tests
# =============================================================================

class TestNumbers:
    """Numeric literal scanning."""

    def test_integer(self):
        tokens = tokenize("123")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].lexeme == "123"

    def test_decimal(self):
        tokens = tokenize("3.14")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].lexeme == "3.14"

    def test_leading_zeros_kept(self):
        assert tokenize("007")[0].lexeme == "007"

    def test_second_decimal_point_stops_run(self):
        """'1.2.3' scans as '1.2'; the next '.' is then unexpected."""
        lexer = Lexer("1.2.3")
        stream = lexer.tokenize()
        first = next(stream)
        assert first.lexeme == "1.2"
        with pytest.raises(LexicalError) as exc_info:
            next(stream)
        assert "'.'" in exc_info.value.message

    def test_trailing_decimal_point(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("x = 5.;")
        assert "invalid number format" in exc_info.value.message
        assert exc_info.value.line == 1

    def test_number_followed_by_identifier(self):
        assert kinds("12abc") == [TokenKind.NUMBER, TokenKind.IDENTIFIER]


# =============================================================================
# String and Character Literal Tests
# =============================================================================

class TestLiterals:
    """String and character literals."""

    def test_string_literal(self):
        token = tokenize('"hello world"')[0]
        assert token.kind == TokenKind.STRING_LITERAL
        assert token.lexeme == '"hello world"'
        assert token.value == "hello world"

    def test_empty_string(self):
        token = tokenize('""')[0]
        assert token.kind == TokenKind.STRING_LITERAL
        assert token.value == ""

    def test_escaped_quote_does_not_terminate(self):
        token = tokenize(r'"say \"hi\""')[0]
        assert token.kind == TokenKind.STRING_LITERAL
        assert token.value == 'say "hi"'

    def test_escape_sequences(self):
        token = tokenize(r'"a\tb\nc\\"')[0]
        assert token.value == "a\tb\nc\\"

    def test_multiline_string(self):
        """A string may span lines; it is tagged with its starting line."""
        tokens = tokenize('"one\ntwo" x')
        assert tokens[0].line == 1
        assert tokens[0].value == "one\ntwo"
        assert tokens[1].line == 2

    def test_unterminated_string(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize('int a;\nstring s = "abc\n\n\n')
        assert "unterminated string" in exc_info.value.message
        # Reported at the literal's starting line, not the last line
        assert exc_info.value.line == 2

    def test_char_literal(self):
        token = tokenize("'a'")[0]
        assert token.kind == TokenKind.CHAR_LITERAL
        assert token.lexeme == "'a'"
        assert token.value == "a"

    def test_char_literal_too_long(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("'ab'")
        assert "invalid character literal" in exc_info.value.message

    def test_unterminated_char_literal(self):
        with pytest.raises(LexicalError):
            tokenize("'")

    def test_char_literal_newline(self):
        with pytest.raises(LexicalError):
            tokenize("'\n'")


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Single and two-character operators."""

    def test_single_character_operators(self):
        assert kinds("= + - * / > < ( ) { } ;") == [
            TokenKind.ASSIGN,
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.STAR,
            TokenKind.SLASH,
            TokenKind.GT,
            TokenKind.LT,
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.LBRACE,
            TokenKind.RBRACE,
            TokenKind.SEMICOLON,
        ]

    def test_two_character_operators(self):
        assert kinds("== != && ||") == [
            TokenKind.EQ,
            TokenKind.NE,
            TokenKind.AND,
            TokenKind.OR,
        ]

    def test_double_equals_before_assign(self):
        """'==' wins over '=' '='; a third '=' is a separate assign."""
        assert kinds("a===b") == [
            TokenKind.IDENTIFIER,
            TokenKind.EQ,
            TokenKind.ASSIGN,
            TokenKind.IDENTIFIER,
        ]

    def test_operators_without_spaces(self):
        assert lexemes("a&&b||c!=d") == ["a", "&&", "b", "||", "c", "!=", "d"]

    @pytest.mark.parametrize("char", ["!", "&", "|", "@", "#", "%", "_", ","])
    def test_unexpected_character(self, char):
        with pytest.raises(LexicalError) as exc_info:
            tokenize(f"x {char} y")
        assert exc_info.value.message == f"unexpected character '{char}'"

    def test_unexpected_character_line(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("int x;\n\nx = 1 $ 2;")
        assert exc_info.value.line == 3
        assert exc_info.value.report() == "LexicalError: unexpected character '$' on line 3"

    def test_unprintable_character_is_escaped(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("x = 1 \x01 2;")
        assert exc_info.value.message == "unexpected character '\\x01'"


# =============================================================================
# Comment and Line Tracking Tests
# =============================================================================

class TestCommentsAndLines:
    """Comments and line numbers."""

    def test_form_feed_and_vertical_tab(self):
        assert kinds("int x;\f\vx = 1;") == [
            TokenKind.INT,
            TokenKind.IDENTIFIER,
            TokenKind.SEMICOLON,
            TokenKind.IDENTIFIER,
            TokenKind.ASSIGN,
            TokenKind.NUMBER,
            TokenKind.SEMICOLON,
        ]
        # Only LF advances the line
        assert tokenize("a\f\vb")[1].line == 1

    def test_line_comment(self):
        assert kinds("x // comment ; = +\ny") == [
            TokenKind.IDENTIFIER,
            TokenKind.IDENTIFIER,
        ]

    def test_comment_at_end_of_input(self):
        assert kinds("x // trailing") == [TokenKind.IDENTIFIER]

    def test_slash_is_division(self):
        assert kinds("a / b") == [
            TokenKind.IDENTIFIER,
            TokenKind.SLASH,
            TokenKind.IDENTIFIER,
        ]

    def test_line_numbers(self):
        tokens = tokenize("int a;\n// note\n\na = 5;")
        lines = [(t.lexeme, t.line) for t in tokens]
        assert lines == [
            ("int", 1), ("a", 1), (";", 1),
            ("a", 4), ("=", 4), ("5", 4), (";", 4),
            ("", 4),
        ]


# =============================================================================
# Re-lexing Tests
# =============================================================================

class TestRelex:
    """Joining lexemes with spaces and re-lexing keeps the kind sequence."""

    @pytest.mark.parametrize("source", [
        "int a; a = 5; int b; b = a + 10;",
        'if (b > 10) { return b; } else { return 0; } // done',
        "string s = \"x \\\" y\"; char c = 'q';",
        "for (int i = 0; i < 3; i = i + 1) { x = x && y || z != 2.5; }",
        "si (a == b) { } sino { }",
    ])
    def test_relex_same_kinds(self, source):
        tokens = tokenize(source)
        rejoined = " ".join(t.lexeme for t in tokens[:-1])
        assert [t.kind for t in tokenize(rejoined)] == [t.kind for t in tokens]
