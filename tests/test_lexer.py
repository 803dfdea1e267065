"""
Test suite for the Lumen lexer and token sources.

Tests cover:
- Keywords, identifiers and literals
- Longest-match operator scanning
- Comments, strings and escapes
- Spans and EOF behaviour
- Lexer error reporting
"""

import tempfile
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lumen.lexer import (
    Lexer, LexerError, Span, Token, TokenStream, TokenType,
    symbol_for, tokenize_file, tokenize_string,
)


def token_types(source):
    return [token.type for token in tokenize_string(source)]


class TestLexer(unittest.TestCase):
    """Test cases for scanning source text into tokens."""

    def test_empty_source_is_single_eof(self):
        tokens = tokenize_string("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)
        self.assertEqual(tokens[0].span.offset, 0)

    def test_let_statement(self):
        """Test a simple declaration produces the expected token sequence."""
        self.assertEqual(token_types("let a = 1;"), [
            TokenType.LET, TokenType.IDENTIFIER, TokenType.ASSIGN,
            TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
        ])

    def test_keywords(self):
        source = "let const class fn function print if else while for return break continue this super"
        self.assertEqual(token_types(source)[:-1], [
            TokenType.LET, TokenType.CONST, TokenType.CLASS, TokenType.FN, TokenType.FN,
            TokenType.PRINT, TokenType.IF, TokenType.ELSE, TokenType.WHILE, TokenType.FOR,
            TokenType.RETURN, TokenType.BREAK, TokenType.CONTINUE, TokenType.THIS,
            TokenType.SUPER,
        ])

    def test_word_logical_operators(self):
        self.assertEqual(token_types("a or b and not c")[:-1], [
            TokenType.IDENTIFIER, TokenType.LOGICAL_OR, TokenType.IDENTIFIER,
            TokenType.LOGICAL_AND, TokenType.LOGICAL_NOT, TokenType.IDENTIFIER,
        ])

    def test_keyword_prefix_is_identifier(self):
        tokens = tokenize_string("letter iffy _fn")
        self.assertTrue(all(token.is_identifier for token in tokens[:-1]))
        self.assertEqual(tokens[0].value, "letter")

    def test_numbers_are_floats(self):
        tokens = tokenize_string("42 3.14")
        self.assertEqual(tokens[0].value, 42.0)
        self.assertIsInstance(tokens[0].value, float)
        self.assertEqual(tokens[1].value, 3.14)
        self.assertEqual(tokens[1].lexeme, "3.14")

    def test_number_followed_by_dot(self):
        self.assertEqual(token_types("1.foo")[:-1], [
            TokenType.NUMBER, TokenType.DOT, TokenType.IDENTIFIER,
        ])

    def test_booleans(self):
        tokens = tokenize_string("true false")
        self.assertEqual(tokens[0].type, TokenType.TRUE)
        self.assertIs(tokens[0].value, True)
        self.assertEqual(tokens[1].type, TokenType.FALSE)
        self.assertIs(tokens[1].value, False)
        self.assertTrue(tokens[0].is_literal)

    def test_operators_longest_match(self):
        self.assertEqual(token_types("== = != ! <= < >= > || | && & += -= *= /= %= &= |= ^=")[:-1], [
            TokenType.EQUAL, TokenType.ASSIGN, TokenType.NOT_EQUAL, TokenType.LOGICAL_NOT,
            TokenType.LESS_EQUAL, TokenType.LESS_THAN, TokenType.GREATER_EQUAL,
            TokenType.GREATER_THAN, TokenType.LOGICAL_OR, TokenType.BIT_OR,
            TokenType.LOGICAL_AND, TokenType.BIT_AND, TokenType.PLUS_ASSIGN,
            TokenType.MINUS_ASSIGN, TokenType.MULTIPLY_ASSIGN, TokenType.DIVIDE_ASSIGN,
            TokenType.MODULO_ASSIGN, TokenType.AND_ASSIGN, TokenType.OR_ASSIGN,
            TokenType.XOR_ASSIGN,
        ])

    def test_operators_without_spaces(self):
        self.assertEqual(token_types("a==-b")[:-1], [
            TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.MINUS, TokenType.IDENTIFIER,
        ])

    def test_punctuation(self):
        self.assertEqual(token_types("(){},.;")[:-1], [
            TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE, TokenType.COMMA, TokenType.DOT, TokenType.SEMICOLON,
        ])

    def test_comments_are_skipped(self):
        source = """
        // line comment
        a /* block
        comment */ b
        """
        self.assertEqual(token_types(source), [
            TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_division_is_not_comment(self):
        self.assertEqual(token_types("a / b")[:-1], [
            TokenType.IDENTIFIER, TokenType.DIVIDE, TokenType.IDENTIFIER,
        ])

    def test_string_literal(self):
        token = tokenize_string('"hello world"')[0]
        self.assertEqual(token.type, TokenType.STRING)
        self.assertEqual(token.value, "hello world")
        self.assertEqual(token.lexeme, '"hello world"')
        self.assertEqual(token.span.length, 13)

    def test_string_escapes(self):
        token = tokenize_string(r'"a\nb\t\"q\"\\"')[0]
        self.assertEqual(token.value, 'a\nb\t"q"\\')

    def test_multiline_string_advances_line(self):
        tokens = tokenize_string('"one\ntwo" x')
        self.assertEqual(tokens[0].value, "one\ntwo")
        self.assertEqual(tokens[1].span.line, 2)
        self.assertEqual(tokens[1].span.column, 6)

    def test_spans(self):
        """Test line, column and offset tracking across lines."""
        tokens = tokenize_string("let a\n  = 10;", "demo.lm")
        number = tokens[3]
        self.assertEqual(number.lexeme, "10")
        self.assertEqual(number.span, Span(2, 5, 10, 2, "demo.lm"))
        self.assertEqual(str(number.span), "demo.lm:2:5")

    def test_eof_is_idempotent(self):
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENTIFIER)
        first = lexer.next_token()
        second = lexer.next_token()
        self.assertEqual(first.type, TokenType.EOF)
        self.assertEqual(first, second)

    def test_tokenize_rescans_from_start(self):
        lexer = Lexer("a b")
        lexer.next_token()
        self.assertEqual(len(lexer.tokenize()), 3)

    def test_tokenize_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "main.lm")
            with open(path, "w", encoding="utf-8") as f:
                f.write("print 1;\n")
            tokens = tokenize_file(path)

        self.assertEqual([token.type for token in tokens], [
            TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
        ])
        self.assertEqual(tokens[0].span.filename, path)

    def test_keyword_flag(self):
        tokens = tokenize_string("while name or true")
        self.assertTrue(tokens[0].is_keyword)
        self.assertFalse(tokens[1].is_keyword)
        # Word operators are operators, not keywords
        self.assertFalse(tokens[2].is_keyword)
        self.assertTrue(tokens[3].is_keyword)


class TestLexerErrors(unittest.TestCase):
    """Test cases for lexer diagnostics."""

    def _error(self, source):
        with self.assertRaises(LexerError) as context:
            tokenize_string(source)
        return context.exception

    def test_invalid_character(self):
        error = self._error("let a = 1 @ 2;")
        self.assertEqual(error.diagnostic.code, "L001")
        self.assertEqual(error.span.offset, 10)
        self.assertEqual(error.span.length, 1)
        self.assertIn("'@'", error.message)

    def test_unicode_identifier_rejected(self):
        self.assertEqual(self._error("café").diagnostic.code, "L001")

    def test_unterminated_string(self):
        error = self._error('print "abc')
        self.assertEqual(error.diagnostic.code, "L002")
        self.assertEqual(error.span.offset, 6)

    def test_unterminated_comment(self):
        error = self._error("a /* never closed")
        self.assertEqual(error.diagnostic.code, "L003")
        self.assertEqual(error.span.column, 3)

    def test_invalid_escape(self):
        error = self._error(r'"bad \q escape"')
        self.assertEqual(error.diagnostic.code, "L004")
        self.assertIn("\\q", error.message)

    def test_error_string_includes_location(self):
        error = self._error("#")
        self.assertIn("ERROR: Invalid character", str(error))
        self.assertIn("<string>:1:1", str(error))


class TestTokenStream(unittest.TestCase):
    """Test cases for list-backed token sources."""

    def test_replays_tokens_then_eof(self):
        tokens = tokenize_string("a;")
        stream = TokenStream(tokens)
        self.assertEqual([stream.next_token() for _ in range(3)], tokens)
        self.assertEqual(stream.next_token().type, TokenType.EOF)

    def test_synthesizes_eof_after_last_token(self):
        name = Token(TokenType.IDENTIFIER, "abc", "abc", Span(1, 1, 0, 3))
        stream = TokenStream([name])
        self.assertIs(stream.next_token(), name)
        eof = stream.next_token()
        self.assertEqual(eof.type, TokenType.EOF)
        self.assertEqual(eof.span.offset, 3)
        self.assertEqual(eof.span.column, 4)
        self.assertEqual(stream.next_token(), eof)

    def test_empty_stream(self):
        self.assertEqual(TokenStream([]).next_token().type, TokenType.EOF)


class TestTokenTables(unittest.TestCase):

    def test_symbol_for(self):
        self.assertEqual(symbol_for(TokenType.LOGICAL_OR), "||")
        self.assertEqual(symbol_for(TokenType.PLUS_ASSIGN), "+=")
        self.assertEqual(symbol_for(TokenType.SEMICOLON), ";")
        self.assertEqual(symbol_for(TokenType.WHILE), "while")

    def test_span_to(self):
        start = Span(1, 1, 0, 3)
        end = Span(2, 4, 10, 2)
        covered = start.to(end)
        self.assertEqual(covered, Span(1, 1, 0, 12))
        self.assertEqual(covered.end, 12)


if __name__ == '__main__':
    unittest.main()
