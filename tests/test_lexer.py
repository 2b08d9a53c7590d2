"""Tests for the template lexer."""

import unittest

from tinplate.errors import (
    Position,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnknownControlKeyword,
    UnknownOperator,
)
from tinplate.lexer import Lexer
from tinplate.tokens import (
    ElseToken,
    EndToken,
    ForToken,
    Identifier,
    IfToken,
    Number,
    Operator,
    PartialToken,
    StringLiteral,
    TextToken,
    VariableToken,
)


def lex(source: str) -> list:
    lexer = Lexer.for_source(source)
    tokens = []
    while not lexer.at_end:
        tokens.append(lexer.next())
    return tokens


def expr_values(source: str) -> list[tuple[type, str]]:
    (token,) = lex(source)
    return [(type(t), t.value) for t in token.expr]


class TestLexerMarkup(unittest.TestCase):
    def test_plain_text(self):
        tokens = lex("Simple string")
        self.assertEqual(len(tokens), 1)
        self.assertIsInstance(tokens[0], TextToken)
        self.assertEqual(tokens[0].value, "Simple string")

    def test_empty_source(self):
        self.assertEqual(lex(""), [])

    def test_variable(self):
        tokens = lex("Hello, {{world}}!")
        self.assertEqual([type(t) for t in tokens], [TextToken, VariableToken, TextToken])
        self.assertEqual(tokens[1].name, "world")
        self.assertEqual(tokens[2].value, "!")

    def test_variable_with_spaces(self):
        (token,) = lex("{{    stuff }}")
        self.assertEqual(token.name, "stuff")

    def test_dotted_variable(self):
        (token,) = lex("{{me.name}}")
        self.assertEqual(token.name, "me.name")

    def test_unterminated_variable(self):
        with self.assertRaises(UnexpectedEndOfInput):
            lex("Hello {{ name")

    def test_empty_variable(self):
        with self.assertRaises(UnexpectedCharacter):
            lex("{{ }}")

    def test_partial(self):
        tokens = lex("<h1>{> body}</h1>")
        self.assertIsInstance(tokens[1], PartialToken)
        self.assertEqual(tokens[1].name, "body")

    def test_partial_without_space(self):
        (token,) = lex("{>wordEntry}")
        self.assertEqual(token.name, "wordEntry")

    def test_single_brace_is_text(self):
        (token,) = lex("a { b } c")
        self.assertEqual(token.value, "a { b } c")

    def test_token_positions(self):
        tokens = lex("ab\n{{x}}")
        self.assertEqual(tokens[0].position, Position(1, 0))
        self.assertEqual(tokens[1].position, Position(2, 0))


class TestLexerControl(unittest.TestCase):
    def test_for(self):
        (token,) = lex("{% for people as person %}")
        self.assertIsInstance(token, ForToken)
        self.assertEqual(token.iterable, "people")
        self.assertEqual(token.binding, "person")

    def test_for_without_spaces(self):
        (token,) = lex("{%for vals as val%}")
        self.assertEqual((token.iterable, token.binding), ("vals", "val"))

    def test_for_dotted_iterable(self):
        (token,) = lex("{% for p.hobbies as h %}")
        self.assertEqual(token.iterable, "p.hobbies")

    def test_for_missing_as(self):
        with self.assertRaises(UnexpectedCharacter) as ctx:
            lex("{% for xs x %}")
        self.assertEqual(ctx.exception.expected, "'as'")

    def test_for_dotted_binding(self):
        with self.assertRaises(UnexpectedCharacter) as ctx:
            lex("{% for xs as x.y %}")
        self.assertEqual(ctx.exception.expected, "a binding name")
        self.assertEqual(ctx.exception.found, ".")
        self.assertEqual(ctx.exception.position, Position(1, 14))

    def test_for_binding_at_end_of_input(self):
        with self.assertRaises(UnexpectedEndOfInput):
            lex("{% for xs as x")

    def test_else_and_end(self):
        tokens = lex("{% else %}{%end%}")
        self.assertIsInstance(tokens[0], ElseToken)
        self.assertIsInstance(tokens[1], EndToken)

    def test_end_missing_close(self):
        with self.assertRaises(UnexpectedCharacter):
            lex("{% end }")

    def test_unknown_keyword(self):
        with self.assertRaises(UnknownControlKeyword) as ctx:
            lex("{% while x %}")
        self.assertEqual(ctx.exception.keyword, "while")
        self.assertEqual(ctx.exception.allowed, ("for", "if", "else", "end"))
        self.assertIn("for, if, else, end", str(ctx.exception))

    def test_control_tag_at_end_of_input(self):
        with self.assertRaises(UnexpectedEndOfInput) as ctx:
            lex("abc {%")
        self.assertEqual(ctx.exception.position, Position(1, 6))

    def test_control_tag_spaces_then_end_of_input(self):
        with self.assertRaises(UnexpectedEndOfInput):
            lex("{%   ")

    def test_peek_caches_token(self):
        lexer = Lexer.for_source("a{{b}}")
        first = lexer.peek()
        self.assertIs(lexer.peek(), first)
        self.assertIs(lexer.next(), first)
        self.assertIsInstance(lexer.next(), VariableToken)
        self.assertIsNone(lexer.next())
        self.assertTrue(lexer.at_end)


class TestLexerExpressions(unittest.TestCase):
    def test_if_tokens(self):
        self.assertEqual(
            expr_values('{% if name == "Jim" && 42 != 17.5 %}'),
            [
                (Identifier, "name"),
                (Operator, "=="),
                (StringLiteral, "Jim"),
                (Operator, "&&"),
                (Number, "42"),
                (Operator, "!="),
                (Number, "17.5"),
            ],
        )

    def test_single_quoted_string(self):
        self.assertEqual(expr_values("{% if 'a b' %}"), [(StringLiteral, "a b")])

    def test_string_has_no_escapes(self):
        self.assertEqual(expr_values(r'{% if "a\" %}'), [(StringLiteral, "a\\")])

    def test_or_operator(self):
        self.assertEqual(
            expr_values("{% if a||b %}"),
            [(Identifier, "a"), (Operator, "||"), (Identifier, "b")],
        )

    def test_dotted_identifier(self):
        self.assertEqual(expr_values("{% if foo.bar_1 exists %}"), [
            (Identifier, "foo.bar_1"),
            (Identifier, "exists"),
        ])

    def test_empty_condition_is_lexed(self):
        (token,) = lex("{% if %}")
        self.assertIsInstance(token, IfToken)
        self.assertEqual(token.expr, ())

    def test_unterminated_string(self):
        with self.assertRaises(UnexpectedEndOfInput):
            lex('{% if "abc %}')

    def test_unknown_operator(self):
        with self.assertRaises(UnknownOperator):
            lex("{% if a = b %}")

    def test_single_ampersand(self):
        with self.assertRaises(UnknownOperator):
            lex("{% if a & b %}")

    def test_unexpected_expression_character(self):
        with self.assertRaises(UnexpectedCharacter):
            lex("{% if a > b %}")

    def test_unclosed_if(self):
        with self.assertRaises(UnexpectedEndOfInput):
            lex("{% if a")


if __name__ == "__main__":
    unittest.main()
