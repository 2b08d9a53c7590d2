"""Tests for the character scanner."""

import unittest

from tinplate.errors import Position, UnexpectedCharacter, UnexpectedEndOfInput
from tinplate.scanner import END, Scanner


class TestScanner(unittest.TestCase):
    def test_peek_does_not_advance(self):
        scanner = Scanner("ab")
        self.assertEqual(scanner.peek(), "a")
        self.assertEqual(scanner.peek(1), "b")
        self.assertEqual(scanner.peek(), "a")

    def test_peek_past_end(self):
        scanner = Scanner("a")
        self.assertEqual(scanner.peek(1), END)
        self.assertEqual(scanner.peek(5), END)

    def test_advance(self):
        scanner = Scanner("ab")
        self.assertEqual(scanner.advance(), "a")
        self.assertEqual(scanner.advance(), "b")
        self.assertTrue(scanner.at_end)

    def test_advance_at_end(self):
        scanner = Scanner("")
        self.assertTrue(scanner.at_end)
        with self.assertRaises(UnexpectedEndOfInput) as ctx:
            scanner.advance()
        self.assertEqual(ctx.exception.position, Position(1, 0))

    def test_line_and_column(self):
        scanner = Scanner("ab\ncd")
        self.assertEqual(scanner.position, Position(1, 0))
        scanner.advance()
        scanner.advance()
        self.assertEqual(scanner.position, Position(1, 2))
        scanner.advance()  # newline
        self.assertEqual(scanner.position, Position(2, 0))
        scanner.advance()
        self.assertEqual(scanner.position, Position(2, 1))

    def test_unicode_code_points(self):
        scanner = Scanner("здрасти")
        self.assertEqual(scanner.advance(), "з")
        self.assertEqual(scanner.position, Position(1, 1))

    def test_read_while_stops_at_end(self):
        scanner = Scanner("aaa")
        self.assertEqual(scanner.read_while(lambda c: c == "a"), "aaa")
        self.assertTrue(scanner.at_end)

    def test_expect_match(self):
        scanner = Scanner("%}rest")
        scanner.expect("%}")
        self.assertEqual(scanner.peek(), "r")

    def test_expect_mismatch(self):
        scanner = Scanner("x %}")
        with self.assertRaises(UnexpectedCharacter) as ctx:
            scanner.expect("%}")
        self.assertEqual(ctx.exception.found, "x")
        self.assertIn("'%}'", str(ctx.exception))
        self.assertIn("line 1, column 0", str(ctx.exception))

    def test_expect_runs_out(self):
        scanner = Scanner("%")
        with self.assertRaises(UnexpectedEndOfInput):
            scanner.expect("%}")


if __name__ == "__main__":
    unittest.main()
