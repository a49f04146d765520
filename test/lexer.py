"""
Lexer behavioral tests (splitting, quoting, unterminated quotes).

Scope
- Validate word splitting and space folding.
- Validate quoted spans: interior spaces kept, edges trimmed, escaped quotes.
- Validate concatenation of adjacent segments and the shell-like regression line.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdsyntax import split, FaultCode, UnmatchedQuoteError


class TestSplit(TestCase):
    """Behavioral tests for split()."""

    def testSplitsSimpleWords(self):
        self.assertEqual(split("abc def ghi"), ["abc", "def", "ghi"])

    def testFoldsMultipleSpaces(self):
        self.assertEqual(split("abc  def       ghi"), ["abc", "def", "ghi"])

    def testEmptyInput(self):
        self.assertEqual(split(""), [])
        self.assertEqual(split("    "), [])

    def testQuotesKeepInteriorSpaces(self):
        self.assertEqual(split('abc "def  ghi"'), ["abc", "def  ghi"])

    def testTrimsLeadingWhitespaceInQuotes(self):
        self.assertEqual(split('abc " def"'), ["abc", "def"])

    def testTrimsTrailingWhitespaceInQuotes(self):
        self.assertEqual(split('abc "def "'), ["abc", "def"])

    def testDropsEmptyQuotedToken(self):
        self.assertEqual(split('abc "" "   " def'), ["abc", "def"])

    def testDoubledQuoteIsLiteral(self):
        self.assertEqual(split('abc "d""ef"'), ["abc", 'd"ef'])

    def testBackslashQuoteIsLiteral(self):
        self.assertEqual(split('abc "d\\"ef"'), ["abc", 'd"ef'])

    def testBackslashOutsideQuotesIsKept(self):
        self.assertEqual(split("C:\\temp\\ x"), ["C:\\temp\\", "x"])

    def testFoldsTopLevelDoubleQuotes(self):
        self.assertEqual(split('abc""def'), ["abcdef"])

    def testTokenizesLikeShell(self):
        text = '-out test parmeter1.cs -o:test "parameter with space.cs" "p\\"aram" "parameter with "".cs" "-v=value" "-q"=value -q="value"'
        self.assertEqual(split(text), [
            "-out",
            "test",
            "parmeter1.cs",
            "-o:test",
            "parameter with space.cs",
            'p"aram',
            'parameter with ".cs',
            "-v=value",
            "-q=value",
            "-q=value",
        ])

    def testDetectsUnterminatedQuote(self):
        with self.assertRaises(UnmatchedQuoteError) as context:
            split('abc "def')
        self.assertEqual(str(context.exception), "Unmatched quote at position 4")
        self.assertEqual(context.exception.code, FaultCode.UNMATCHED_QUOTE)
        self.assertEqual(context.exception.options["position"], 4)

    def testUnterminatedQuoteAfterBalancedSpan(self):
        with self.assertRaises(UnmatchedQuoteError) as context:
            split('"ok" "broken')
        self.assertEqual(context.exception.options["position"], 5)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            split(["abc"])  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
