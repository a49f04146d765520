"""
Helper module behavioral tests (usage synopsis, rows, wrapping).

Scope
- Validate command help: usage tokens, parameter rows before qualifier rows.
- Validate global help: '<command> [<args>]' and the command table.
- Validate word wrapping of usage and help text, long words, empty help.
- Validate that the colorful rendering has the same plain text.

Conventions
- Test method names follow CamelCase per project convention.
- Expected layouts are spelled out in full.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.text import Text

from cmdsyntax import Syntax
from cmdsyntax.helper import wrap


def lines(*lines):
    return "".join(line + "\n" for line in lines)


class TestWrap(TestCase):
    """Behavioral tests for the greedy word wrapper."""

    def testPacksWords(self):
        self.assertEqual([line.plain for line in wrap(["a", "bb", "ccc"], 4)], ["a bb", "ccc"])

    def testLongWordOnItsOwnLine(self):
        self.assertEqual(
            [line.plain for line in wrap(["ab", "abcdefgh", "c"], 4)],
            ["ab", "abcdefgh", "c"],
        )

    def testNoWords(self):
        self.assertEqual(list(wrap([], 10)), [])

    def testKeepsStyles(self):
        line, = wrap([Text("a", "bold"), Text("b", "italic")], 10)
        self.assertEqual(line.plain, "a b")
        self.assertEqual(len(line.spans), 2)


class TestCommandHelp(TestCase):
    """Behavioral tests for help without commands, or with an active one."""

    def testFlatProgram(self):
        syntax = Syntax("")
        syntax.qualifier("o|out", help="Output file")
        syntax.qualifier("v", bool, required=True, help="Verbose")
        syntax.parameter("file", required=True, help="Source file")
        self.assertEqual(syntax.gethelp("prog"), lines(
            "usage: prog [-o|--out] -v [--] <file>",
            "",
            "    <file>       Source file",
            "    -o, --out    Output file",
            "    -v           Verbose",
        ))

    def testActiveCommand(self):
        syntax = Syntax("commit")
        syntax.qualifier("q|quiet", bool, help="Quiet")
        self.assertTrue(syntax.command("commit", help="Record changes"))
        syntax.qualifier("m|message", help="Message")
        syntax.parameter("pathspec", help="Path")
        self.assertFalse(syntax.command("pull", help="Fetch"))
        self.assertEqual(syntax.gethelp("prog"), lines(
            "usage: prog [-q|--quiet] commit [-m|--message] [--] [<pathspec>]",
            "",
            "    <pathspec>       Path",
            "    -q, --quiet      Quiet",
            "    -m, --message    Message",
        ))

    def testRequiredAliasesAreGrouped(self):
        syntax = Syntax("")
        syntax.qualifier("o|out", required=True)
        self.assertTrue(syntax.gethelp("prog").startswith("usage: prog (-o|--out)\n"))

    def testEmptyHelpEndsTheRow(self):
        syntax = Syntax("")
        syntax.qualifier("x", bool)
        self.assertEqual(syntax.gethelp("prog"), lines(
            "usage: prog [-x]",
            "",
            "    -x",
        ))

    def testNoRows(self):
        syntax = Syntax("build")
        syntax.command("build")
        self.assertEqual(syntax.gethelp("prog"), lines("usage: prog build"))

    def testEmptySession(self):
        self.assertEqual(Syntax("").gethelp("prog"), lines("usage: prog"))

    def testWrapsHelpText(self):
        syntax = Syntax("")
        syntax.qualifier("x", bool, help="alpha beta gamma delta")
        self.assertEqual(syntax.gethelp("prog", 20), lines(
            "usage: prog [-x]",
            "",
            "    -x    alpha beta",
            "          gamma",
            "          delta",
        ))

    def testLongHelpWordKeptWhole(self):
        syntax = Syntax("")
        syntax.qualifier("x", bool, help="supercalifragilistic")
        self.assertTrue(syntax.gethelp("prog", 20).endswith("    -x    supercalifragilistic\n"))

    def testWrapsUsage(self):
        syntax = Syntax("")
        syntax.qualifier("a|alpha", bool)
        syntax.qualifier("b", bool)
        self.assertTrue(syntax.gethelp("prog", 24).startswith(lines(
            "usage: prog [-a|--alpha]",
            "            [-b]",
        )))

    def testNarrowWidthFallsBack(self):
        syntax = Syntax("")
        syntax.qualifier("x", bool, help="a b")
        self.assertEqual(syntax.gethelp("prog", 8), lines(
            "usage: prog [-x]",
            "",
            "    -x    a b",
        ))


class TestGlobalHelp(TestCase):
    """Behavioral tests for help when commands exist but none is active."""

    def testListsCommands(self):
        syntax = Syntax("")
        syntax.qualifier("q|quiet", bool, help="Quiet")
        if syntax.command("commit", help="Record changes"):
            syntax.qualifier("m|message")
        if syntax.command("pull", help="Fetch"):
            syntax.qualifier("r|rebase", bool)
        self.assertEqual(syntax.gethelp("prog"), lines(
            "usage: prog [-q|--quiet] <command> [<args>]",
            "",
            "Available commands:",
            "",
            "    commit    Record changes",
            "    pull      Fetch",
        ))

    def testRenderMatchesPlainHelp(self):
        syntax = Syntax("")
        syntax.command("commit", help="Record changes")
        rendered = syntax.render("prog")
        self.assertIsInstance(rendered, Text)
        self.assertEqual(rendered.plain, syntax.gethelp("prog"))
        self.assertTrue(rendered.spans)
        self.assertFalse(syntax.render("prog", colorful=False).spans)


if __name__ == "__main__":
    unittest.main()
