"""
Faults module behavioral tests (codes, exceptions, rendering).

Scope
- Validate stable fault codes and host normalization.
- Validate exception payloads (message, read-only options, token).
- Validate rich rendering in plain and fancy modes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from cmdtree import Parser, FaultCode, CommandException, EmptyInputError, UnknownFlagError, getdoc


def render(exception):
    console = Console(file=io.StringIO(), width=100, color_system=None, force_terminal=False)
    console.print(exception)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testStableValues(self):
        self.assertEqual(FaultCode.EMPTY_INPUT, 11100)
        self.assertEqual(FaultCode.UNKNOWN_FLAG, 11112)

    def testNormalizeWithoutHostMapping(self):
        self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "11112")

    def testGetdocWithoutHostDocs(self):
        self.assertIsNone(getdoc(FaultCode.EMPTY_INPUT))

    def testGetdocRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11100)


class TestExceptions(TestCase):
    """Behavioral tests for the exception types."""

    def testTaxonomyIsFlat(self):
        self.assertTrue(issubclass(EmptyInputError, CommandException))
        self.assertTrue(issubclass(UnknownFlagError, CommandException))
        self.assertFalse(issubclass(UnknownFlagError, EmptyInputError))

    def testMessageIsStr(self):
        self.assertEqual(str(EmptyInputError("no arguments provided")), "no arguments provided")

    def testOptionsAreReadOnly(self):
        exception = UnknownFlagError("unknown flag", token="-x")
        with self.assertRaises(TypeError):
            exception.options["token"] = "-y"

    def testTokenProperty(self):
        self.assertEqual(UnknownFlagError("unknown flag", token="-x").token, "-x")

    def testRaisedFaultCarriesTool(self):
        parser = Parser("tool")
        with self.assertRaises(UnknownFlagError) as context:
            parser.parse(["-x"])
        self.assertIs(context.exception.options["tool"], parser)


class TestRendering(TestCase):
    """Behavioral tests for __rich__ rendering."""

    def fault(self, parser):
        try:
            parser.parse(["--nope"])
        except UnknownFlagError as exception:
            return exception
        self.fail("UnknownFlagError not raised")

    def testPlainRendering(self):
        output = render(self.fault(Parser("tool").flag("verbose", "v")))
        self.assertIn("[ tool — 11112 | Unknown Flag ]", output)
        self.assertIn("unknown flag '--nope' at first position", output)
        self.assertIn("'tool' accepts --verbose, -v", output)

    def testFancyRenderingUsesPanel(self):
        output = render(self.fault(Parser("tool", fancy=True)))
        self.assertIn("╭", output)
        self.assertIn("Unknown Flag", output)

    def testChildFaultUsesRootName(self):
        root = Parser("tool")
        child = root.command("run")
        output = render(self.fault(root))
        self.assertIn("[ tool —", output)
        with self.assertRaises(UnknownFlagError) as context:
            root.parse(["run", "--nope"])
        self.assertIs(context.exception.options["tool"], child)
        self.assertIn("[ tool —", render(context.exception))

    def testBareExceptionRenders(self):
        self.assertIn("something", render(CommandException("something")))


if __name__ == "__main__":
    unittest.main()
