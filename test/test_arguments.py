"""
Arguments module behavioral tests (Flag, Option).

Scope
- Validate construction: string-only fields, empty names accepted, choices kept.
- Validate spellings: long form always, short form only with an alias.
- Validate Option.capture(): inline and spaced forms, priority and declines.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdtree import Flag, Option


class TestFlag(TestCase):
    """Behavioral tests for Flag declarations."""

    def testFlagFieldsAreExposed(self):
        f = Flag("detach", "d", "run in background")
        self.assertEqual((f.name, f.short, f.descr), ("detach", "d", "run in background"))

    def testFlagDefaultsToNoShortAndNoHelp(self):
        f = Flag("verbose")
        self.assertEqual(f.short, "")
        self.assertEqual(f.descr, "")

    def testFlagNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Flag(1)

    def testFlagNonStringShortRejected(self):
        with self.assertRaises(TypeError):
            Flag("verbose", None)

    def testFlagEmptyNameAccepted(self):
        self.assertEqual(Flag("").name, "")

    def testFlagSpellingsWithShort(self):
        self.assertEqual(Flag("detach", "d").spellings, ("--detach", "-d"))

    def testFlagSpellingsWithoutShort(self):
        self.assertEqual(Flag("detach").spellings, ("--detach",))

    def testFlagSpellsOnlyExactTokens(self):
        f = Flag("detach", "d")
        self.assertTrue(f.spells("--detach"))
        self.assertTrue(f.spells("-d"))
        self.assertFalse(f.spells("--detach=yes"))
        self.assertFalse(f.spells("-detach"))
        self.assertFalse(f.spells("--d"))

    def testFlagWithoutShortDoesNotSpellBareDash(self):
        self.assertFalse(Flag("detach").spells("-"))

    def testFlagFieldsAreReadOnly(self):
        f = Flag("detach")
        with self.assertRaises(AttributeError):
            f.name = "other"

    def testFlagRepr(self):
        self.assertEqual(repr(Flag("detach", "d")), "flag(name='detach', short='d', descr='')")


class TestOption(TestCase):
    """Behavioral tests for Option declarations."""

    def testOptionChoicesKeptInOrder(self):
        o = Option("mode", "m", "", "fast", "safe")
        self.assertEqual(o.choices, ("fast", "safe"))

    def testOptionNonStringChoiceRejected(self):
        with self.assertRaises(TypeError):
            Option("mode", "m", "", 1)

    def testCaptureLongInline(self):
        self.assertEqual(Option("name").capture("--name=web", ()), ("web", 1))

    def testCaptureShortInline(self):
        self.assertEqual(Option("name", "n").capture("-n=web", ()), ("web", 1))

    def testCaptureInlineEmptyValue(self):
        self.assertEqual(Option("name").capture("--name=", ()), ("", 1))

    def testCaptureInlineKeepsFurtherEquals(self):
        self.assertEqual(Option("env").capture("--env=A=B", ()), ("A=B", 1))

    def testCaptureSpacedTakesFollowingToken(self):
        self.assertEqual(Option("config", "c").capture("-c", ["app.conf", "x"]), ("app.conf", 2))

    def testCaptureSpacedTakesDashTokenAsValue(self):
        self.assertEqual(Option("level").capture("--level", ["-1"]), ("-1", 2))

    def testCaptureSpacedDeclinesAtEndOfInput(self):
        self.assertIsNone(Option("config").capture("--config", ()))

    def testCaptureIgnoresOtherTokens(self):
        o = Option("name", "n")
        self.assertIsNone(o.capture("--names=x", ()))
        self.assertIsNone(o.capture("--nam", ["x"]))
        self.assertIsNone(o.capture("-name", ["x"]))

    def testShortInlineNotAvailableWithoutShort(self):
        self.assertIsNone(Option("name").capture("-=web", ()))

    def testChoicesAreNotEnforced(self):
        o = Option("mode", "", "", "fast", "safe")
        self.assertEqual(o.capture("--mode=slow", ()), ("slow", 1))


if __name__ == "__main__":
    unittest.main()
