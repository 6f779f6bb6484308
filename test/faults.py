"""
Fault model tests (codes, rendering, triggering).

Scope
- FaultCode normalization with and without host labels.
- CommandException rendering (plain and fancy) and option replacement.
- trigger(): raise outside shell mode, render and exit(1) in shell mode.
- Declaration errors are ValueErrors.
"""
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

from termost.faults import (
    CommandException,
    DeclarationError,
    DuplicateKeyError,
    FaultCode,
    InvalidChoiceError,
    MalformedTokenError,
    trigger,
)


def printed(renderable):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):

    def testNormalize(self):
        self.assertEqual(FaultCode.DUPLICATE_KEY.normalize(), "13101")

    def testHostLabels(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.DUPLICATE_KEY: "E-KEY"}, create=True):
            self.assertEqual(FaultCode.DUPLICATE_KEY.normalize(), "E-KEY")


class TestCommandException(TestCase):

    def testRendering(self):
        fault = MalformedTokenError(
            "malformed token '---x'",
            title="malformed token",
            code=FaultCode.MALFORMED_TOKEN,
            hint="flags look like --name",
            program="demo",
            colorful=False,
        )
        output = printed(fault)
        self.assertIn("[ demo — 11101 | Malformed Token ]", output)
        self.assertIn("malformed token '---x'", output)
        self.assertIn("→ flags look like --name", output)

    def testFancyRendering(self):
        fault = CommandException("oops", fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)

    def testReplaceMergesOptions(self):
        fault = CommandException("oops", title="first", shell=False)
        replaced = fault.__replace__(shell=True)
        self.assertIsInstance(replaced, CommandException)
        self.assertEqual(dict(replaced.options), {"title": "first", "shell": True})
        self.assertEqual(dict(fault.options), {"title": "first", "shell": False})
        self.assertEqual(replaced.message, "oops")

    def testDeclarationErrorsAreValueErrors(self):
        self.assertTrue(issubclass(DuplicateKeyError, DeclarationError))
        self.assertTrue(issubclass(DuplicateKeyError, ValueError))
        self.assertTrue(issubclass(InvalidChoiceError, ValueError))


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(InvalidChoiceError) as caught:
            trigger(InvalidChoiceError("bad"), program="demo")
        self.assertEqual(caught.exception.options["program"], "demo")

    def testExitsInShell(self):
        with mock.patch("termost.faults.console", Console(file=io.StringIO(), color_system=None)) as console:
            with self.assertRaises(SystemExit) as caught:
                trigger(InvalidChoiceError("bad", title="invalid choice"), shell=True, colorful=False)
        self.assertEqual(caught.exception.code, 1)
        self.assertIn("Invalid Choice", console.file.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
