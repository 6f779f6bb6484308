"""
Prompt collaborator tests.

Scope
- Non-interactive fallbacks.
- Interactive answers read from a stream for every prompt type.
- Choice labels mapped back to the declared choice objects.
- Re-asking after an invalid answer.
"""
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from termost.prompts import Prompter
from termost.steps import Prompt


def prompter(answers):
    return Prompter(Console(file=io.StringIO()), interactive=True, stream=io.StringIO(answers))


class TestPrompter(TestCase):

    def testNonInteractiveUsesFallbacks(self):
        ask = Prompter(Console(file=io.StringIO()), interactive=False)
        self.assertEqual(ask(Prompt(key="q", type="select:single", choices=("a", "b"), default="b")), "b")
        self.assertEqual(ask(Prompt(key="q", type="confirm")), False)
        self.assertEqual(ask(Prompt(key="q")), "")

    def testInteractiveDetection(self):
        with mock.patch("sys.stdin") as stdin:
            stdin.isatty.return_value = False
            self.assertFalse(Prompter(Console(file=io.StringIO())).interactive)
            stdin.isatty.return_value = True
            self.assertTrue(Prompter(Console(file=io.StringIO())).interactive)

    def testText(self):
        self.assertEqual(prompter("hello world\n")(Prompt(key="q")), "hello world")

    def testTextDefault(self):
        self.assertEqual(prompter("\n")(Prompt(key="q", default="npm info")), "npm info")

    def testConfirm(self):
        self.assertIs(prompter("y\n")(Prompt(key="q", type="confirm")), True)
        self.assertIs(prompter("n\n")(Prompt(key="q", type="confirm", default=True)), False)

    def testSingleSelect(self):
        self.assertEqual(prompter("b\n")(Prompt(key="q", type="select:single", choices=("a", "b"))), "b")

    def testSingleSelectReasksOnInvalidAnswer(self):
        self.assertEqual(prompter("c\na\n")(Prompt(key="q", type="select:single", choices=("a", "b"))), "a")

    def testSingleSelectKeepsChoiceObjects(self):
        self.assertEqual(prompter("2\n")(Prompt(key="q", type="select:single", choices=(1, 2))), 2)

    def testMultipleSelect(self):
        prompt = Prompt(key="q", type="select:multiple", choices=("a", "b", "c"))
        self.assertEqual(prompter("c, a\n")(prompt), ["c", "a"])

    def testMultipleSelectDefault(self):
        prompt = Prompt(key="q", type="select:multiple", choices=("a", "b"), default=("b",))
        self.assertEqual(prompter("\n")(prompt), ["b"])

    def testMultipleSelectRejectsUnknownAndDuplicates(self):
        prompt = Prompt(key="q", type="select:multiple", choices=("a", "b"))
        self.assertEqual(prompter("a, z\na, a\nb\n")(prompt), ["b"])


if __name__ == "__main__":
    unittest.main()
