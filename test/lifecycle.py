"""
Process lifecycle tests (graceful shutdown and exception reporting).

Scope
- install() replaces the SIGINT/SIGTERM handlers and sys.excepthook.
- The returned callable restores the previous handlers.
- Shutdown handlers call on_shutdown and exit with status 0.
- The exception hook calls on_exception and renders the error.
"""
import io
import signal
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from termost.faults import FaultCode, InvalidChoiceError
from termost.lifecycle import install


class TestLifecycle(TestCase):

    def setUp(self):
        self.console = Console(file=io.StringIO(), width=100, color_system=None)
        self.on_shutdown = mock.Mock()
        self.on_exception = mock.Mock()
        self.previous = signal.getsignal(signal.SIGINT), sys.excepthook
        self.restore = install(self.on_shutdown, self.on_exception, console=self.console)
        self.addCleanup(self.restore)

    def testHandlersAreInstalledAndRestored(self):
        self.assertIsNot(sys.excepthook, self.previous[1])
        self.assertIsNot(signal.getsignal(signal.SIGINT), self.previous[0])
        self.restore()
        self.assertIs(sys.excepthook, self.previous[1])
        self.assertIs(signal.getsignal(signal.SIGINT), self.previous[0])

    def testShutdownSignal(self):
        handler = signal.getsignal(signal.SIGTERM)
        with self.assertRaises(SystemExit) as caught:
            handler(signal.SIGTERM, None)
        self.assertEqual(caught.exception.code, 0)
        self.on_shutdown.assert_called_once_with()

    def testUncaughtErrorIsReported(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError as error:
            sys.excepthook(type(error), error, error.__traceback__)
            self.on_exception.assert_called_once_with(error)
        self.assertIn("RuntimeError", self.console.file.getvalue())
        self.assertIn("boom", self.console.file.getvalue())

    def testUncaughtFaultUsesItsRendering(self):
        fault = InvalidChoiceError("bad mode", title="invalid choice", code=FaultCode.INVALID_CHOICE, colorful=False)
        sys.excepthook(type(fault), fault, None)
        self.on_exception.assert_called_once_with(fault)
        output = self.console.file.getvalue()
        self.assertIn("11102 | Invalid Choice", output)
        self.assertIn("bad mode", output)

    def testMissingCallbacksAreAllowed(self):
        restore = install(console=self.console)
        try:
            with self.assertRaises(SystemExit):
                signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
        finally:
            restore()


if __name__ == "__main__":
    unittest.main()
