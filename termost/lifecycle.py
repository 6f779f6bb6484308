"""
Process lifecycle: graceful shutdown and last-resort exception reporting.

install(on_shutdown, on_exception) wires:
- SIGINT and SIGTERM: call on_shutdown(), then exit with status 0;
- uncaught exceptions (sys.excepthook): call on_exception(error), render the error
  on stderr (a CommandException through its rich rendering, anything else as a rich
  traceback); the interpreter then exits with status 1.

It returns a callable that puts the previous handlers back.
Signal handlers can only be installed from the main thread; elsewhere only the
exception hook is replaced.
"""
import logging
import signal
import sys
import threading

from rich.console import Console
from rich.traceback import Traceback

from .faults import CommandException

logger = logging.getLogger(__name__)

SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM") if hasattr(signal, name)
)


def _noop(*unused):
    pass


def install(on_shutdown=None, on_exception=None, /, *, console=None):
    """
    Install the graceful handlers and return a restore() callable.

    - on_shutdown(): called on SIGINT/SIGTERM before exiting with status 0.
    - on_exception(error): called on an uncaught exception before exiting with status 1.
    - console: rich Console used for reports (stderr by default).
    """
    on_shutdown = on_shutdown or _noop
    on_exception = on_exception or _noop
    console = console or Console(stderr=True)

    def shutdown(signum, frame):
        logger.debug("received signal %d, shutting down", signum)
        on_shutdown()
        sys.exit(0)

    def excepthook(type, value, traceback):
        try:
            on_exception(value)
        finally:
            if isinstance(value, CommandException):
                console.print(value)
            else:
                console.print(Traceback.from_exception(type, value, traceback))

    previous = {}
    if threading.current_thread() is threading.main_thread():
        for signum in SIGNALS:
            previous[signum] = signal.signal(signum, shutdown)
    hook, sys.excepthook = sys.excepthook, excepthook

    def restore():
        for signum, handler in previous.items():
            signal.signal(signum, handler)
        sys.excepthook = hook

    return restore


__all__ = ("install",)
