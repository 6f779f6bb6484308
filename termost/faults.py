"""
Termost faults: codes, exception types and their rendering.

Scope
- FaultCode: stable numeric identifiers of every fault, grouped by origin.
- CommandException: message + options (title, code, hint, program and the
  runtime flags shell/fancy/colorful). Renders itself with rich as
      [ <program> — <code> | <Title> ]
      <message>
       → <hint>
  optionally inside a panel (fancy).
- DeclarationError and subclasses: mistakes in the program declaration. They are
  ValueErrors and always raised straight to the caller.
- trigger(fault, **options): surface a runtime fault, raising it or, in shell
  mode, printing it on stderr and exiting with status 1.

Integration
- Command.trigger() merges the command runtime flags into the options.
- The lifecycle exception hook prints uncaught faults through __rich__.
"""
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .rendering import palette, program_name
from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    Fault codes.

    - 111xx: command-line input (MALFORMED_TOKEN, INVALID_CHOICE)
    - 131xx: program declaration (DUPLICATE_KEY, DUPLICATE_OPTION, DUPLICATE_COMMAND, MISSING_CHOICES)

    A host can relabel codes with a __codes__ mapping in __main__ (see normalize).
    """
    MALFORMED_TOKEN = 11101
    INVALID_CHOICE = 11102

    DUPLICATE_KEY = 13101
    DUPLICATE_OPTION = 13102
    DUPLICATE_COMMAND = 13103
    MISSING_CHOICES = 13104

    def normalize(self):
        """Return the label shown in reports: the host label if any, else the number."""
        labels = getattr(sys.modules["__main__"], "__codes__", {})
        return str(labels.get(self, self.value))


class CommandException(Exception):
    """
    Base of every termost fault.

    options is a read-only mapping; __replace__ returns a copy with updated options.
    """

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError("fault message must be a string")
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        styler = palette(colorful)
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            (program_name(self.options.get("program")), styler("fault-program")),
            " — ",
            (code.normalize() if isinstance(code, FaultCode) else "error", styler("fault-code")),
            " | ",
            (self.options.get("title", type(self).__name__).title(), styler("fault-title")),
            " ]",
        )
        body = [Text("" if self.message is Unset else self.message, styler("fault-message"))]
        if hint := self.options.get("hint"):
            body.append(Text.assemble((" → ", styler("hint-arrow")), (hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __trigger__(self):
        if self.options.get("shell", False):
            console.print(self)
            sys.exit(1)
        raise self

    def __replace__(self, **overrides):
        return type(self)(self.message, **(dict(self.options) | overrides))


class MalformedTokenError(CommandException): ...
class InvalidChoiceError(CommandException, ValueError): ...


class DeclarationError(CommandException, ValueError): ...
class DuplicateKeyError(DeclarationError): ...
class DuplicateOptionError(DeclarationError): ...
class DuplicateCommandError(DeclarationError): ...
class MissingChoicesError(DeclarationError): ...


def trigger(fault, /, **options):
    """
    Surface fault with options merged in (program, shell, fancy, colorful...).

    Raises the fault, or prints it on stderr and exits with status 1 when the
    merged options set shell=True.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must be a fault")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "MalformedTokenError",
    "InvalidChoiceError",
    "DeclarationError",
    "DuplicateKeyError",
    "DuplicateOptionError",
    "DuplicateCommandError",
    "MissingChoicesError",
    "FaultCode",
    "trigger",
)
