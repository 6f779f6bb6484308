"""
Sentinel naming the default (unnamed) command.

DEFAULT_COMMAND is the name of the command that runs when the command line
names none. It is not a string, so it never collides with a declared command
name, and it is hashable so the context registry keys it like any other name.
"""
import functools
from typing import final

from rich.text import Text


@final
class DefaultCommandType:
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return object.__new__(cls)

    def __repr__(self):
        return "(default)"

    def __rich__(self):
        return Text.assemble(("(", "yellow"), ("default", "green"), (")", "yellow"))

    def __reduce__(self):
        return "DEFAULT_COMMAND"


DEFAULT_COMMAND = DefaultCommandType()


__all__ = ("DEFAULT_COMMAND",)
