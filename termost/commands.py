"""
Termost command layer: declare commands, then resolve and activate one of them.

What this module provides
- Command: a named step list (fluent option/ask/task declarations) bound to the
  shared Context, with built-in --help/-h and --version/-v options.
- ActivationMode: what an activated command does (HELP, VERSION or RUN).
- resolve(context): the activation phase; runs the command the user invoked.

Lifecycle
- constructed: the command registers its metadata in the context and enlists
  for activation. Nothing runs at construction time.
- resolve(): once per context, after every command has been declared, the
  command whose name equals context.current_command activates:
  • HELP    → the help screen is printed (help wins over version);
  • VERSION → the version line is printed;
  • RUN     → the Step Manager traverses the declared steps.
- A command activates at most once; an unknown command name activates nothing.

Quick start
    program = termost("Quickly build interactive CLIs")
    program.command(name="build", description="Build the project") \
        .task(key="bundle", label="Bundling", handler=bundle)
    program.run()
"""
import asyncio
import logging
import re
from enum import StrEnum

from rich.console import Console

from .context import CommandMetadata
from .default import DEFAULT_COMMAND
from .faults import trigger
from .interface import FluentInterface
from .internals import IntrospectableType
from .manager import StepManager
from .prompts import Prompter
from .rendering import render_help, render_version
from .utils import Unset

logger = logging.getLogger(__name__)


class ActivationMode(StrEnum):
    HELP = "help"
    VERSION = "version"
    RUN = "run"


def _sanitize_name(cls, name, /):
    if name is DEFAULT_COMMAND:
        return name
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    if not re.fullmatch(r"[^\W_][\w.:-]*", name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid command name, got {name!r}")
    return name


def _sanitize_description(cls, description, /):
    if description is None or description is Unset:
        return None
    if not isinstance(description, str):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    return description.strip() or None


class Command(FluentInterface, metaclass=IntrospectableType):
    """
    One command of a termost program.

    Responsibilities
    - Declaration: option()/ask()/task() append steps (see FluentInterface).
    - Registration: metadata is stored in the shared context at construction.
    - Activation: help, version or traversal, decided once from the parsed options.
    - Faults: runtime faults go through trigger() with the command runtime flags.

    Runtime flags
    - colorful: style the help/version screens and the fault reports.
    - fancy: wrap help/version screens and fault reports in a panel.
    - shell: render faults on stderr and exit(1) instead of raising them.
    """
    __introspectable__ = (
        "name",
        "description",
        "metadata",
        "colorful",
        "fancy",
        "shell",
    )
    __displayable__ = (
        "name",
        "description",
        "colorful",
        "fancy",
        "shell",
    )

    def __init__(
            self,
            name,
            description,
            context,
            /,
            *,
            prompter=Unset,
            console=Unset,
            colorful=True,
            fancy=False,
            shell=False,
    ):
        self._name = _sanitize_name(type(self), name)
        self._description = _sanitize_description(type(self), description)
        self._context = context
        self._console = Console() if console is Unset else console
        self._prompter = Prompter(self._console) if prompter is Unset else prompter
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._shell = bool(shell)
        self._activated = False
        self._metadata = CommandMetadata(self._name, self._description)
        self._manager = StepManager(
            context,
            prompter=self._prompter,
            console=self._console,
            trigger=self.trigger,
        )

        self.option(name="help", alias="h", description="Display the help center")
        self.option(name="version", alias="v", description="Print the version")
        context.register(self)

    @property
    def context(self):
        return self._context

    @property
    def steps(self):
        return self._manager.steps

    @property
    def mode(self):
        """
        The ActivationMode selected by the parsed options (help wins over version).
        """
        options = self._context.options
        if "help" in options or "h" in options:
            return ActivationMode.HELP
        if "version" in options or "v" in options:
            return ActivationMode.VERSION
        return ActivationMode.RUN

    async def _activate(self):
        if self._activated:
            return None
        self._activated = True
        mode = self.mode
        logger.debug("activating command %r in %s mode", self._name, mode)

        match mode:
            case ActivationMode.HELP:
                self._helper()
            case ActivationMode.VERSION:
                self._versioner()
            case ActivationMode.RUN:
                await self._manager.traverse()
        return mode

    def _helper(self):
        """Print the help screen of this command."""
        self._console.print(render_help(
            self._name,
            self._description,
            self._metadata.options,
            {name: metadata.description for name, metadata in self._context.commands.items()},
            program=self._context.name,
            colorful=self._colorful,
            fancy=self._fancy,
        ))

    def _versioner(self):
        """Print the version line of the program."""
        self._console.print(render_version(
            self._context.name,
            self._context.version,
            colorful=self._colorful,
            fancy=self._fancy,
        ))

    def trigger(self, fault, /, **options):
        """
        Surface a runtime fault with this command's runtime flags merged in.

        In shell mode the fault is rendered on stderr and the process exits with
        status 1; otherwise it is raised.
        """
        trigger(
            fault,
            **options,
            program=self._context.name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    async def start(self):
        """
        Resolve the program from within a running event loop.

        Returns the ActivationMode of the activated command, or None.
        """
        return await resolve(self._context)

    def run(self):
        """
        Resolve the program (blocking).

        Call it once, after every command and step has been declared; it runs the
        invoked command only, whichever builder it is called on.
        Returns the ActivationMode of the activated command, or None.
        """
        return asyncio.run(self.start())


async def resolve(context, /):
    """
    Activate the command named by context.current_command.

    Runs once per context: later calls return None without doing anything.
    """
    if not context.settle():
        logger.debug("context already resolved")
        return None
    for command in context.pending:
        if command.name == context.current_command:
            return await command._activate()
    logger.warning("unknown command %r, nothing to run", context.current_command)
    return None


__all__ = (
    "ActivationMode",
    "Command",
    "resolve",
)
