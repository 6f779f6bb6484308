"""
Program entry: the termost() factory and the root builder.

termost(source, ...) reads the argument vector once, resolves the program
identity, creates the single shared Context and returns the root builder
(the default command). Sub-commands are attached with Termost.command().

The program identity comes from source when it is a mapping
({"name", "description", "version"}), else from the package metadata source
with source used as the description.
"""
import logging
from collections.abc import Mapping

from rich.console import Console

from .commands import Command
from .context import Context
from .default import DEFAULT_COMMAND
from .lifecycle import install
from .package import get_package_metadata
from .parser import parse_arguments
from .prompts import Prompter
from .utils import Unset

logger = logging.getLogger(__name__)


class Termost(Command):
    """
    Root builder: the default command of a program, able to declare sub-commands.

    Sub-commands share the root context, prompter, console and runtime flags.
    """

    def __init__(self, description, context, /, **options):
        super().__init__(DEFAULT_COMMAND, description, context, **options)
        self._restore = None

    def command(self, *, name, description=None):
        """
        Declare a sub-command and return its builder.

        Raises
        - DuplicateCommandError: when name is already declared.
        """
        return Command(
            name,
            description,
            self._context,
            prompter=self._prompter,
            console=self._console,
            colorful=self._colorful,
            fancy=self._fancy,
            shell=self._shell,
        )

    def restore(self):
        """Put back the signal handlers and exception hook replaced by termost()."""
        if self._restore is not None:
            self._restore()
            self._restore = None


def termost(
        source,
        /,
        *,
        on_shutdown=None,
        on_exception=None,
        prompt=Unset,
        prompter=Unset,
        console=Unset,
        colorful=True,
        fancy=False,
        shell=False,
        graceful=True,
):
    """
    Create a termost program.

    Parameters
    - source: the program description, or a mapping with name, description and version.
    - on_shutdown(): called on SIGINT/SIGTERM before exiting (graceful mode).
    - on_exception(error): called on an uncaught exception (graceful mode).
    - prompt: the argument vector (sys.argv[1:] when Unset; a string is split shell-like).
    - prompter: the prompt collaborator (a rich-based Prompter when Unset).
    - console: the rich Console used for screens and task status.
    - colorful, fancy, shell: runtime flags (see Command).
    - graceful: install the signal handlers and exception hook.

    Returns the Termost root builder.
    """
    if isinstance(source, Mapping):
        name, description, version = source.get("name"), source.get("description"), source.get("version")
    elif isinstance(source, str):
        name, version = get_package_metadata()
        description = source
    else:
        raise TypeError("termost() argument must be a description string or a mapping")

    command, options, operands = parse_arguments(prompt)
    if operands:
        logger.debug("ignored operands %r", operands)
    context = Context(command, options, name=name, version=version)

    console = Console() if console is Unset else console
    program = Termost(
        description,
        context,
        prompter=Prompter(console) if prompter is Unset else prompter,
        console=console,
        colorful=colorful,
        fancy=fancy,
        shell=shell,
    )
    if graceful:
        program._restore = install(on_shutdown, on_exception)
    return program


__all__ = (
    "Termost",
    "termost",
)
