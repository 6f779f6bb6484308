"""
Context store: the process-wide state shared by every command of a program.

One Context is created by the program entry and handed by reference to every
Command and Step Manager; it is never copied. It holds:
- the program identity (name, version),
- the invoked command name and the parsed command-line options,
- the values produced by steps, in execution order,
- the registry of declared commands (metadata used for help and dispatch).

Mutation is funneled through two methods: register() during the declaration
phase and merge() during traversal.
"""
import logging
from types import MappingProxyType

from .default import DEFAULT_COMMAND
from .faults import DuplicateCommandError, DuplicateKeyError, FaultCode
from .internals import IntrospectableType

logger = logging.getLogger(__name__)


class CommandMetadata(metaclass=IntrospectableType):
    """
    Help-facing description of a declared command.

    Properties
    - name: command name (DEFAULT_COMMAND for the unnamed one).
    - description: short text shown in help screens.
    - options: mapping of option label -> description, in declaration order.
    """
    __introspectable__ = (
        "name",
        "description",
        "options",
    )

    def __init__(self, name, description, /):
        self._name = name
        self._description = description
        self._options = {}

    def declare(self, label, description, /):
        """Record an option label and its description for help rendering."""
        self._options[label] = description


class Context(metaclass=IntrospectableType):
    """
    Shared, progressively filled program state.

    Invariants
    - values keys are unique; once merged a value is never retracted.
    - commands keeps every constructed command, active or not.
    - at most one command activates per context (see commands.resolve).
    """
    __introspectable__ = (
        "name",
        "version",
        "current_command",
        "options",
        "commands",
        "resolved",
    )
    __displayable__ = (
        "name",
        "version",
        "current_command",
        "options",
        "values",
    )

    def __init__(self, current_command=DEFAULT_COMMAND, options=None, /, *, name=None, version=None):
        self._name = name
        self._version = version
        self._current_command = DEFAULT_COMMAND if current_command is None else current_command
        self._options = MappingProxyType(dict(options or {}))
        self._values = {}
        self._commands = {}
        self._pending = []
        self._resolved = False

    @property
    def values(self):
        """Step values by key; a new dict holding the very objects the steps produced."""
        return dict(self._values)

    @property
    def pending(self):
        """Commands enlisted for the activation phase, in construction order."""
        return tuple(self._pending)

    def register(self, command, /):
        """
        Add a command to the registry and enlist it for activation.

        Raises
        - DuplicateCommandError: when another command already uses the same name.
        """
        metadata = command.metadata
        if metadata.name in self._commands:
            label = "default" if metadata.name is DEFAULT_COMMAND else repr(metadata.name)
            raise DuplicateCommandError(
                "command %s is already declared" % label,
                title="duplicated command",
                code=FaultCode.DUPLICATE_COMMAND,
                hint="give every command a distinct name",
            )
        self._commands[metadata.name] = metadata
        self._pending.append(command)
        logger.debug("registered command %r", metadata.name)

    def merge(self, key, value, /):
        """
        Store a step value under key.

        Raises
        - DuplicateKeyError: when key already holds a value for this run.
        """
        if key in self._values:
            raise DuplicateKeyError(
                "value %r was already produced by a previous step" % key,
                title="duplicated key",
                code=FaultCode.DUPLICATE_KEY,
                hint="return a different key from the step handler",
            )
        self._values[key] = value
        logger.debug("merged value %r", key)

    def settle(self):
        """Mark the activation phase as done; returns False when it already ran."""
        if self._resolved:
            return False
        self._resolved = True
        return True


__all__ = (
    "CommandMetadata",
    "Context",
)
