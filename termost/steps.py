r"""
Termost step descriptors.

Overview
- Option: reads a command-line flag into the shared values (or only documents a
  flag in help when it has no key, like the built-in help/version options).
- Prompt: asks the user for a value (single/multiple select, confirm, free text).
- Task: runs a unit of work, synchronous or asynchronous, that may produce a value.
- StepValue: explicit (key, value) pair a task returns to store its result under
  another key than its own.

Metadata (sanitized on construction)
- Shared
  • key: identifier of the value slot; required for prompts, optional for options and tasks.
  • skip: predicate over the accumulated values; Unset means "never skip".
- Option
  • name/alias: shell-style flag names given with or without leading dashes.
  • description, default, choices.
- Prompt
  • label, type (PromptType), choices (required for select types), default.
- Task
  • label (defaults to the key or the handler name), handler.

Validation highlights
- Names match r"[^\W\d_](-?[^\W_]+)*" once leading dashes are stripped; aliases
  are a single character.
- Select prompts need at least one choice; defaults must be among the choices.
- Choices reject duplicates and are normalized to a tuple.

Descriptors are immutable once built: every field is exposed as a read-only
property (see internals.IntrospectableType).
"""
import builtins
import re
from collections import namedtuple
from collections.abc import Iterable
from enum import StrEnum

from .faults import FaultCode, InvalidChoiceError, MissingChoicesError
from .internals import IntrospectableType
from .utils import Unset, coalesce

StepValue = namedtuple("StepValue", ("key", "value"))
StepValue.__doc__ = "Explicit (key, value) pair returned by a task handler."


class StepKind(StrEnum):
    OPTION = "option"
    PROMPT = "prompt"
    TASK = "task"


class PromptType(StrEnum):
    SINGLE_SELECT = "select:single"
    MULTIPLE_SELECT = "select:multiple"
    CONFIRM = "confirm"
    TEXT = "text"

    @property
    def selective(self):
        return self in (PromptType.SINGLE_SELECT, PromptType.MULTIPLE_SELECT)


def _sanitize_string(cls, metadata, name, /, *, required=False):
    """
    Internal: validate and trim a scalar string field in place.

    - Unset is allowed unless required, and becomes None.
    - Strings are trimmed; empty strings are rejected.
    """
    if not isinstance(object := metadata[name], str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    elif object is Unset and required:
        raise TypeError(f"{cls.__typename__} {name!r} is required")
    elif isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    metadata[name] = coalesce(object)


def _sanitize_callable(cls, metadata, name, /, *, required=False):
    """
    Internal: validate a callable field in place (Unset becomes None unless required).
    """
    if metadata[name] is Unset and not required:
        metadata[name] = None
    elif not callable(metadata[name]):
        raise TypeError(f"{cls.__typename__} {name!r} must be callable")


def _sanitize_flag(cls, metadata, name, /):
    """
    Internal: normalize a flag name ("--dry-run" -> "dry-run") and validate its shape.
    """
    _sanitize_string(cls, metadata, name, required=name == "name")
    if (flag := metadata[name]) is None:
        return
    flag = flag.lstrip("-")
    if not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", flag):
        raise ValueError(f"{cls.__typename__} {name!r} must be a valid shell-style flag name")
    if flag.startswith("no-"):
        raise ValueError(f"{cls.__typename__} {name!r} cannot start with 'no-' (--no-<name> sets <name> to False)")
    if name == "alias" and len(flag) != 1:
        raise ValueError(f"{cls.__typename__} 'alias' must be a single character")
    metadata[name] = flag


def _sanitize_choices(cls, metadata, /):
    """
    Internal: normalize choices into a duplicate-free tuple (strings are rejected as containers).
    """
    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable")
    choices = tuple(choices)
    if len(set(map(repr, choices))) != len(choices):
        raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
    metadata["choices"] = choices


def _invalid_choice(cls, metadata, value, /):
    return InvalidChoiceError(
        "%s %r default %r is not one of %s" % (
            cls.__typename__,
            metadata.get("key") or metadata.get("name"),
            value,
            ", ".join(map(repr, metadata["choices"])),
        ),
        title="invalid choice",
        code=FaultCode.INVALID_CHOICE,
        hint="pick the default among the declared choices",
    )


class Step(metaclass=IntrospectableType):
    """
    Base of every step descriptor.

    Subclasses set __kind__ and fill the private fields listed in their
    __introspectable__ from sanitized metadata.
    """
    __kind__ = Unset

    @property
    def kind(self):
        return self.__kind__

    def skips(self, values, /):
        """
        Evaluate the skip predicate against the values accumulated so far.

        A step without predicate never skips.
        """
        if self._skip is None:
            return False
        return bool(self._skip(values))

    def _populate(self, metadata, /):
        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Option(Step):
    """
    Command-line flag declaration.

    When it has a key, traversal writes the flag value into the shared values:
    the value passed as --name (or -alias), else the default (None when Unset).
    Without a key the option only appears in the help screen.
    """
    __kind__ = StepKind.OPTION
    __introspectable__ = (
        "key",
        "name",
        "alias",
        "description",
        "default",
        "choices",
        "skip",
    )

    def __init__(self, *, name, description=Unset, key=Unset, alias=Unset, default=Unset, choices=(), skip=Unset):
        metadata = {
            "key": key,
            "name": name,
            "alias": alias,
            "description": description,
            "default": default,
            "choices": choices,
            "skip": skip,
        }
        _sanitize_string(type(self), metadata, "key")
        _sanitize_flag(type(self), metadata, "name")
        _sanitize_flag(type(self), metadata, "alias")
        _sanitize_string(type(self), metadata, "description")
        _sanitize_choices(type(self), metadata)
        _sanitize_callable(type(self), metadata, "skip")
        if metadata["choices"] and default is not Unset and default not in metadata["choices"]:
            raise _invalid_choice(type(self), metadata, default)
        metadata["default"] = coalesce(default)
        self._populate(metadata)

    @property
    def flags(self):
        """Every flag name this option answers to (name first)."""
        return (self._name,) if self._alias is None else (self._name, self._alias)

    @property
    def label(self):
        """Help label, e.g. "--help" or "-h, --help"."""
        if self._alias is None:
            return f"--{self._name}"
        return f"-{self._alias}, --{self._name}"

    def lookup(self, options, /):
        """
        Return the (flag, value) pair found in the parsed options.

        The flag is None when the option was not passed and the default applies.
        """
        for flag in self.flags:
            if flag in options:
                return flag, options[flag]
        return None, self._default


class Prompt(Step):
    """
    Interactive question whose answer is stored under its key.

    fallback is the answer used when no user interaction is possible.
    """
    __kind__ = StepKind.PROMPT
    __introspectable__ = (
        "key",
        "label",
        "type",
        "choices",
        "default",
        "skip",
    )

    def __init__(self, *, key, label=Unset, type=PromptType.TEXT, choices=(), default=Unset, skip=Unset):
        metadata = {
            "key": key,
            "label": label,
            "type": type,
            "choices": choices,
            "default": default,
            "skip": skip,
        }
        cls = builtins.type(self)
        _sanitize_string(cls, metadata, "key", required=True)
        _sanitize_string(cls, metadata, "label")
        metadata["label"] = metadata["label"] or metadata["key"]
        try:
            metadata["type"] = PromptType(type)
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'type' must be one of {', '.join(map(repr, map(str, PromptType)))}") from None
        _sanitize_choices(cls, metadata)
        _sanitize_callable(cls, metadata, "skip")

        if metadata["type"].selective and not metadata["choices"]:
            raise MissingChoicesError(
                "%s %r of type %r declares no choices" % (cls.__typename__, metadata["key"], str(metadata["type"])),
                title="missing choices",
                code=FaultCode.MISSING_CHOICES,
                hint="pass choices=(...) with at least one entry",
            )
        if default is not Unset:
            if metadata["type"] is PromptType.SINGLE_SELECT and default not in metadata["choices"]:
                raise _invalid_choice(cls, metadata, default)
            if metadata["type"] is PromptType.MULTIPLE_SELECT:
                if not isinstance(default, Iterable) or isinstance(default, str):
                    raise TypeError(f"{cls.__typename__} {metadata['key']!r} default must be an iterable of choices")
                for item in (default := list(default)):
                    if item not in metadata["choices"]:
                        raise _invalid_choice(cls, metadata, item)
                metadata["default"] = default
        self._populate(metadata)

    @property
    def fallback(self):
        """Answer used when the environment is non-interactive."""
        if self._default is not Unset:
            return self._default
        match self._type:
            case PromptType.SINGLE_SELECT:
                return self._choices[0]
            case PromptType.MULTIPLE_SELECT:
                return []
            case PromptType.CONFIRM:
                return False
            case _:
                return ""


class Task(Step):
    """
    Unit of work run during traversal.

    The handler receives a snapshot of the values and may return:
    - None: nothing is stored;
    - StepValue(key, value): value is stored under key;
    - anything else: stored under the task key.
    Coroutine functions and functions returning awaitables are awaited.
    """
    __kind__ = StepKind.TASK
    __introspectable__ = (
        "key",
        "label",
        "handler",
        "skip",
    )

    def __init__(self, *, handler, key=Unset, label=Unset, skip=Unset):
        metadata = {
            "key": key,
            "label": label,
            "handler": handler,
            "skip": skip,
        }
        cls = builtins.type(self)
        _sanitize_string(cls, metadata, "key")
        _sanitize_string(cls, metadata, "label")
        _sanitize_callable(cls, metadata, "handler", required=True)
        _sanitize_callable(cls, metadata, "skip")
        if metadata["label"] is None:
            metadata["label"] = metadata["key"] or getattr(handler, "__name__", "task")
        self._populate(metadata)



__all__ = (
    "StepValue",
    "StepKind",
    "PromptType",
    "Step",
    "Option",
    "Prompt",
    "Task",
)
