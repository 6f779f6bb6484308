"""
Step manager: owns one command's ordered steps and traverses them.

Traversal rules
- Steps run in declaration order, one at a time.
- A step's skip predicate is evaluated right before the step, against a fresh
  snapshot of the values, so it sees everything merged by earlier steps.
- Skipped steps neither prompt, nor run, nor write any value.
- Produced values are merged into the shared context and never retracted.
- A failing task stops the traversal; its exception propagates with a note
  naming the step, and values merged before it stay in the context.
"""
import inspect
import logging

from rich.console import Console

from .faults import DuplicateKeyError, DuplicateOptionError, FaultCode, InvalidChoiceError
from .steps import Option, Prompt, StepValue, Task
from .utils import Unset

logger = logging.getLogger(__name__)


class StepManager:
    """
    Ordered step list of a single command.

    Parameters
    - context: the shared Context (values are merged into it).
    - prompter: callable answering Prompt steps.
    - console: rich Console used for task status display.
    - trigger: callable surfacing runtime faults (usually Command.trigger).
    """

    def __init__(self, context, /, *, prompter, console=Unset, trigger=Unset):
        self._context = context
        self._prompter = prompter
        self._console = Console() if console is Unset else console
        self._trigger = trigger
        self._steps = []
        self._keys = set()
        self._flags = set()

    @property
    def steps(self):
        return tuple(self._steps)

    def append(self, step, /):
        """
        Register a step at the end of the list.

        Raises
        - DuplicateKeyError: when the step key is already declared in this command.
        - DuplicateOptionError: when an option flag name or alias is already declared.
        """
        if step.key is not None and step.key in self._keys:
            raise DuplicateKeyError(
                "%s key %r is already declared" % (type(step).__typename__, step.key),
                title="duplicated key",
                code=FaultCode.DUPLICATE_KEY,
                hint="give every step of a command a distinct key",
            )
        if isinstance(step, Option):
            for flag in step.flags:
                if flag in self._flags:
                    raise DuplicateOptionError(
                        "option flag %r is already declared" % flag,
                        title="duplicated option",
                        code=FaultCode.DUPLICATE_OPTION,
                        hint="pick another name or alias for this option",
                    )
            self._flags.update(step.flags)
        if step.key is not None:
            self._keys.add(step.key)
        self._steps.append(step)
        return step

    async def traverse(self):
        """Execute every step against the shared context, in order."""
        for step in self._steps:
            if step.skips(self._context.values):
                logger.debug("skipped %s %r", step.kind, step.key)
                continue

            match step:
                case Option():
                    produced = self._read(step)
                case Prompt():
                    produced = StepValue(step.key, self._prompter(step))
                case Task():
                    produced = await self._run(step)
                case _:
                    raise TypeError(f"unsupported step {step!r}")

            if produced is not None:
                self._context.merge(*produced)

    def _read(self, option):
        if option.key is None:
            return None
        flag, value = option.lookup(self._context.options)
        if flag is not None and option.choices and value not in option.choices:
            fault = InvalidChoiceError(
                "option %r got %r, expected one of %s" % (
                    "--" + flag if len(flag) > 1 else "-" + flag,
                    value,
                    ", ".join(map(repr, option.choices)),
                ),
                title="invalid choice",
                code=FaultCode.INVALID_CHOICE,
                hint="pass one of the listed values",
            )
            if self._trigger is Unset:
                raise fault
            self._trigger(fault)
            return None
        return StepValue(option.key, value)

    async def _run(self, task):
        logger.debug("running task %r", task.label)
        try:
            if self._console.is_terminal:
                with self._console.status(task.label):
                    result = await self._call(task)
            else:
                result = await self._call(task)
        except Exception as error:
            error.add_note(f"raised by task {task.label!r}")
            raise

        if result is None:
            return None
        if isinstance(result, StepValue):
            return result
        if task.key is None:
            logger.debug("discarded result of task %r (no key)", task.label)
            return None
        return StepValue(task.key, result)

    async def _call(self, task):
        result = task.handler(self._context.values)
        if inspect.isawaitable(result):
            result = await result
        return result


__all__ = ("StepManager",)
