"""
Fluent declaration surface shared by the root program and its sub-commands.

Every method appends one step to the command's Step Manager and returns the
builder itself so that declarations chain:

    program.option(key="watch", name="watch", default=False) \
        .ask(key="name", label="Project name") \
        .task(key="build", label="Building", handler=build)

Declaration order is execution order. Declaration mistakes are raised right away.
"""
from .steps import Option, Prompt, Task
from .utils import Unset


def _build(cls, source, metadata, /):
    if source is Unset:
        return cls(**metadata)
    if not isinstance(source, cls):
        raise TypeError(f"expected a {cls.__typename__} instance, got {type(source).__name__}")
    if metadata:
        raise TypeError(f"cannot mix a {cls.__typename__} instance with keyword metadata")
    return source


class FluentInterface:
    """
    Mixin providing option()/ask()/task().

    Subclasses provide:
    - _manager: the StepManager receiving the steps.
    - _metadata: the CommandMetadata receiving option labels for help.
    """

    def option(self, source=Unset, /, **metadata):
        """
        Declare a command-line option.

        Accepts an Option instance or Option keyword metadata (name, key, alias,
        description, default, choices, skip).
        """
        option = self._manager.append(_build(Option, source, metadata))
        self._metadata.declare(option.label, option.description)
        return self

    def ask(self, source=Unset, /, **metadata):
        """
        Declare a prompt.

        Accepts a Prompt instance or Prompt keyword metadata (key, label, type,
        choices, default, skip).
        """
        self._manager.append(_build(Prompt, source, metadata))
        return self

    def task(self, source=Unset, /, **metadata):
        """
        Declare a task.

        Accepts a Task instance or Task keyword metadata (key, label, handler, skip).
        Without a handler, returns a decorator registering the decorated function:

            @program.task(key="stamp", label="Stamping")
            def stamp(values):
                return time.time()
        """
        if source is Unset and "handler" not in metadata:
            def decorator(handler):
                self._manager.append(Task(handler=handler, **metadata))
                return handler
            return decorator
        self._manager.append(_build(Task, source, metadata))
        return self


__all__ = ("FluentInterface",)
