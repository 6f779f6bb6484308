"""
Interactive prompt collaborator.

Prompter turns a Prompt step into a value:
- non-interactive environments (stdin is not a TTY, or interactive=False)
  answer every prompt with the step fallback (its default);
- interactive ones ask through rich.prompt: TextPrompt for text and single-select,
  ConfirmPrompt for confirm, MultiSelectPrompt for comma-separated multiple choices.

Select answers are typed as the choice labels (str(choice)) and mapped back to
the declared choice objects, so non-string choices round-trip unchanged.
"""
import logging
import sys

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse, Prompt, PromptBase
from rich.text import Text

from .steps import PromptType
from .utils import Unset

logger = logging.getLogger(__name__)


class _LineInput:
    """Strip the line terminator left by streamed input, so an empty line selects the default."""

    @classmethod
    def get_input(cls, console, prompt, password, stream=None):
        return super().get_input(console, prompt, password, stream=stream).rstrip("\r\n")


class TextPrompt(_LineInput, Prompt): ...
class ConfirmPrompt(_LineInput, Confirm): ...


class MultiSelectPrompt(_LineInput, PromptBase[list]):
    """
    Ask for zero or more choices separated by commas.

    Every entry must be one of the choices; an empty answer selects nothing
    (or the default when one is shown).
    """
    response_type = list
    validate_error_message = "[prompt.invalid]Please enter choices separated by commas"

    def make_prompt(self, default):
        prompt = self.prompt.copy()
        prompt.end = ""
        if self.show_choices and self.choices:
            prompt.append(" ")
            prompt.append("[%s]" % ",".join(self.choices), "prompt.choices")
        if default is not ... and self.show_default and isinstance(default, list):
            prompt.append(" ")
            prompt.append(self.render_default(",".join(default)))
        prompt.append(self.prompt_suffix)
        return prompt

    def render_default(self, default):
        return Text(f"({default})", "prompt.default")

    def process_response(self, value):
        selection = [item.strip() for item in value.split(",") if item.strip()]
        for item in selection:
            if self.choices is not None and item not in self.choices:
                raise InvalidResponse(self.illegal_choice_message)
        if len(set(selection)) != len(selection):
            raise InvalidResponse("[prompt.invalid]Please select each choice only once")
        return selection


class Prompter:
    """
    Default prompt collaborator used by the step manager.

    Parameters
    - console: rich Console used for questions (a new one when Unset).
    - interactive: bool | Unset; Unset detects a TTY on stdin.
    - stream: optional text stream to read answers from (instead of stdin).
    """

    def __init__(self, console=Unset, /, *, interactive=Unset, stream=None):
        self._console = Console() if console is Unset else console
        self._interactive = interactive
        self._stream = stream

    @property
    def interactive(self):
        if self._interactive is not Unset:
            return bool(self._interactive)
        try:
            return sys.stdin.isatty()
        except (AttributeError, ValueError):
            return False

    def __call__(self, prompt, /):
        if not self.interactive:
            logger.debug("non-interactive answer for %r", prompt.key)
            return prompt.fallback

        labels = {str(choice): choice for choice in prompt.choices}
        default = prompt.default

        match prompt.type:
            case PromptType.CONFIRM:
                return ConfirmPrompt.ask(
                    prompt.label,
                    console=self._console,
                    default=bool(default) if default is not Unset else False,
                    stream=self._stream,
                )
            case PromptType.SINGLE_SELECT:
                answer = TextPrompt.ask(
                    prompt.label,
                    console=self._console,
                    choices=list(labels),
                    default=str(default) if default is not Unset else ...,
                    stream=self._stream,
                )
                return labels[answer]
            case PromptType.MULTIPLE_SELECT:
                answer = MultiSelectPrompt.ask(
                    prompt.label,
                    console=self._console,
                    choices=list(labels),
                    default=list(map(str, default)) if default is not Unset else ...,
                    stream=self._stream,
                )
                return [labels[item] for item in answer]
            case _:
                return TextPrompt.ask(
                    prompt.label,
                    console=self._console,
                    default=str(default) if default is not Unset else ...,
                    stream=self._stream,
                )


__all__ = (
    "TextPrompt",
    "ConfirmPrompt",
    "MultiSelectPrompt",
    "Prompter",
)
