"""
Argument source: turn an argument vector into a command name and an options mapping.

Grammar (deliberately small; there are no typed positionals and no nargs)
- The first token is the command name when it does not start with "-".
- "--name=value" and "--name value" set name to value.
- "--name" alone (followed by another flag, "--" or nothing) sets name to True.
- "--no-name" sets name to False.
- "-abc" sets a, b and c to True; "-p value" and "-p=value" set p to value.
- Values that look like integers ("42", "-3") become int.
- "--" ends option parsing; every following token is an operand.
- Any other bare token is an operand.

Malformed flags ("---x", "--=1", "-1a") raise MalformedTokenError.
"""
import re
import shlex
import sys
from collections import deque, namedtuple
from collections.abc import Iterable

from .faults import FaultCode, MalformedTokenError
from .utils import Unset

Arguments = namedtuple("Arguments", ("command", "options", "operands"))
Arguments.__doc__ = "Parsed argument vector: command name (or None), options mapping and operands."

_NAME = re.compile(r"[^\W\d_](-?[^\W_]+)*")
_INTEGER = re.compile(r"[-+]?\d+")


def _convert(value):
    if _INTEGER.fullmatch(value):
        return int(value)
    return value


def _is_flag(token):
    return token.startswith("-") and token != "-" and not _INTEGER.fullmatch(token)


def _malformed(token, reason):
    return MalformedTokenError(
        "malformed token %r: %s" % (token, reason),
        title="malformed token",
        code=FaultCode.MALFORMED_TOKEN,
        hint="flags look like --name, --name=value or -n",
    )


def _tokenize(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if not isinstance(prompt, Iterable):
        raise TypeError("parse_arguments() argument must be a string or an iterable of strings")
    tokens = list(prompt)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse_arguments() argument must be a string or an iterable of strings")
    return tokens


def parse_arguments(prompt=Unset, /):
    """
    Parse prompt (sys.argv[1:] when Unset, a shell-like string, or an iterable of strings).

    Returns an Arguments(command, options, operands) tuple; later flags win over
    earlier ones with the same name.
    """
    tokens = deque(_tokenize(prompt))
    command = None
    options = {}
    operands = []

    if tokens and not tokens[0].startswith("-"):
        command = tokens.popleft()

    while tokens:
        token = tokens.popleft()

        if token == "--":
            operands.extend(tokens)
            break

        if token.startswith("--"):
            name, separator, value = token[2:].partition("=")
            if not _NAME.fullmatch(name):
                raise _malformed(token, "invalid flag name")
            if separator:
                options[name] = _convert(value)
            elif name.startswith("no-") and _NAME.fullmatch(name[3:]):
                options[name[3:]] = False
            elif tokens and not _is_flag(tokens[0]) and tokens[0] != "--":
                options[name] = _convert(tokens.popleft())
            else:
                options[name] = True

        elif _is_flag(token):
            letters, separator, value = token[1:].partition("=")
            if not letters or not all(letter.isalpha() for letter in letters):
                raise _malformed(token, "short flags are single letters")
            for letter in letters[:-1]:
                options[letter] = True
            if separator:
                options[letters[-1]] = _convert(value)
            elif len(letters) == 1 and tokens and not _is_flag(tokens[0]) and tokens[0] != "--":
                options[letters] = _convert(tokens.popleft())
            else:
                options[letters[-1]] = True

        else:
            operands.append(token)

    return Arguments(command, options, operands)


__all__ = (
    "Arguments",
    "parse_arguments",
)
