"""Argument parsing for the dated-note command.

The command receives its tokens untouched from Click so that offsets such as
``-3`` reach this parser instead of being mistaken for options.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from daynote.core.result import MissingOptionValueError, UnknownArgumentError, UnknownOptionError

OFFSET_PATTERN = re.compile(r"^[+-][0-9]+$")

_NO_OPEN = "no_open"
_PATH = "path"
_DATE = "date"

LONG_OPTIONS: dict[str, str] = {
    "--no-open": _NO_OPEN,
    "--path": _PATH,
    "--paths": _PATH,
    "--date": _DATE,
}

SHORT_OPTIONS: dict[str, str] = {
    "n": _NO_OPEN,
    "p": _PATH,
    "d": _DATE,
}


@dataclass(frozen=True, slots=True)
class Invocation:
    offset: int = 0
    no_open: bool = False
    return_path: bool = False
    date: str | None = None

    @property
    def should_open(self) -> bool:
        return not (self.no_open or self.return_path)


def parse_invocation(tokens: Sequence[str]) -> Invocation:
    """Parse command tokens into an :class:`Invocation`.

    Raises:
        UnknownOptionError: a dash-prefixed token that is not a known flag.
        UnknownArgumentError: any other unrecognized token.
        MissingOptionValueError: ``--date``/``-d`` without a value.
    """
    # Callers that always fill the positional slot pass a lone empty string.
    if len(tokens) == 1 and not tokens[0]:
        tokens = []

    offset = 0
    no_open = False
    return_path = False
    date: str | None = None

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if OFFSET_PATTERN.match(token):
            offset = int(token)
            continue

        if token.startswith("--"):
            name, has_value, inline_value = token.partition("=")
            action = LONG_OPTIONS.get(name)
            if action is None or (has_value and action != _DATE):
                raise UnknownOptionError(token)
            if action == _NO_OPEN:
                no_open = True
            elif action == _PATH:
                return_path = True
            elif has_value:
                date = inline_value
            else:
                if index >= len(tokens):
                    raise MissingOptionValueError(token)
                date = tokens[index]
                index += 1
            continue

        if token.startswith("-"):
            cluster = token[1:]
            if not cluster:
                raise UnknownOptionError(token)
            for position, letter in enumerate(cluster):
                action = SHORT_OPTIONS.get(letter)
                if action is None:
                    raise UnknownOptionError(token)
                if action == _NO_OPEN:
                    no_open = True
                elif action == _PATH:
                    return_path = True
                else:
                    rest = cluster[position + 1 :]
                    if rest:
                        date = rest
                    elif index < len(tokens):
                        date = tokens[index]
                        index += 1
                    else:
                        raise MissingOptionValueError(f"-{letter}")
                    break
            continue

        raise UnknownArgumentError(token)

    return Invocation(offset=offset, no_open=no_open, return_path=return_path, date=date)
