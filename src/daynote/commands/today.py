"""Dated note command.

Provides the ``today`` command (aliases ``day`` and ``td``):
    - Resolve today, a day offset, or a free-form date
    - Create the note with a ``# <title>`` heading if it is missing
    - Open it in the editor, or print its path with ``--path``
"""

from __future__ import annotations

import asyncio

import typer

from daynote.core import today_impl
from daynote.core.console import console
from daynote.core.decorators import handle_exceptions

USAGE_METAVAR = "[OFFSET] [-n|--no-open] [-p|--path|--paths] [-d|--date DATESTR]"


def _emit_path(path: str) -> None:
    console.print(path, markup=False, highlight=False, soft_wrap=True)


@handle_exceptions
def today(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None,
        metavar=USAGE_METAVAR,
        help=(
            "OFFSET is a signed day count such as -1 or +2. "
            "-n/--no-open creates the note without opening it. "
            "-p/--path prints the note path instead of opening it. "
            "-d/--date takes a free-form date such as 'next friday'; it wins over OFFSET."
        ),
        show_default=False,
    ),
) -> None:
    """Create or open the dated note for today, a day offset, or a given date."""
    state = ctx.obj
    tokens = list(args or [])
    state.logger.debug("today tokens: %s", tokens)

    outcome = asyncio.run(
        today_impl.open_dated_note(tokens, state.config, emit=_emit_path)
    )
    state.logger.debug(
        "created=%s opened=%s printed=%s", outcome.created, outcome.opened, outcome.printed
    )
