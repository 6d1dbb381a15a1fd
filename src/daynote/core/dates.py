"""Date resolution through the system ``date`` command.

Two incompatible ``date(1)`` implementations are supported:

    - BSD/macOS ``date`` adds days with ``-v+Nd``.
    - GNU coreutils ``date`` adds days with ``-d "+N day"``.

The dialect is detected once per invocation with a probe and then used for
both the filename fragment and the title, which come from a single call
separated by ``%n``. Free-form descriptions such as
``"next friday"`` or ``"+3week"`` always go through ``-d``; a date command
that rejects them is reported as unsupported.
"""

from __future__ import annotations

import shlex
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar, Protocol

from daynote.core.config import DaynoteConfig
from daynote.core.console import get_logger
from daynote.core.process import CommandResult, run_command
from daynote.core.result import (
    DateCommandError,
    DateCommandUnsupportedError,
    Err,
    Ok,
    Result,
    ToolExecutionError,
)

logger = get_logger(__name__)

CommandRunner = Callable[[Sequence[str]], Awaitable[Result[CommandResult, ToolExecutionError]]]

PROBE_ARGS = ("-v+1d", "+%Y")


@dataclass(frozen=True, slots=True)
class ResolvedDate:
    fragment: str
    title: str


class DateResolver(Protocol):
    async def resolve(self, target: int | str) -> ResolvedDate: ...


def _unsupported_message(date_cmd: str, description: str) -> str:
    return (
        f"'{date_cmd}' could not parse the date '{description}'. "
        "Set DAYNOTE_DATE_CMD to a date command that understands free-form "
        "dates with -d, such as GNU date (installed as 'gdate' by Homebrew coreutils)."
    )


class DateCommandDialect:
    """Base strategy: formats a target date with one ``date(1)`` flavour.

    ``resolve`` takes either an offset in days or a free-form description.
    Subclasses only decide how an offset is spelled.
    """

    name: ClassVar[str] = "base"

    def __init__(
        self,
        date_cmd: str,
        filename_pattern: str,
        title_pattern: str,
        runner: CommandRunner = run_command,
    ) -> None:
        self.date_cmd = date_cmd
        self.filename_pattern = filename_pattern
        self.title_pattern = title_pattern
        self._runner = runner

    def offset_args(self, offset: int) -> list[str]:
        raise NotImplementedError

    async def resolve(self, target: int | str) -> ResolvedDate:
        if isinstance(target, str):
            return await self._resolve_description(target)
        return await self._resolve_offset(target)

    async def _format(self, args: Sequence[str]) -> ResolvedDate | None:
        # One call for both patterns so a run across midnight cannot split the day.
        pattern = f"+{self.filename_pattern}%n{self.title_pattern}"
        tokens = [*shlex.split(self.date_cmd), *args, pattern]
        match await self._runner(tokens):
            case Err(err):
                raise DateCommandError(err.message, context=err.context)
            case Ok(result):
                lines = result.stdout.removesuffix("\n").split("\n") if result.ok else []
                if len(lines) == 2 and all(line.strip() for line in lines):
                    return ResolvedDate(fragment=lines[0].strip(), title=lines[1].strip())
                logger.debug(
                    "%s exited %s with %r: %s",
                    tokens[0],
                    result.returncode,
                    result.stdout,
                    result.stderr.strip(),
                )
                return None

    async def _resolve_offset(self, offset: int) -> ResolvedDate:
        resolved = await self._format(self.offset_args(offset))
        if resolved is None:
            raise DateCommandError(
                f"'{self.date_cmd}' failed to compute the date {offset:+d} day(s) from today",
                context={"dialect": self.name},
            )
        return resolved

    async def _resolve_description(self, description: str) -> ResolvedDate:
        resolved = await self._format(["-d", description])
        if resolved is None:
            raise DateCommandUnsupportedError(_unsupported_message(self.date_cmd, description))
        return resolved


class OffsetFlagDialect(DateCommandDialect):
    """BSD ``date -v+Nd``."""

    name = "offset-flag"

    def offset_args(self, offset: int) -> list[str]:
        return [f"-v{offset:+d}d"]


class RelativeDescriptionDialect(DateCommandDialect):
    """GNU ``date -d "+N day"``."""

    name = "relative-description"

    def offset_args(self, offset: int) -> list[str]:
        return ["-d", f"{offset:+d} day"]


async def detect_dialect(
    date_cmd: str, runner: CommandRunner = run_command
) -> type[DateCommandDialect]:
    """Probe whether ``date_cmd`` accepts ``-v+1d``."""
    tokens = [*shlex.split(date_cmd), *PROBE_ARGS]
    match await runner(tokens):
        case Ok(result) if result.ok and result.stdout.strip():
            dialect: type[DateCommandDialect] = OffsetFlagDialect
        case _:
            dialect = RelativeDescriptionDialect
    logger.debug("Date command %s uses the %s dialect", date_cmd, dialect.name)
    return dialect


async def create_resolver(
    config: DaynoteConfig,
    *,
    probe: bool = True,
    runner: CommandRunner = run_command,
) -> DateCommandDialect:
    """Build the resolver for this invocation.

    Free-form descriptions read the same way in every dialect, so callers
    resolving only a description can skip the probe with ``probe=False``.
    """
    dialect = await detect_dialect(config.date_cmd, runner) if probe else RelativeDescriptionDialect
    return dialect(
        config.date_cmd,
        config.filename_pattern,
        config.title_pattern,
        runner=runner,
    )
