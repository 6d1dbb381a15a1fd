"""External command execution.

Provides:
- CommandResult dataclass for captured output
- run_command for capturing a command's output
- run_interactive for commands that need the terminal (editors)
"""

from __future__ import annotations

import asyncio
import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from daynote.core.console import get_logger
from daynote.core.result import Err, Ok, Result, ToolExecutionError

logger = get_logger(__name__)


@dataclass(slots=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_command(tokens: Sequence[str]) -> Result[CommandResult, ToolExecutionError]:
    """Run a command and capture stdout/stderr.

    A non-zero exit status is still ``Ok``; only a command that cannot be
    started is an ``Err``.
    """
    logger.debug("Running %s", shlex.join(tokens))
    try:
        proc = await asyncio.create_subprocess_exec(
            *tokens,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        return Err(
            ToolExecutionError("Command not found", context={"cmd": tokens[0], "error": str(exc)})
        )
    except OSError as exc:
        return Err(
            ToolExecutionError(
                "Failed to start command", context={"cmd": tokens[0], "error": str(exc)}
            )
        )

    stdout_bytes, stderr_bytes = await proc.communicate()
    return Ok(
        CommandResult(
            returncode=proc.returncode or 0,
            stdout=stdout_bytes.decode(errors="replace"),
            stderr=stderr_bytes.decode(errors="replace"),
        )
    )


async def run_interactive(tokens: Sequence[str]) -> Result[int, ToolExecutionError]:
    """Run a command attached to the current terminal and return its exit code."""
    logger.debug("Launching %s", shlex.join(tokens))
    try:
        proc = await asyncio.create_subprocess_exec(*tokens)
    except FileNotFoundError as exc:
        return Err(
            ToolExecutionError("Command not found", context={"cmd": tokens[0], "error": str(exc)})
        )
    except OSError as exc:
        return Err(
            ToolExecutionError(
                "Failed to start command", context={"cmd": tokens[0], "error": str(exc)}
            )
        )
    return Ok(await proc.wait())
