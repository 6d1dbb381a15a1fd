"""Notebook collaborators.

``NotebookPort`` is the narrow interface the orchestrator talks to. Two
adapters implement it:

    - LocalNotebook: a plain directory plus an editor command
    - NbNotebook: the ``nb`` command-line notebook manager
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Protocol

from daynote.core.config import DaynoteConfig
from daynote.core.console import get_logger
from daynote.core.process import run_command, run_interactive
from daynote.core.result import EditorError, Err, NotebookError, Ok

logger = get_logger(__name__)


class NotebookPort(Protocol):
    def current_path(self) -> str: ...

    def exists(self, path: str) -> bool: ...

    async def create_file(self, path: str, content: str) -> None: ...

    async def open_in_editor(self, path: str) -> None: ...


class LocalNotebook:
    """Notes stored directly under a directory on disk."""

    def __init__(self, root: Path, editor: str) -> None:
        self.root = root
        self.editor = editor

    def current_path(self) -> str:
        return os.fspath(self.root.expanduser().resolve())

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    async def create_file(self, path: str, content: str) -> None:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("x", encoding="utf-8") as f:
                f.write(content)
        except OSError as exc:
            raise NotebookError(f"Cannot create {path}: {exc}") from exc

    async def open_in_editor(self, path: str) -> None:
        editor_cmd = shlex.split(self.editor)
        match await run_interactive([*editor_cmd, path]):
            case Err(err):
                raise EditorError(f"Editor not found: {self.editor}", context=err.context)
            case Ok(exit_code) if exit_code != 0:
                logger.warning("Editor exited with code %s", exit_code)
            case Ok(_):
                pass


class NbNotebook:
    """Delegates storage and editing to the ``nb`` CLI."""

    def __init__(self, nb_cmd: str = "nb") -> None:
        self.nb_cmd = shlex.split(nb_cmd)
        self._root: str | None = None

    def current_path(self) -> str:
        if self._root is None:
            raise NotebookError("Notebook path not loaded; call load() first")
        return self._root

    async def load(self) -> NbNotebook:
        match await run_command([*self.nb_cmd, "notebooks", "current", "--path"]):
            case Err(err):
                raise NotebookError(err.message, context=err.context)
            case Ok(result) if not result.ok or not result.stdout.strip():
                raise NotebookError(
                    "nb could not report the current notebook",
                    context={"stderr": result.stderr.strip()},
                )
            case Ok(result):
                self._root = result.stdout.strip()
        return self

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def _relative(self, path: str) -> str:
        return os.path.relpath(path, self.current_path())

    async def create_file(self, path: str, content: str) -> None:
        tokens = [*self.nb_cmd, "add", self._relative(path), "--content", content]
        match await run_command(tokens):
            case Err(err):
                raise NotebookError(err.message, context=err.context)
            case Ok(result) if not result.ok:
                raise NotebookError(
                    f"nb add failed for {path}", context={"stderr": result.stderr.strip()}
                )
            case Ok(_):
                pass

    async def open_in_editor(self, path: str) -> None:
        match await run_interactive([*self.nb_cmd, "edit", self._relative(path)]):
            case Err(err):
                raise EditorError(err.message, context=err.context)
            case Ok(exit_code) if exit_code != 0:
                logger.warning("nb edit exited with code %s", exit_code)
            case Ok(_):
                pass


async def create_notebook(config: DaynoteConfig) -> NotebookPort:
    """Build the notebook adapter selected by ``config.backend``."""
    if config.backend == "nb":
        return await NbNotebook(config.nb_cmd).load()
    return LocalNotebook(config.notebook_dir, config.editor)
