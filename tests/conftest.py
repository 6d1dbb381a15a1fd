from __future__ import annotations

import datetime as dt
import os
import re
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

# Detect CI environment (GitHub Actions sets CI=true)
IS_CI = os.environ.get("CI", "").lower() == "true"

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from daynote.core.process import CommandResult  # noqa: E402
from daynote.core.result import Err, Ok, Result, ToolExecutionError  # noqa: E402

_RELATIVE_DAY = re.compile(r"^([+-]\d+) day$")


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "local_only: marks tests that require local environment (skip in CI)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip local_only tests when running in CI."""
    if not IS_CI:
        return
    skip_ci = pytest.mark.skip(reason="Skipped in CI (requires local environment)")
    for item in items:
        if "local_only" in item.keywords:
            item.add_marker(skip_ci)


class FakeDateCommand:
    """In-process stand-in for ``date(1)``.

    ``dialect`` is ``"gnu"`` (accepts ``-d``) or ``"bsd"`` (accepts ``-v``).
    ``descriptions`` maps free-form strings the GNU flavour understands to dates.
    """

    def __init__(
        self,
        today: dt.date,
        dialect: str = "gnu",
        descriptions: dict[str, dt.date] | None = None,
    ) -> None:
        self.today = today
        self.dialect = dialect
        self.descriptions = descriptions or {}
        self.calls: list[list[str]] = []

    @staticmethod
    def _fail(message: str) -> Result[CommandResult, ToolExecutionError]:
        return Ok(CommandResult(returncode=1, stdout="", stderr=message))

    async def __call__(
        self, tokens: Sequence[str]
    ) -> Result[CommandResult, ToolExecutionError]:
        self.calls.append(list(tokens))
        *options, fmt = tokens[1:]
        day = self.today

        if options and options[0].startswith("-v"):
            if self.dialect != "bsd":
                return self._fail("date: invalid option -- 'v'")
            day = self.today + dt.timedelta(days=int(options[0][2:-1]))
        elif options and options[0] == "-d":
            if self.dialect != "gnu":
                return self._fail("usage: date [-jnRu] [-r seconds|file] [-v[+|-]val[ymwdHMS]]")
            description = options[1]
            match = _RELATIVE_DAY.match(description)
            if match:
                day = self.today + dt.timedelta(days=int(match.group(1)))
            elif description in self.descriptions:
                day = self.descriptions[description]
            else:
                return self._fail(f"date: invalid date '{description}'")

        output = day.strftime(fmt[1:].replace("%n", "\n")) + "\n"
        return Ok(CommandResult(returncode=0, stdout=output, stderr=""))


class MissingDateCommand:
    """Runner whose executable never exists."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def __call__(
        self, tokens: Sequence[str]
    ) -> Result[CommandResult, ToolExecutionError]:
        self.calls.append(list(tokens))
        return Err(ToolExecutionError("Command not found", context={"cmd": tokens[0]}))


class FakeNotebook:
    """Records every collaborator call instead of touching disk or an editor."""

    def __init__(self, root: str = "/nb/root", existing: dict[str, str] | None = None) -> None:
        self.root = root
        self.files: dict[str, str] = dict(existing or {})
        self.created: list[str] = []
        self.opened: list[str] = []

    def current_path(self) -> str:
        return self.root

    def exists(self, path: str) -> bool:
        return path in self.files

    async def create_file(self, path: str, content: str) -> None:
        assert path not in self.files, f"{path} would be overwritten"
        self.files[path] = content
        self.created.append(path)

    async def open_in_editor(self, path: str) -> None:
        self.opened.append(path)


@pytest.fixture
def fixed_today() -> dt.date:
    return dt.date(2024, 5, 1)


@pytest.fixture
def make_date_command(fixed_today: dt.date) -> Callable[..., FakeDateCommand]:
    def _make(dialect: str = "gnu", **kwargs: Any) -> FakeDateCommand:
        return FakeDateCommand(fixed_today, dialect=dialect, **kwargs)

    return _make


@pytest.fixture
def missing_date_command() -> MissingDateCommand:
    return MissingDateCommand()


@pytest.fixture
def fake_notebook() -> FakeNotebook:
    return FakeNotebook()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point config to a temp path and drop any DAYNOTE_* settings from the host."""
    for key in list(os.environ):
        if key.startswith("DAYNOTE_") or key == "NB_DEFAULT_EXTENSION":
            monkeypatch.delenv(key, raising=False)
    cfg_path = tmp_path / "config.toml"
    monkeypatch.setenv("DAYNOTE_CONFIG", str(cfg_path))
    return cfg_path


@pytest.fixture
def make_notebook() -> Callable[..., FakeNotebook]:
    return FakeNotebook
