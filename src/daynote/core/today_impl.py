from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from daynote.core.args import Invocation, parse_invocation
from daynote.core.config import DaynoteConfig
from daynote.core.console import get_logger
from daynote.core.dates import DateResolver, ResolvedDate, create_resolver
from daynote.core.notebook import NotebookPort, create_notebook
from daynote.core.paths import build_note_path

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OpenOutcome:
    path: str
    created: bool
    opened: bool
    printed: bool


def initial_content(title: str) -> str:
    return f"# {title}\n"


async def resolve_invocation_date(
    invocation: Invocation,
    config: DaynoteConfig,
    resolver: DateResolver | None = None,
) -> ResolvedDate:
    """Resolve the custom date if one was given, else the day offset."""
    if invocation.date is not None:
        resolver = resolver or await create_resolver(config, probe=False)
        return await resolver.resolve(invocation.date)
    resolver = resolver or await create_resolver(config)
    return await resolver.resolve(invocation.offset)


async def open_dated_note(
    tokens: Sequence[str],
    config: DaynoteConfig,
    *,
    emit: Callable[[str], None],
    notebook: NotebookPort | None = None,
    resolver: DateResolver | None = None,
) -> OpenOutcome:
    """
    Create the note for the requested day if needed, then print or open it.
    The file is written at most once; existing notes are never modified.
    """
    invocation = parse_invocation(tokens)
    resolved = await resolve_invocation_date(invocation, config, resolver)

    notebook = notebook or await create_notebook(config)
    path = build_note_path(
        notebook.current_path(), config.file_path, resolved.fragment, config.extension
    )
    logger.debug("Resolved note path %s", path)

    created = False
    if not notebook.exists(path):
        await notebook.create_file(path, initial_content(resolved.title))
        created = True
        logger.info("Created %s", path)

    if invocation.return_path:
        emit(path)
        return OpenOutcome(path=path, created=created, opened=False, printed=True)

    opened = False
    if invocation.should_open:
        await notebook.open_in_editor(path)
        opened = True

    return OpenOutcome(path=path, created=created, opened=opened, printed=False)
