from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Commands that parse their own tokens: Click must hand over "-3" or "-np" untouched.
PASSTHROUGH_CONTEXT: dict[str, Any] = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}


@dataclass
class CommandSpec:
    name: str
    handler: Callable[..., None]
    context_settings: dict[str, Any] = field(default_factory=dict)


_FUNCTION_COMMANDS: dict[str, dict[str, str]] = {
    "today": {"today": "today", "day": "today", "td": "today"},
}

_PASSTHROUGH_COMMANDS: set[str] = {"today"}


def _import_module(module_name: str) -> object | None:
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:
        logger.error("Failed to import command module %s: %s", module_name, exc)
        return None


def _build_function_commands(module_name: str, module: object) -> list[CommandSpec]:
    specs: list[CommandSpec] = []
    mapping = _FUNCTION_COMMANDS.get(module_name, {})
    settings = dict(PASSTHROUGH_CONTEXT) if module_name in _PASSTHROUGH_COMMANDS else {}
    for cmd_name, attr in mapping.items():
        handler = getattr(module, attr, None)
        if callable(handler):
            specs.append(CommandSpec(name=cmd_name, handler=handler, context_settings=settings))
        else:  # pragma: no cover
            logger.error("Command %s.%s not found or not callable", module_name, attr)
    return specs


def discover_commands(package_path: Path, package: str = "daynote.commands") -> list[CommandSpec]:
    """
    Discover standalone command callables and their aliases.

    Returns:
        One CommandSpec per registered command name.
    """
    function_commands: list[CommandSpec] = []

    for file in sorted(package_path.glob("*.py")):
        if file.name.startswith("_"):
            continue
        module_name = file.stem
        if module_name not in _FUNCTION_COMMANDS:
            logger.debug("Skipping %s: no commands registered for it", module_name)
            continue
        module = _import_module(f"{package}.{module_name}")
        if module is None:
            continue
        function_commands.extend(_build_function_commands(module_name, module))

    return function_commands
