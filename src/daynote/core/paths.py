"""Note path derivation.

Pure string functions: nothing here touches the filesystem.
"""

from __future__ import annotations

import string

DEFAULT_EXTENSION = "md"

_SUBPATH_TRIM = string.whitespace + "/"


def normalize_sub_path(sub_path: str | None) -> str:
    """Strip surrounding slashes and whitespace from a configured sub-path."""
    return (sub_path or "").strip(_SUBPATH_TRIM)


def resolve_extension(file_ext: str | None, default_extension: str | None = None) -> str:
    """Pick the tool extension, then the global default, then ``md``."""
    for candidate in (file_ext, default_extension):
        cleaned = (candidate or "").strip().lstrip(".")
        if cleaned:
            return cleaned
    return DEFAULT_EXTENSION


def build_note_path(root: str, sub_path: str | None, fragment: str, extension: str) -> str:
    """Compose ``root[/sub-path]/fragment.extension``.

    >>> build_note_path("/nb/root", " /daily/ ", "2024-05-01", "md")
    '/nb/root/daily/2024-05-01.md'
    >>> build_note_path("/nb/root", "", "2024-05-01", "md")
    '/nb/root/2024-05-01.md'
    """
    segments = [root]
    cleaned = normalize_sub_path(sub_path)
    if cleaned:
        segments.append(cleaned)
    segments.append(f"{fragment}.{extension}")
    return "/".join(segments)
