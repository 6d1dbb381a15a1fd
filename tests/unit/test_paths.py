from __future__ import annotations

import pytest

from daynote.core.paths import build_note_path, normalize_sub_path, resolve_extension


def test_build_with_padded_sub_path() -> None:
    assert build_note_path("/nb/root", " /daily/ ", "2024-05-01", "md") == (
        "/nb/root/daily/2024-05-01.md"
    )


def test_build_with_empty_sub_path() -> None:
    assert build_note_path("/nb/root", "", "2024-05-01", "md") == "/nb/root/2024-05-01.md"


def test_build_with_none_sub_path() -> None:
    assert build_note_path("/nb/root", None, "2024-05-01", "txt") == "/nb/root/2024-05-01.txt"


def test_build_keeps_nested_sub_path() -> None:
    assert build_note_path("/nb", "/journal/2024/", "05-01", "md") == "/nb/journal/2024/05-01.md"


@pytest.mark.parametrize("raw", ["", "/", "//", "  ", " / ", "\t/\n"])
def test_blank_sub_paths_normalize_to_empty(raw: str) -> None:
    assert normalize_sub_path(raw) == ""


@pytest.mark.parametrize(
    ("file_ext", "default_extension", "expected"),
    [
        (None, None, "md"),
        ("", "", "md"),
        ("org", None, "org"),
        (None, "txt", "txt"),
        ("org", "txt", "org"),
        (".markdown", None, "markdown"),
        ("  ", "adoc", "adoc"),
    ],
)
def test_resolve_extension(
    file_ext: str | None, default_extension: str | None, expected: str
) -> None:
    assert resolve_extension(file_ext, default_extension) == expected
