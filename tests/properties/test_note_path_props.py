"""Property-based tests for note path derivation and argument parsing using Hypothesis.

Invariants checked:
- Paths are root + optional trimmed sub-path + fragment.extension
- Padding a sub-path with slashes or whitespace never changes the path
- Any signed integer token parses to that offset
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from daynote.core.args import parse_invocation
from daynote.core.paths import build_note_path

# === Strategies ===

segment_strategy = st.text(
    alphabet=st.characters(
        whitelist_categories=("L", "N"),
        whitelist_characters="_-.",
    ),
    min_size=1,
    max_size=20,
)

sub_path_strategy = st.lists(segment_strategy, min_size=0, max_size=4).map("/".join)

padding_strategy = st.text(alphabet=" /\t", max_size=5)


# === Property Tests ===


@given(
    root=sub_path_strategy.map(lambda s: "/" + s),
    sub_path=sub_path_strategy,
    fragment=segment_strategy,
    extension=st.sampled_from(["md", "txt", "org"]),
)
def test_path_shape(root: str, sub_path: str, fragment: str, extension: str) -> None:
    path = build_note_path(root, sub_path, fragment, extension)

    assert path.startswith(root + "/")
    assert path.endswith(f"/{fragment}.{extension}")
    if sub_path:
        assert f"/{sub_path}/" in path
    else:
        assert path == f"{root}/{fragment}.{extension}"


@given(
    sub_path=sub_path_strategy,
    left=padding_strategy,
    right=padding_strategy,
)
def test_padding_is_ignored(sub_path: str, left: str, right: str) -> None:
    plain = build_note_path("/nb", sub_path, "2024-05-01", "md")
    padded = build_note_path("/nb", f"{left}{sub_path}{right}", "2024-05-01", "md")
    assert plain == padded


@given(offset=st.integers(min_value=-100_000, max_value=100_000))
def test_signed_offsets_round_trip(offset: int) -> None:
    token = f"{offset:+d}"
    assert parse_invocation([token]).offset == offset


@given(offset=st.integers(min_value=-999, max_value=999), date=segment_strategy)
def test_date_always_wins(offset: int, date: str) -> None:
    invocation = parse_invocation([f"{offset:+d}", "--date", date])
    assert invocation.date == date
    assert invocation.offset == offset
