"""Tests for folder-name normalization and target path building.

Property-based checks use Hypothesis to generate arbitrary metadata values.
"""

from __future__ import annotations

import re

import pytest
from hypothesis import given, strategies as st

from topic_mover.core.normalizer import normalize_folder_name
from topic_mover.core.path_builder import build_target_path, normalize_path

FORBIDDEN = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


# ============================================================================
# normalize_folder_name
# ============================================================================

@pytest.mark.parametrize("raw, expected", [
    ("Soccer", "soccer"),
    ("  Machine Learning  ", "machine-learning"),
    ("Q&A: Tips / Tricks?", "q&a-tips-tricks"),
    ("a -- b", "a-b"),
    ("--edge--", "edge"),
    ("tab\tand\nnewline", "tabandnewline"),
    ("tab and   newline", "tab-and-newline"),
    ('<>:"/\\|?*', ""),
    ("", ""),
])
def test_normalize_examples(raw: str, expected: str) -> None:
    assert normalize_folder_name(raw, True) == expected


def test_normalize_disabled_only_trims() -> None:
    assert normalize_folder_name("  Deep Work: Part 1 ", False) == "Deep Work: Part 1"


@given(st.text())
def test_normalized_name_has_no_forbidden_characters(raw: str) -> None:
    result = normalize_folder_name(raw, True)
    assert not FORBIDDEN.search(result)


@given(st.text())
def test_normalized_name_has_no_edge_or_repeated_hyphens(raw: str) -> None:
    result = normalize_folder_name(raw, True)
    assert not result.startswith("-")
    assert not result.endswith("-")
    assert "--" not in result


@given(st.text())
def test_normalized_name_has_no_whitespace(raw: str) -> None:
    result = normalize_folder_name(raw, True)
    assert not any(c.isspace() for c in result)


@given(st.text())
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_folder_name(raw, True)
    assert normalize_folder_name(once, True) == once


@given(st.text())
def test_normalize_disabled_equals_strip(raw: str) -> None:
    assert normalize_folder_name(raw, False) == raw.strip()


# ============================================================================
# normalize_path / build_target_path
# ============================================================================

@pytest.mark.parametrize("raw, expected", [
    ("a//b///c", "a/b/c"),
    ("/leading/and/trailing/", "leading/and/trailing"),
    ("back\\slash", "back/slash"),
    ("non\u00a0breaking", "non breaking"),
    ("", "/"),
    ("///", "/"),
])
def test_normalize_path(raw: str, expected: str) -> None:
    assert normalize_path(raw) == expected


def test_normalize_path_composes_unicode() -> None:
    assert normalize_path("cafe\u0301") == "caf\u00e9"


def test_build_main_folder_only() -> None:
    assert build_target_path("soccer") == "soccer"


def test_build_with_subfolder() -> None:
    assert build_target_path("sports", "soccer", use_subfolders=True) == "sports/soccer"


def test_build_ignores_subfolder_when_disabled() -> None:
    assert build_target_path("sports", "soccer", use_subfolders=False) == "sports"


def test_build_ignores_empty_subfolder() -> None:
    assert build_target_path("sports", "", use_subfolders=True) == "sports"


def test_build_with_base_folder() -> None:
    assert build_target_path("work", base_folder="Notes") == "Notes/work"


def test_build_with_everything() -> None:
    assert build_target_path("sports", "soccer", "Archive//Notes/", True) == "Archive/Notes/sports/soccer"


segment = st.text(alphabet=st.characters(blacklist_characters="/\\"), min_size=1, max_size=20)


@given(segment, segment, st.text(max_size=20), st.booleans())
def test_build_target_path_is_deterministic(main: str, sub: str, base: str, use_subfolders: bool) -> None:
    first = build_target_path(main, sub, base, use_subfolders)
    second = build_target_path(main, sub, base, use_subfolders)
    assert first == second


@given(st.lists(segment, min_size=1, max_size=4))
def test_built_path_is_canonical(parts) -> None:
    path = build_target_path("/".join(parts))
    assert "//" not in path
    assert path == "/" or not path.startswith("/")
    assert normalize_path(path) == path
