"""Unit tests for logical name canonicalization."""

from __future__ import annotations

from pathlib import Path

import pytest

from storage.names import NameResolver
from utils.errors import ErrorKind

ROOT = Path("/srv/store")


@pytest.mark.parametrize("spelling", ["a.txt", "./a.txt", ".//a.txt", "a.txt/", "./././a.txt"])
def test_equivalent_spellings_share_a_path(spelling: str) -> None:
    """Redundant separators and current-dir prefixes should canonicalize away."""
    resolver = NameResolver(ROOT)

    assert resolver.resolve(spelling).value == ROOT / "a.txt"


@pytest.mark.parametrize(
    "name",
    [
        "",
        ".",
        "./",
        "..",
        "../../etc/passwd",
        "a/../b.txt",
        "notes..txt",
        "/etc/passwd",
        "dir/file.txt",
        "dir\\file.txt",
        "bad\x00name",
        ".tmp-abc123",
        "x" * 256,
    ],
)
def test_unsafe_names_are_rejected(name: str) -> None:
    """Traversal, separators, reserved and oversized names should fail with InvalidName."""
    result = NameResolver(ROOT).resolve(name)

    assert result.error is ErrorKind.INVALID_NAME
    assert result.value is None


def test_non_string_name_is_rejected() -> None:
    """Only strings can be logical names."""
    assert NameResolver(ROOT).canonicalize(None).error is ErrorKind.INVALID_NAME  # type: ignore[arg-type]


def test_dotfiles_are_allowed() -> None:
    """A leading dot is fine as long as it is not the temp prefix."""
    assert NameResolver(ROOT).canonicalize(".env").value == ".env"


def test_resolution_has_no_side_effects(tmp_path: Path) -> None:
    """Resolving must not touch the filesystem."""
    resolver = NameResolver(tmp_path)

    resolver.resolve("never-created.txt")

    assert list(tmp_path.iterdir()) == []
