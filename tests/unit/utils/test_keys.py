"""Unit tests for passphrase lookup."""

from __future__ import annotations

import getpass

import pytest

from utils.keys import PASSPHRASE_ENV, resolve_passphrase


def test_explicit_value_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(PASSPHRASE_ENV, "from-env")

    assert resolve_passphrase("explicit") == "explicit"


def test_environment_before_prompt(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(PASSPHRASE_ENV, "from-env")
    monkeypatch.setattr(getpass, "getpass", lambda prompt: pytest.fail("should not prompt"))

    assert resolve_passphrase(None) == "from-env"


def test_prompt_as_last_resort(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PASSPHRASE_ENV, raising=False)
    monkeypatch.setattr(getpass, "getpass", lambda prompt: "typed")

    assert resolve_passphrase(None) == "typed"


def test_non_interactive_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PASSPHRASE_ENV, raising=False)

    assert resolve_passphrase(None, interactive=False) is None
