"""Unit tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from utils.config import StoreConfig
from utils.dataModels import DEFAULT_LOCK_TIMEOUT, DEFAULT_M_COST_KiB
from utils.errors import SafeStoreConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in (
        "SAFESTORE_ROOT",
        "SAFESTORE_LOCK_TIMEOUT",
        "SAFESTORE_KDF_T",
        "SAFESTORE_KDF_M",
        "SAFESTORE_KDF_P",
    ):
        monkeypatch.delenv(variable, raising=False)


def test_from_env_defaults() -> None:
    """Unset variables fall back to defaults."""
    config = StoreConfig.from_env()

    assert config.store_root.name == "files"
    assert config.lock_timeout == DEFAULT_LOCK_TIMEOUT
    assert config.kdf.m_cost_kib == DEFAULT_M_COST_KiB


def test_from_env_reads_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFESTORE_ROOT", "./.tmp-store")
    monkeypatch.setenv("SAFESTORE_LOCK_TIMEOUT", "0.5")
    monkeypatch.setenv("SAFESTORE_KDF_T", "1")
    monkeypatch.setenv("SAFESTORE_KDF_M", "64")
    monkeypatch.setenv("SAFESTORE_KDF_P", "1")

    config = StoreConfig.from_env()

    assert config.store_root.name == ".tmp-store"
    assert config.store_root.is_absolute()
    assert config.lock_timeout == 0.5
    assert (config.kdf.t_cost, config.kdf.m_cost_kib, config.kdf.parallelism) == (1, 64, 1)


@pytest.mark.parametrize(
    "variable, value",
    [
        ("SAFESTORE_LOCK_TIMEOUT", "soon"),
        ("SAFESTORE_LOCK_TIMEOUT", "0"),
        ("SAFESTORE_LOCK_TIMEOUT", "nan"),
        ("SAFESTORE_KDF_T", "many"),
        ("SAFESTORE_KDF_P", "-1"),
    ],
)
def test_from_env_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, variable: str, value: str) -> None:
    """Bad values fail with a config error naming the variable."""
    monkeypatch.setenv(variable, value)

    with pytest.raises(SafeStoreConfigError, match=variable):
        StoreConfig.from_env()


def test_from_env_rejects_memory_below_parallelism_floor(monkeypatch: pytest.MonkeyPatch) -> None:
    """Argon2 needs at least 8 KiB per lane."""
    monkeypatch.setenv("SAFESTORE_KDF_M", "8")
    monkeypatch.setenv("SAFESTORE_KDF_P", "2")

    with pytest.raises(SafeStoreConfigError):
        StoreConfig.from_env()
