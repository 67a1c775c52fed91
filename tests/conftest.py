"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))

from crypto.codec import CryptoCodec  # noqa: E402
from storage.manager import StoreManager  # noqa: E402
from utils.dataModels import KdfParams  # noqa: E402

# Argon2 at its cheapest so encryption tests stay fast
FAST_KDF = KdfParams(t_cost=1, m_cost_kib=64, parallelism=1)


@pytest.fixture
def codec() -> CryptoCodec:
    return CryptoCodec(FAST_KDF)


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "files"
    root.mkdir()
    return root


@pytest.fixture
def store(store_root: Path, codec: CryptoCodec) -> StoreManager:
    return StoreManager(store_root, codec=codec, lock_timeout=5.0)


@pytest.fixture
def fast_kdf_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the env-driven config at cheap Argon2 parameters."""
    monkeypatch.setenv("SAFESTORE_KDF_T", str(FAST_KDF.t_cost))
    monkeypatch.setenv("SAFESTORE_KDF_M", str(FAST_KDF.m_cost_kib))
    monkeypatch.setenv("SAFESTORE_KDF_P", str(FAST_KDF.parallelism))
    monkeypatch.delenv("SAFESTORE_PASSPHRASE", raising=False)
    monkeypatch.delenv("SAFESTORE_ROOT", raising=False)
    monkeypatch.delenv("SAFESTORE_LOCK_TIMEOUT", raising=False)
