"""Runtime configuration model for SafeStore.

This module owns all environment variable parsing and validation.
The CLI consumes a typed config object instead of raw env reads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from utils.dataModels import (
    DEFAULT_LOCK_TIMEOUT,
    DEFAULT_M_COST_KiB,
    DEFAULT_PARALLELISM,
    DEFAULT_T_COST,
    KdfParams,
)
from utils.errors import SafeStoreConfigError

DEFAULT_STORE_ROOT = Path("./files")


@dataclass(frozen=True)
class StoreConfig:
    """Validated runtime configuration.

    Attributes:
        store_root: Directory holding the stored files.
        lock_timeout: Seconds to wait for a per-name lock before reporting Busy.
        kdf: Argon2id parameters used for newly encrypted files.
    """

    store_root: Path
    lock_timeout: float
    kdf: KdfParams

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SafeStoreConfigError: If environment values are invalid.
        """
        root_value = os.getenv("SAFESTORE_ROOT", str(DEFAULT_STORE_ROOT))
        lock_timeout = _parse_positive_float(
            "SAFESTORE_LOCK_TIMEOUT", os.getenv("SAFESTORE_LOCK_TIMEOUT", str(DEFAULT_LOCK_TIMEOUT))
        )
        kdf = KdfParams(
            t_cost=_parse_positive_int("SAFESTORE_KDF_T", os.getenv("SAFESTORE_KDF_T", str(DEFAULT_T_COST))),
            m_cost_kib=_parse_positive_int("SAFESTORE_KDF_M", os.getenv("SAFESTORE_KDF_M", str(DEFAULT_M_COST_KiB))),
            parallelism=_parse_positive_int(
                "SAFESTORE_KDF_P", os.getenv("SAFESTORE_KDF_P", str(DEFAULT_PARALLELISM))
            ),
        )
        if kdf.m_cost_kib < 8 * kdf.parallelism:
            raise SafeStoreConfigError(
                f"SAFESTORE_KDF_M must be at least 8 * SAFESTORE_KDF_P ({8 * kdf.parallelism} KiB), "
                f"got {kdf.m_cost_kib}."
            )
        return cls(
            store_root=Path(root_value).expanduser().resolve(),
            lock_timeout=lock_timeout,
            kdf=kdf,
        )


def _parse_positive_int(variable: str, raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError as error:
        raise SafeStoreConfigError(
            f"Invalid {variable} value: expected integer, got '{raw_value}'."
        ) from error
    if value <= 0:
        raise SafeStoreConfigError(f"Invalid {variable} value: must be positive, got {value}.")
    return value


def _parse_positive_float(variable: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError as error:
        raise SafeStoreConfigError(
            f"Invalid {variable} value: expected number of seconds, got '{raw_value}'."
        ) from error
    if not value > 0:
        raise SafeStoreConfigError(f"Invalid {variable} value: must be positive, got {value}.")
    return value
