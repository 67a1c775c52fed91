"""Passphrase lookup for encrypted operations.

Order: explicit value, then SAFESTORE_PASSPHRASE, then an interactive prompt.
The passphrase is handed straight to the codec and never logged or stored.
"""
from __future__ import annotations

import getpass
import os

PASSPHRASE_ENV = "SAFESTORE_PASSPHRASE"


def resolve_passphrase(explicit: str | None, prompt: str = "Passphrase: ", interactive: bool = True) -> str | None:
    if explicit:
        return explicit
    from_env = os.getenv(PASSPHRASE_ENV)
    if from_env:
        return from_env
    if not interactive:
        return None
    return getpass.getpass(prompt) or None
