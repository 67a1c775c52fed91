import argparse
import getpass

from utils.core import fail, open_store, report
from utils.keys import PASSPHRASE_ENV, resolve_passphrase


def cmd_rm(args: argparse.Namespace) -> None:
    store = open_store(args)
    report(store.delete(args.name))


def cmd_rename(args: argparse.Namespace) -> None:
    store = open_store(args)
    report(store.rename(args.old, args.new))


def cmd_rekey(args: argparse.Namespace) -> None:
    """Re-encrypt one file under a new passphrase.

    The current passphrase follows the usual lookup (flag, then
    SAFESTORE_PASSPHRASE, then prompt). The new one comes only from
    --new-passphrase or a prompt.
    """
    store = open_store(args)
    old_key = resolve_passphrase(args.passphrase, prompt="Current passphrase: ")
    if not old_key:
        fail(f"Current passphrase required (--passphrase or {PASSPHRASE_ENV})")
    new_key = args.new_passphrase or getpass.getpass("New passphrase: ")
    if not new_key:
        fail("New passphrase required (--new-passphrase)")
    report(store.rekey(args.name, old_key, new_key))
