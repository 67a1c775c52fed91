import argparse
import sys

from pathlib import Path
from typing import NoReturn

from crypto.codec import CryptoCodec
from storage.manager import StoreManager
from utils.config import StoreConfig
from utils.errors import StoreResult
from utils.helper import ensure_store_root
from utils.keys import resolve_passphrase


def open_store(args: argparse.Namespace) -> StoreManager:
    config = StoreConfig.from_env()
    root = Path(args.root).expanduser() if args.root else config.store_root
    ensure_store_root(root)
    return StoreManager(root, codec=CryptoCodec(config.kdf), lock_timeout=config.lock_timeout)


def fail(message: str) -> NoReturn:
    print(f"[!] {message}")
    sys.exit(1)


def passphrase_for(args: argparse.Namespace) -> str | None:
    """Passphrase if the command asked for encryption, else None."""
    if not (args.passphrase or args.encrypted):
        return None
    key = resolve_passphrase(args.passphrase)
    if not key:
        fail("Encryption requested but no passphrase was provided")
    return key


def report(result: StoreResult) -> None:
    if not result.ok:
        fail(f"{result.error.value}: {result.message}")
    print(f"[+] {result.message}")


def cmd_create(args: argparse.Namespace) -> None:
    store = open_store(args)
    content = args.content if args.content is not None else sys.stdin.read()
    report(store.create(args.name, content, key=passphrase_for(args)))


def cmd_upload(args: argparse.Namespace) -> None:
    store = open_store(args)
    name = args.name or Path(args.path).name
    report(store.upload(name, args.path, key=passphrase_for(args)))


def cmd_search(args: argparse.Namespace) -> None:
    store = open_store(args)
    matches = list(store.search(args.substring))
    if not matches:
        print(f"(no files matching '{args.substring}')")
        return
    for name in matches:
        print(name)


def cmd_cat(args: argparse.Namespace) -> None:
    store = open_store(args)
    result = store.read(args.name, key=passphrase_for(args))
    if not result.ok:
        fail(f"{result.error.value}: {result.message}")
    sys.stdout.buffer.write(result.value)
    sys.stdout.flush()


def cmd_extract(args: argparse.Namespace) -> None:
    store = open_store(args)
    report(store.extract(args.name, args.out, key=passphrase_for(args)))


def cmd_info(args: argparse.Namespace) -> None:
    store = open_store(args)
    result = store.info(args.name)
    if not result.ok:
        fail(f"{result.error.value}: {result.message}")
    info = result.value
    print(f"{info.name}\t{info.size} bytes\t{info.modified_at}\t{'encrypted' if info.encrypted else 'plain'}")
