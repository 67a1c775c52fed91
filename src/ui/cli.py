import argparse

from utils.core import cmd_cat, cmd_create, cmd_extract, cmd_info, cmd_search, cmd_upload
from utils.maintain import cmd_rekey, cmd_rename, cmd_rm


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--root", help="Store directory (default: $SAFESTORE_ROOT or ./files)")


def _add_key_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--passphrase", help="Passphrase (default: $SAFESTORE_PASSPHRASE or prompt)")
    p.add_argument("-e", "--encrypted", action="store_true", help="Encrypt/decrypt using the key provider")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="SafeStore: encrypted single-directory file store")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_create = sub.add_parser("create", help="Create a file from text (or stdin)")
    p_create.add_argument("name", help="Logical file name")
    p_create.add_argument("content", nargs="?", help="File content (default: read stdin)")
    _add_common(p_create)
    _add_key_options(p_create)
    p_create.set_defaults(func=cmd_create)

    p_up = sub.add_parser("upload", help="Copy a file into the store")
    p_up.add_argument("path", help="Source file")
    p_up.add_argument("--name", help="Logical name (default: source file name)")
    _add_common(p_up)
    _add_key_options(p_up)
    p_up.set_defaults(func=cmd_upload)

    p_ren = sub.add_parser("rename", help="Rename a stored file")
    p_ren.add_argument("old", help="Current name")
    p_ren.add_argument("new", help="New name")
    _add_common(p_ren)
    p_ren.set_defaults(func=cmd_rename)

    p_rm = sub.add_parser("rm", help="Delete a stored file")
    p_rm.add_argument("name", help="Logical file name")
    _add_common(p_rm)
    p_rm.set_defaults(func=cmd_rm)

    p_search = sub.add_parser("search", help="List names containing a substring")
    p_search.add_argument("substring", nargs="?", default="", help="Text to match (default: list all)")
    _add_common(p_search)
    p_search.set_defaults(func=cmd_search)

    p_cat = sub.add_parser("cat", help="Write a file's content to stdout")
    p_cat.add_argument("name", help="Logical file name")
    _add_common(p_cat)
    _add_key_options(p_cat)
    p_cat.set_defaults(func=cmd_cat)

    p_ext = sub.add_parser("extract", help="Write a file's content to a path")
    p_ext.add_argument("name", help="Logical file name")
    p_ext.add_argument("out", help="Output path")
    _add_common(p_ext)
    _add_key_options(p_ext)
    p_ext.set_defaults(func=cmd_extract)

    p_info = sub.add_parser("info", help="Show size, mtime and encryption state")
    p_info.add_argument("name", help="Logical file name")
    _add_common(p_info)
    p_info.set_defaults(func=cmd_info)

    p_rekey = sub.add_parser("rekey", help="Re-encrypt a file under a new passphrase")
    p_rekey.add_argument("name", help="Logical file name")
    p_rekey.add_argument("--passphrase", help="Current passphrase (default: $SAFESTORE_PASSPHRASE or prompt)")
    p_rekey.add_argument("--new-passphrase", help="New passphrase (default: prompt)")
    _add_common(p_rekey)
    p_rekey.set_defaults(func=cmd_rekey)

    return p
