#!/usr/bin/env python3
"""
SafeStore – single-directory file store with optional authenticated encryption

Files live directly under the store root, one file per logical name:

  files/
    notes.txt             # plaintext: stored bytes as given
    secret.pdf            # encrypted: binary header || AES-256-GCM ciphertext

Encrypted header (big-endian):
    magic     : 4 bytes   -> b"SFS1"
    version   : 1 byte    -> 0x01
    t_cost    : u32
    m_cost    : u32  (KiB)
    parallel  : u32
    salt      : 16 bytes  (fresh per file)
    nonce     : 12 bytes  (fresh per file)
    tag       : 16 bytes

Commands:
  create <name> [text]        Create a file from text (or stdin)
  upload <path> [--name N]    Copy a file into the store
  rename <old> <new>          Rename a stored file
  rm <name>                   Delete a stored file
  search [substring]          List matching names, sorted
  cat <name>                  Print a file's content
  extract <name> <out>        Write a file's content to a path
  info <name>                 Size, mtime and encryption state
  rekey <name>                Re-encrypt under a new passphrase

Security choices:
  - AEAD: AES-256-GCM via cryptography.hazmat, header bound as associated data
  - Kfile = Argon2id(SHA3-512(passphrase), salt) via argon2-cffi
  - Every write goes to a temp file and is published by link/rename, never in place
"""
from __future__ import annotations

from typing import Sequence

from ui.cli import build_parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
