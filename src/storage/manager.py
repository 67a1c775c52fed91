"""StoreManager: the single entry point for mutating the file store.

Each mutating operation canonicalizes its name(s), takes the per-name lock
before looking at the directory, and keeps it until the change is published.
Content is always written to a temp file first and made visible by one
directory operation, so readers and search see either the old or the new
state. Failures come back as StoreResult values; only genuine faults
(unexpected OS errors, a missing store root) raise.
"""
from __future__ import annotations

import os

from pathlib import Path
from typing import Iterator

from crypto.codec import CryptoCodec, is_sealed
from storage.atomic import write_new, write_replace
from storage.locks import LockTable
from storage.names import NameResolver
from utils.dataModels import DEFAULT_LOCK_TIMEOUT, STORE_HDR_SIZE, TEMP_PREFIX, FileInfo
from utils.errors import ErrorKind, SafeStoreError, StoreResult
from utils.helper import rel_time_iso
from utils.logging_config import get_logger

logger = get_logger(__name__)

_PAST_TENSE = {"create": "created", "upload": "uploaded"}


class StoreManager:
    def __init__(
        self,
        root: Path | str,
        codec: CryptoCodec | None = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        root = Path(root).expanduser().resolve()
        if not root.is_dir():
            raise SafeStoreError(f"Store root is not a directory: {root}")
        self.root = root
        self.codec = codec or CryptoCodec()
        self.lock_timeout = lock_timeout
        self.resolver = NameResolver(root)
        self.locks = LockTable()

    # ---- helpers -------------------------------------------------------

    def _reject(self, operation: str, result: StoreResult, **fields: object) -> StoreResult:
        logger.warning(
            "store_operation_rejected",
            operation=operation,
            error=result.error.value,
            detail=result.message,
            **fields,
        )
        return StoreResult.failure(result.error, result.message)

    def _fail(self, operation: str, kind: ErrorKind, message: str, **fields: object) -> StoreResult:
        return self._reject(operation, StoreResult.failure(kind, message), **fields)

    def _busy(self, operation: str, *names: str) -> StoreResult:
        return self._fail(
            operation,
            ErrorKind.BUSY,
            f"timed out after {self.lock_timeout}s waiting for {', '.join(names)}",
            names=list(names),
        )

    def _empty_key(self, operation: str, name: str) -> StoreResult:
        return self._fail(operation, ErrorKind.AUTHENTICATION_FAILED, "passphrase is empty", name=name)

    def _publish_new(self, operation: str, target: Path, content: bytes, key: str | None) -> StoreResult[str]:
        payload = self.codec.seal(content, key) if key is not None else content
        if not write_new(target, payload):
            return self._fail(operation, ErrorKind.ALREADY_EXISTS, f"'{target.name}' already exists", name=target.name)
        logger.info(f"store_{operation}", name=target.name, size=len(content), encrypted=key is not None)
        return StoreResult.success(target.name, f"'{target.name}' {_PAST_TENSE[operation]}")

    def _load(self, path: Path, key: str | None) -> StoreResult[bytes]:
        try:
            data = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return StoreResult.failure(ErrorKind.NOT_FOUND, f"'{path.name}' does not exist")
        if key is None:
            return StoreResult.success(data)
        return self.codec.open(data, key)

    # ---- operations ----------------------------------------------------

    def create(self, name: str, content: bytes | str, key: str | None = None) -> StoreResult[str]:
        """Write a new file from in-memory content, sealed when `key` is given."""
        resolved = self.resolver.resolve(name)
        if not resolved.ok:
            return self._reject("create", resolved, name=name)
        target = resolved.value
        if key == "":
            return self._empty_key("create", target.name)
        if isinstance(content, str):
            content = content.encode("utf-8")
        with self.locks.hold([target.name], self.lock_timeout) as acquired:
            if not acquired:
                return self._busy("create", target.name)
            if os.path.lexists(target):
                return self._fail("create", ErrorKind.ALREADY_EXISTS, f"'{target.name}' already exists", name=target.name)
            return self._publish_new("create", target, content, key)

    def upload(self, name: str, source_path: Path | str, key: str | None = None) -> StoreResult[str]:
        """Copy (and optionally seal) an external file into the store."""
        resolved = self.resolver.resolve(name)
        if not resolved.ok:
            return self._reject("upload", resolved, name=name)
        target = resolved.value
        if key == "":
            return self._empty_key("upload", target.name)
        with self.locks.hold([target.name], self.lock_timeout) as acquired:
            if not acquired:
                return self._busy("upload", target.name)
            if os.path.lexists(target):
                return self._fail("upload", ErrorKind.ALREADY_EXISTS, f"'{target.name}' already exists", name=target.name)
            try:
                content = Path(source_path).read_bytes()
            except OSError as error:
                return self._fail(
                    "upload",
                    ErrorKind.SOURCE_UNREADABLE,
                    f"cannot read '{source_path}': {error.strerror or error}",
                    name=target.name,
                )
            return self._publish_new("upload", target, content, key)

    def rename(self, old: str, new: str) -> StoreResult[str]:
        """Move `old` to `new`; `new` must be free."""
        old_resolved = self.resolver.resolve(old)
        if not old_resolved.ok:
            return self._reject("rename", old_resolved, name=old)
        new_resolved = self.resolver.resolve(new)
        if not new_resolved.ok:
            return self._reject("rename", new_resolved, name=new)
        source, target = old_resolved.value, new_resolved.value
        with self.locks.hold([source.name, target.name], self.lock_timeout) as acquired:
            if not acquired:
                return self._busy("rename", source.name, target.name)
            if not source.is_file():
                return self._fail("rename", ErrorKind.NOT_FOUND, f"'{source.name}' does not exist", name=source.name)
            if os.path.lexists(target):
                return self._fail("rename", ErrorKind.ALREADY_EXISTS, f"'{target.name}' already exists", name=target.name)
            os.rename(source, target)
        logger.info("store_rename", old=source.name, new=target.name)
        return StoreResult.success(target.name, f"'{source.name}' renamed to '{target.name}'")

    def delete(self, name: str) -> StoreResult[str]:
        resolved = self.resolver.resolve(name)
        if not resolved.ok:
            return self._reject("delete", resolved, name=name)
        target = resolved.value
        with self.locks.hold([target.name], self.lock_timeout) as acquired:
            if not acquired:
                return self._busy("delete", target.name)
            if not target.is_file():
                return self._fail("delete", ErrorKind.NOT_FOUND, f"'{target.name}' does not exist", name=target.name)
            target.unlink()
        logger.info("store_delete", name=target.name)
        return StoreResult.success(target.name, f"'{target.name}' deleted")

    def search(self, substring: str) -> Iterator[str]:
        """Lazily yield stored names containing `substring`, sorted.

        The directory is listed once, on first iteration. In-flight temp
        files and entries no logical name could address are skipped.
        """
        with os.scandir(self.root) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if substring in entry.name
                and not entry.name.startswith(TEMP_PREFIX)
                and entry.is_file(follow_symlinks=False)
                and self.resolver.canonicalize(entry.name).value == entry.name
            )
        logger.debug("store_search", matches=len(names))
        yield from names

    def read(self, name: str, key: str | None = None) -> StoreResult[bytes]:
        """Return a file's content, verified and decrypted when `key` is given."""
        resolved = self.resolver.resolve(name)
        if not resolved.ok:
            return self._reject("read", resolved, name=name)
        if key == "":
            return self._empty_key("read", resolved.value.name)
        loaded = self._load(resolved.value, key)
        if not loaded.ok:
            return self._reject("read", loaded, name=resolved.value.name)
        return loaded

    def extract(self, name: str, out_path: Path | str, key: str | None = None) -> StoreResult[Path]:
        """Write a file's (decrypted) content to `out_path`, replacing it atomically."""
        loaded = self.read(name, key)
        if not loaded.ok:
            return StoreResult.failure(loaded.error, loaded.message)
        out = Path(out_path).expanduser()
        if out.resolve().parent == self.root:
            return self._fail(
                "extract",
                ErrorKind.DESTINATION_UNWRITABLE,
                f"'{out}' is inside the store; use create or rename instead",
            )
        try:
            write_replace(out, loaded.value)
        except OSError as error:
            return self._fail(
                "extract",
                ErrorKind.DESTINATION_UNWRITABLE,
                f"cannot write '{out}': {error.strerror or error}",
            )
        logger.info("store_extract", name=self.resolver.canonicalize(name).value, encrypted=key is not None)
        return StoreResult.success(out, f"'{name}' extracted to {out}")

    def info(self, name: str) -> StoreResult[FileInfo]:
        resolved = self.resolver.resolve(name)
        if not resolved.ok:
            return self._reject("info", resolved, name=name)
        target = resolved.value
        try:
            with target.open("rb") as f:
                head = f.read(STORE_HDR_SIZE)
                st = os.fstat(f.fileno())
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return self._fail("info", ErrorKind.NOT_FOUND, f"'{target.name}' does not exist", name=target.name)
        return StoreResult.success(
            FileInfo(
                name=target.name,
                size=st.st_size,
                modified_at=rel_time_iso(st.st_mtime),
                encrypted=is_sealed(head),
            )
        )

    def rekey(self, name: str, old_key: str, new_key: str) -> StoreResult[str]:
        """Re-seal an encrypted file under a new passphrase with fresh salt and nonce."""
        resolved = self.resolver.resolve(name)
        if not resolved.ok:
            return self._reject("rekey", resolved, name=name)
        target = resolved.value
        if not old_key or not new_key:
            return self._empty_key("rekey", target.name)
        with self.locks.hold([target.name], self.lock_timeout) as acquired:
            if not acquired:
                return self._busy("rekey", target.name)
            loaded = self._load(target, old_key)
            if not loaded.ok:
                return self._reject("rekey", loaded, name=target.name)
            write_replace(target, self.codec.seal(loaded.value, new_key))
        logger.info("store_rekey", name=target.name)
        return StoreResult.success(target.name, f"'{target.name}' re-encrypted")
