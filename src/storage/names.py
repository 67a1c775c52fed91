import posixpath

from pathlib import Path

from utils.dataModels import TEMP_PREFIX
from utils.errors import ErrorKind, StoreResult

MAX_NAME_BYTES = 255


def _invalid(name: object, reason: str) -> StoreResult:
    return StoreResult.failure(ErrorKind.INVALID_NAME, f"{name!r}: {reason}")


class NameResolver:
    """Maps logical names onto paths directly under the store root.

    Equivalent spellings ("a.txt", "./a.txt", ".//a.txt") share one canonical
    name, so existence checks and lock keys agree. Anything that could leave
    the root, or land on a reserved temp file, is rejected.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def canonicalize(self, logical_name: str) -> StoreResult[str]:
        if not isinstance(logical_name, str) or not logical_name:
            return _invalid(logical_name, "name is empty")
        if "\x00" in logical_name:
            return _invalid(logical_name, "name contains a NUL byte")
        if ".." in logical_name:
            return _invalid(logical_name, "name contains a parent reference")
        if logical_name.startswith("/"):
            return _invalid(logical_name, "absolute paths are not allowed")
        if "\\" in logical_name:
            return _invalid(logical_name, "name contains a path separator")

        canonical = posixpath.normpath(logical_name)
        if canonical == ".":
            return _invalid(logical_name, "name is empty")
        if "/" in canonical:
            return _invalid(logical_name, "name contains a path separator")
        if canonical.startswith(TEMP_PREFIX):
            return _invalid(logical_name, f"names starting with {TEMP_PREFIX!r} are reserved")
        if len(canonical.encode("utf-8", "surrogateescape")) > MAX_NAME_BYTES:
            return _invalid(logical_name, f"name is longer than {MAX_NAME_BYTES} bytes")
        return StoreResult.success(canonical)

    def resolve(self, logical_name: str) -> StoreResult[Path]:
        canonical = self.canonicalize(logical_name)
        if not canonical.ok:
            return StoreResult.failure(canonical.error, canonical.message)
        return StoreResult.success(self.root / canonical.value)
