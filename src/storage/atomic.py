import contextlib
import os
import tempfile

from pathlib import Path

from utils.dataModels import TEMP_PREFIX


def _discard(path: Path) -> None:
    with contextlib.suppress(FileNotFoundError):
        path.unlink()


def fsync_directory(directory: Path) -> None:
    """Persist directory entries after a publish (no-op where unsupported)."""
    with contextlib.suppress(OSError):
        fd = os.open(directory, os.O_RDONLY | getattr(os, "O_DIRECTORY", 0))
        try:
            os.fsync(fd)
        finally:
            os.close(fd)


def write_temp(directory: Path, data: bytes) -> Path:
    """Write `data` to a fresh temp file in `directory` and fsync it.

    The temp file is removed if anything interrupts the write.
    """
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=TEMP_PREFIX)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
    except BaseException:
        _discard(tmp)
        raise
    return tmp


def write_new(target: Path, data: bytes) -> bool:
    """Publish `data` at `target` only if nothing is there yet.

    Hard-linking the finished temp file is exclusive-create: it fails instead
    of overwriting, even against another process. Returns False if `target`
    already exists.
    """
    tmp = write_temp(target.parent, data)
    try:
        os.link(tmp, target)
    except FileExistsError:
        return False
    finally:
        _discard(tmp)
    fsync_directory(target.parent)
    return True


def write_replace(target: Path, data: bytes) -> None:
    """Publish `data` at `target`, atomically replacing what was there."""
    tmp = write_temp(target.parent, data)
    try:
        os.replace(tmp, target)
    except BaseException:
        _discard(tmp)
        raise
    fsync_directory(target.parent)
