import threading
import time

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator


@dataclass
class StoreEntry:
    """Lock handle for one canonical name, alive while anyone uses it."""
    name: str
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class LockTable:
    """Per-name exclusive locks with bounded waits.

    Several names are always taken in sorted order so that a rename a->b and
    a concurrent rename b->a cannot deadlock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[str, StoreEntry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _checkout(self, name: str) -> StoreEntry:
        with self._guard:
            entry = self._entries.get(name)
            if entry is None:
                entry = StoreEntry(name)
                self._entries[name] = entry
            entry.users += 1
            return entry

    def _checkin(self, entry: StoreEntry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[entry.name]

    @contextmanager
    def hold(self, names: Iterable[str], timeout: float) -> Iterator[bool]:
        """Hold every lock in `names`; yields False if the deadline passed first."""
        entries = [self._checkout(name) for name in sorted(set(names))]
        acquired = []
        deadline = time.monotonic() + timeout
        try:
            for entry in entries:
                if not entry.lock.acquire(timeout=max(0.0, deadline - time.monotonic())):
                    break
                acquired.append(entry)
            yield len(acquired) == len(entries)
        finally:
            for entry in reversed(acquired):
                entry.lock.release()
            for entry in entries:
                self._checkin(entry)
