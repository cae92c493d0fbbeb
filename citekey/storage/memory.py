"""In-memory entry collection."""

import threading
from collections import Counter
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from citekey.core.models import Entry


class MemoryEntryStore:
    """In-memory collection of entries answering key occurrence queries.

    Entries are held by reference, so a key assigned to an entry is seen
    by the next count_key_occurrences() call without any write-back.
    """

    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries: list[Entry] = list(entries)
        self._lock = threading.RLock()

    def add(self, entry: Entry) -> None:
        """Add an entry to the collection."""
        self._entries.append(entry)

    def remove(self, entry: Entry) -> bool:
        """Remove an entry (by identity) from the collection."""
        for i, existing in enumerate(self._entries):
            if existing is entry:
                del self._entries[i]
                return True
        return False

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def find_by_key(self, key: str) -> list[Entry]:
        """Find all entries carrying the given citation key."""
        return [entry for entry in self._entries if entry.citation_key == key]

    def count_key_occurrences(self, key: str) -> int:
        """Count entries whose current citation key equals key."""
        return sum(1 for entry in self._entries if entry.citation_key == key)

    def duplicate_keys(self) -> dict[str, int]:
        """Get keys carried by more than one entry, with their counts."""
        counts = Counter(
            entry.citation_key for entry in self._entries if entry.citation_key
        )
        return {key: count for key, count in counts.items() if count > 1}

    @contextmanager
    def write_lock(self):
        """Serialize generate-and-assign sequences across threads."""
        with self._lock:
            yield self

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
