import logging
import os
import re
import threading
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Set

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Shared lock for readers, exclusive lock for writers.

    A waiting writer blocks new readers, so steady read traffic cannot keep
    writers out forever. Read locks are not reentrant.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class WordStore:
    """Thread-safe set of filtered words.

    Any number of readers may hold the store at once; ``add`` and
    ``delete`` wait for every reader to leave and keep everyone else out
    while they mutate the set.
    """

    def __init__(self, words: Iterable[str] = ()):
        self._words: Set[str] = set(words)
        self._lock = ReadWriteLock()

    def add(self, *words: str) -> None:
        """Insert words; duplicates are ignored."""
        with self._lock.write_locked():
            before = len(self._words)
            self._words.update(words)
            added = len(self._words) - before
        logger.debug("Added %d new word(s) to the store", added)

    def delete(self, *words: str) -> None:
        """Remove words; words that are not stored are ignored."""
        with self._lock.write_locked():
            before = len(self._words)
            self._words.difference_update(words)
            removed = before - len(self._words)
        logger.debug("Removed %d word(s) from the store", removed)

    def words(self) -> List[str]:
        """Snapshot of the stored words, in no particular order."""
        with self._lock.read_locked():
            return list(self._words)

    @contextmanager
    def reading(self) -> Iterator[Set[str]]:
        """Hold the shared lock and expose the live set until the block exits."""
        with self._lock.read_locked():
            yield self._words

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._words)

    def __contains__(self, word: object) -> bool:
        with self._lock.read_locked():
            return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self.words())


# ==================== WORD LIST HELPERS ====================

def split_words(input_text: str) -> List[str]:
    """Split a comma or newline separated list into words.

    Examples:
        "foo,bar"          -> ["foo", "bar"]
        "foo, bar baz\\nqux" -> ["foo", "bar baz", "qux"]
        "foo,,foo"         -> ["foo"]
    """
    words = []
    for word in re.split(r"[,\r\n]+", input_text or ""):
        word = word.strip()
        if word:
            words.append(word)

    # Remove duplicates while preserving order
    return list(dict.fromkeys(words))


def load_word_file(filename: str) -> List[str]:
    """Load one word per line from a UTF-8 file, skipping blanks and # comments."""
    if not os.path.exists(filename):
        logger.warning("Word list '%s' not found, continuing without it", filename)
        return []

    words = []
    with open(filename, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if not word or word.startswith("#"):
                continue
            words.append(word)

    return list(dict.fromkeys(words))
