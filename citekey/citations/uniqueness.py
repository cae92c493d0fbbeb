"""Disambiguation of citation keys within a collection."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from citekey.citations.exceptions import UniquenessExhaustedError

logger = logging.getLogger(__name__)

APPENDIX_CHARACTERS = "abcdefghijklmnopqrstuvwxyz"


class KeySuffix(Enum):
    """When to append a letter suffix to a generated key."""

    SECOND_WITH_B = "second_with_b"  # smith2020, smith2020b, smith2020c
    SECOND_WITH_A = "second_with_a"  # smith2020, smith2020a, smith2020b
    ALWAYS = "always"  # smith2020a, smith2020b


class KeyOccurrenceCounter(Protocol):
    """Protocol for counting entries that carry a key."""

    def count_key_occurrences(self, key: str) -> int:
        """Count entries whose current citation key equals key.

        Must reflect the live state of the collection.
        """
        ...


def get_appendix(number: int) -> str:
    """Compute the suffix for a disambiguation index.

    Indices 0-25 map to a-z, then aa-az, ba-bz and so on.
    """
    base = len(APPENDIX_CHARACTERS)
    if number >= base:
        return get_appendix(number // base - 1) + APPENDIX_CHARACTERS[number % base]
    return APPENDIX_CHARACTERS[number]


class UniquenessResolver:
    """Appends letter suffixes until a key is unique in a collection.

    Resolution is not atomic: concurrent callers sharing a collection must
    serialize generate-and-assign themselves.
    """

    def __init__(
        self,
        counter: KeyOccurrenceCounter,
        key_suffix: KeySuffix = KeySuffix.SECOND_WITH_B,
        max_attempts: int = 100_000,
    ):
        """Initialize resolver.

        Args:
            counter: Live occurrence counts of the collection
            key_suffix: Suffix policy
            max_attempts: Suffix candidates to try before giving up
        """
        self.counter = counter
        self.key_suffix = key_suffix
        self.max_attempts = max_attempts

    def resolve(self, key: str, old_key: str | None = None) -> str:
        """Make key unique, ignoring the entry's own previous key.

        Args:
            key: Candidate key
            old_key: Key the entry currently carries, if any

        Returns:
            key itself, or key with the first free suffix.

        Raises:
            UniquenessExhaustedError: If no free suffix is found.
        """
        always = self.key_suffix == KeySuffix.ALWAYS
        occurrences = self._occurrences(key, old_key)

        if not always and occurrences <= 0:
            return key

        number = 1 if self.key_suffix == KeySuffix.SECOND_WITH_B else 0

        for _ in range(self.max_attempts):
            candidate = key + get_appendix(number)
            if self._occurrences(candidate, old_key) <= 0:
                logger.debug(f"Disambiguated key {key} as {candidate}")
                return candidate
            number += 1

        raise UniquenessExhaustedError(key, self.max_attempts)

    def _occurrences(self, key: str, old_key: str | None) -> int:
        occurrences = self.counter.count_key_occurrences(key)
        # The entry's own key is not a collision
        if occurrences > 0 and old_key == key:
            occurrences -= 1
        return occurrences
