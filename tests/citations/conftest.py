"""Shared fixtures for citation key tests."""

import pytest

from citekey.citations import (
    CitationKeyGenerator,
    KeyPatternPreferences,
    KeyPatterns,
)
from citekey.core.models import Entry
from citekey.storage import MemoryEntryStore


class DictCounter:
    """Occurrence counter backed by a dict, recording every query."""

    def __init__(self, counts=None):
        self.counts = dict(counts or {})
        self.calls = []

    def count_key_occurrences(self, key):
        self.calls.append(key)
        return self.counts.get(key, 0)


@pytest.fixture
def sample_entries():
    """Provide diverse sample entries for testing."""
    return {
        "simple_article": Entry(
            type="article",
            fields={
                "author": "Smith, John",
                "title": "Quantum Computing Advances",
                "journal": "Nature",
                "year": "2024",
                "pages": "45--67",
            },
        ),
        "multiple_authors": Entry(
            type="article",
            fields={
                "author": "Doe, Jane and Johnson, Bob and Williams, Alice",
                "title": "Collaborative Research in Machine Learning",
                "year": "2023",
                "keywords": "machine learning, collaboration, survey",
            },
        ),
        "two_authors": Entry(
            type="inproceedings",
            fields={
                "author": "Lee, Kim and Park, Jin",
                "title": "Neural Architecture Search: A Survey",
                "booktitle": "Proceedings of ICML",
                "year": "2024",
            },
        ),
        "book_entry": Entry(
            type="book",
            fields={
                "author": "Knuth, Donald E.",
                "title": "The Art of Computer Programming",
                "publisher": "Addison-Wesley",
                "year": "1997",
            },
        ),
        "tolkien": Entry(
            type="book",
            fields={
                "author": "J. R. R. Tolkien",
                "title": "The Lord of the Rings",
                "year": "1954",
            },
        ),
        "unicode_entry": Entry(
            type="article",
            fields={
                "author": "Müller, Jürgen",
                "title": "Über die Größe",
                "year": "2021",
            },
        ),
        "no_author": Entry(
            type="misc",
            fields={"title": "Anonymous Report", "year": "2023"},
        ),
        "braced_author": Entry(
            type="techreport",
            fields={
                "author": "{European Space Agency}",
                "title": "{DNA} Sequencing in Orbit",
                "year": "2019",
            },
        ),
        "von_author": Entry(
            type="book",
            fields={"author": "Ludwig van Beethoven", "year": "1808"},
        ),
        "dated_entry": Entry(
            type="online",
            fields={"author": "Roe, Richard", "date": "2019-05-01"},
        ),
    }


@pytest.fixture
def counter():
    """Empty dict-backed occurrence counter."""
    return DictCounter()


@pytest.fixture
def store():
    """Empty in-memory entry collection."""
    return MemoryEntryStore()


@pytest.fixture
def make_generator(store):
    """Factory for generators over the store fixture."""

    def factory(pattern=None, type_patterns=None, **preferences):
        prefs = KeyPatternPreferences(**preferences)
        patterns = KeyPatterns(pattern, type_patterns)
        return CitationKeyGenerator(patterns, store, prefs)

    return factory


@pytest.fixture
def make_counter():
    """Factory for dict-backed counters with preset counts."""
    return DictCounter
