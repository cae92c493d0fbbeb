"""Tests for field and pseudo-field resolution."""

import pytest

from citekey.citations.resolvers import FieldResolver
from citekey.core.models import Entry


@pytest.fixture
def resolver():
    return FieldResolver()


class TestPlainFields:
    """Test resolution of ordinary fields."""

    def test_existing_field(self, resolver, sample_entries):
        """Plain tokens read the field of the same name."""
        entry = sample_entries["simple_article"]
        assert resolver.resolve("journal", entry) == "Nature"
        assert resolver.resolve("JOURNAL", entry) == "Nature"

    def test_missing_field_is_empty(self, resolver, sample_entries):
        """Absent fields resolve to an empty string."""
        assert resolver.resolve("publisher", sample_entries["simple_article"]) == ""
        assert resolver.resolve("", sample_entries["simple_article"]) == ""

    def test_braces_removed(self, resolver, sample_entries):
        """Grouping braces are stripped from values."""
        entry = sample_entries["braced_author"]
        assert resolver.resolve("title", entry) == "DNA Sequencing in Orbit"

    def test_entry_type(self, resolver, sample_entries):
        """entrytype resolves to the entry type."""
        assert resolver.resolve("entrytype", sample_entries["book_entry"]) == "book"


class TestAuthorFields:
    """Test author-derived pseudo-fields."""

    def test_auth(self, resolver, sample_entries):
        """auth is the first author's last name."""
        assert resolver.resolve("auth", sample_entries["simple_article"]) == "Smith"
        assert resolver.resolve("auth", sample_entries["multiple_authors"]) == "Doe"
        assert resolver.resolve("Auth", sample_entries["tolkien"]) == "Tolkien"

    def test_auth_skips_von(self, resolver, sample_entries):
        """von particles are not part of the last name."""
        assert resolver.resolve("auth", sample_entries["von_author"]) == "Beethoven"

    def test_auth_corporate(self, resolver, sample_entries):
        """Braced corporate authors are kept whole."""
        entry = sample_entries["braced_author"]
        assert resolver.resolve("auth", entry) == "European Space Agency"

    def test_auth_n(self, resolver, sample_entries):
        """authN truncates the first author's last name."""
        assert resolver.resolve("auth3", sample_entries["simple_article"]) == "Smi"
        assert resolver.resolve("auth10", sample_entries["simple_article"]) == "Smith"

    def test_authors(self, resolver, sample_entries):
        """authors concatenates every last name."""
        entry = sample_entries["multiple_authors"]
        assert resolver.resolve("authors", entry) == "DoeJohnsonWilliams"

    def test_authors_n(self, resolver, sample_entries):
        """authorsN appends EtAl when authors are left out."""
        entry = sample_entries["multiple_authors"]
        assert resolver.resolve("authors2", entry) == "DoeJohnsonEtAl"
        assert resolver.resolve("authors3", entry) == "DoeJohnsonWilliams"

    def test_author_last_and_initials(self, resolver, sample_entries):
        """authorLast and authorIni use all authors."""
        entry = sample_entries["multiple_authors"]
        assert resolver.resolve("authorLast", entry) == "Williams"
        assert resolver.resolve("authorIni", entry) == "DJW"

    def test_auth_et_al(self, resolver, sample_entries):
        """authEtAl depends on the number of authors."""
        assert resolver.resolve("authEtAl", sample_entries["simple_article"]) == "Smith"
        assert resolver.resolve("authEtAl", sample_entries["two_authors"]) == "LeeAndPark"
        assert (
            resolver.resolve("authEtAl", sample_entries["multiple_authors"]) == "DoeEtAl"
        )

    def test_author_count(self, resolver, sample_entries):
        """authorcount counts authors."""
        assert resolver.resolve("authorcount", sample_entries["multiple_authors"]) == "3"
        assert resolver.resolve("authorcount", sample_entries["no_author"]) == "0"

    def test_no_author(self, resolver, sample_entries):
        """Author pseudo-fields are empty without authors."""
        entry = sample_entries["no_author"]
        for token in ["auth", "auth3", "authors", "authors2", "authorLast", "authEtAl"]:
            assert resolver.resolve(token, entry) == ""

    def test_editor(self, resolver):
        """edtr is the first editor's last name."""
        entry = Entry(fields={"editor": "Knuth, Donald and Lamport, Leslie"})
        assert resolver.resolve("edtr", entry) == "Knuth"


class TestOtherPseudoFields:
    """Test year, page, title and keyword pseudo-fields."""

    def test_year(self, resolver, sample_entries):
        """year and shortyear come from the year field."""
        entry = sample_entries["simple_article"]
        assert resolver.resolve("year", entry) == "2024"
        assert resolver.resolve("shortyear", entry) == "24"

    def test_year_from_date(self, resolver, sample_entries):
        """The date field is used when year is missing."""
        assert resolver.resolve("year", sample_entries["dated_entry"]) == "2019"

    def test_pages(self, resolver, sample_entries):
        """firstpage and lastpage split the page range."""
        entry = sample_entries["simple_article"]
        assert resolver.resolve("firstpage", entry) == "45"
        assert resolver.resolve("lastpage", entry) == "67"

        single = Entry(fields={"pages": "12"})
        assert resolver.resolve("firstpage", single) == "12"
        assert resolver.resolve("lastpage", single) == "12"

        assert resolver.resolve("firstpage", sample_entries["no_author"]) == ""

    def test_short_titles(self, resolver, sample_entries):
        """shorttitle and veryshorttitle skip function words."""
        entry = sample_entries["tolkien"]
        assert resolver.resolve("veryshorttitle", entry) == "Lord"
        assert resolver.resolve("shorttitle", entry) == "Lord of Rings"

        article = sample_entries["simple_article"]
        assert resolver.resolve("shorttitle", article) == "Quantum Computing Advances"

    def test_keywords(self, resolver, sample_entries):
        """Keywords are split on the given delimiter."""
        entry = sample_entries["multiple_authors"]

        assert resolver.resolve("keyword1", entry) == "machine learning"
        assert resolver.resolve("keyword2", entry) == "collaboration"
        assert resolver.resolve("keyword9", entry) == ""
        assert resolver.resolve("keyword0", entry) == ""
        assert (
            resolver.resolve("keywords", entry) == "machine learningcollaborationsurvey"
        )

    def test_keyword_delimiter(self, resolver, sample_entries):
        """Another delimiter yields other keywords."""
        entry = sample_entries["multiple_authors"]
        assert (
            resolver.resolve("keyword1", entry, keyword_delimiter=";")
            == "machine learning, collaboration, survey"
        )
