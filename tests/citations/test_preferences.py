"""Tests for key generation preferences."""

import pytest

from citekey.citations.filters import DEFAULT_UNWANTED_CHARACTERS
from citekey.citations.preferences import KeyPatternPreferences
from citekey.citations.uniqueness import KeySuffix


class TestKeyPatternPreferences:
    """Test preference defaults and conversion."""

    def test_defaults(self):
        """Defaults match the documented behavior."""
        prefs = KeyPatternPreferences()

        assert prefs.unwanted_characters == DEFAULT_UNWANTED_CHARACTERS
        assert prefs.key_suffix == KeySuffix.SECOND_WITH_B
        assert prefs.keyword_delimiter == ","
        assert prefs.key_pattern_regex == ""
        assert prefs.default_pattern == "[auth][year]"
        assert prefs.type_patterns == {}

    def test_from_config(self):
        """Plain mappings are converted, unknown keys ignored."""
        prefs = KeyPatternPreferences.from_config(
            {
                "key_suffix": "always",
                "default_pattern": "[auth:lower][year]",
                "type_patterns": {"book": "[auth][year]_book"},
                "theme": "dark",
            }
        )

        assert prefs.key_suffix == KeySuffix.ALWAYS
        assert prefs.default_pattern == "[auth:lower][year]"
        assert prefs.type_patterns == {"book": "[auth][year]_book"}

    def test_from_empty_config(self):
        """Missing configuration yields defaults."""
        assert KeyPatternPreferences.from_config(None) == KeyPatternPreferences()
        assert KeyPatternPreferences.from_config({}) == KeyPatternPreferences()

    def test_invalid_config(self):
        """Invalid values raise ValueError."""
        with pytest.raises(ValueError, match="Invalid key pattern preferences"):
            KeyPatternPreferences.from_config({"key_suffix": "sometimes"})

        with pytest.raises(ValueError):
            KeyPatternPreferences.from_config({"unwanted_characters": 42})

    def test_key_patterns(self):
        """Preferences build the pattern lookup."""
        prefs = KeyPatternPreferences(
            default_pattern="[auth]", type_patterns={"book": "[title]"}
        )
        patterns = prefs.key_patterns()

        assert patterns.get_pattern("book") == "[title]"
        assert patterns.get_pattern("article") == "[auth]"

    def test_replace(self):
        """replace() returns a modified copy."""
        prefs = KeyPatternPreferences()
        changed = prefs.replace(key_suffix=KeySuffix.ALWAYS)

        assert changed.key_suffix == KeySuffix.ALWAYS
        assert prefs.key_suffix == KeySuffix.SECOND_WITH_B

    def test_frozen(self):
        """Preferences are immutable."""
        prefs = KeyPatternPreferences()
        with pytest.raises(AttributeError):
            prefs.key_suffix = KeySuffix.ALWAYS
