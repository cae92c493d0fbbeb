"""Citation key generation from bracketed patterns with collision handling."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from citekey.citations.exceptions import EmptyKeyError
from citekey.citations.filters import clean_key, remove_unwanted_characters
from citekey.citations.modifiers import apply_modifiers
from citekey.citations.patterns import FieldExpression, KeyPatterns, expand_brackets
from citekey.citations.postprocess import replace_with_regex
from citekey.citations.preferences import KeyPatternPreferences
from citekey.citations.resolvers import FieldResolver
from citekey.citations.uniqueness import KeyOccurrenceCounter, UniquenessResolver
from citekey.core.models import Entry, FieldChange

logger = logging.getLogger(__name__)


class CitationKeyGenerator:
    """Generates unique citation keys for entries of one collection.

    The entry's pattern is expanded and the configured regex replacement
    applied. The key is then cleaned with the configured unwanted
    characters and gets a letter suffix if the collection requires one.
    """

    def __init__(
        self,
        patterns: KeyPatterns,
        counter: KeyOccurrenceCounter,
        preferences: KeyPatternPreferences | None = None,
        field_resolver: FieldResolver | None = None,
    ):
        """Initialize key generator.

        Args:
            patterns: Pattern lookup per entry type
            counter: Live key occurrence counts of the collection
            preferences: Generation preferences
            field_resolver: Resolves field tokens to raw values
        """
        self.patterns = patterns
        self.preferences = preferences or KeyPatternPreferences()
        self.field_resolver = field_resolver or FieldResolver()
        self.unwanted_characters = self.preferences.unwanted_characters
        self.resolver = UniquenessResolver(counter, self.preferences.key_suffix)

    def generate_key(self, entry: Entry) -> str:
        """Generate a citation key for an entry.

        The entry itself is not modified.

        Args:
            entry: Bibliography entry

        Returns:
            Citation key, unique within the collection.

        Raises:
            InvalidModifierError: If the pattern has a malformed modifier.
            EmptyKeyError: If the pattern expands to nothing.
            UniquenessExhaustedError: If no free suffix can be found.
        """
        pattern = self.patterns.get_pattern(entry)

        key = expand_brackets(pattern, self._expand_bracket_content(entry))
        key = replace_with_regex(
            key,
            self.preferences.key_pattern_regex,
            self.preferences.key_pattern_replacement,
        )
        # Collisions are checked on the cleaned key, the form that gets stored
        key = clean_key(key, self.unwanted_characters)
        if not key:
            raise EmptyKeyError(pattern)

        key = self.resolver.resolve(key, entry.citation_key)
        key = clean_key(key, self.unwanted_characters)
        if not key:
            raise EmptyKeyError(pattern)

        logger.debug(f"Generated key {key} from pattern {pattern}")
        return key

    def generate_and_set_key(self, entry: Entry) -> FieldChange | None:
        """Generate a key and assign it to the entry.

        Returns:
            FieldChange if the entry's key changed, otherwise None.
        """
        return entry.set_citation_key(self.generate_key(entry))

    def generate_and_set_keys(self, entries: Iterable[Entry]) -> list[FieldChange]:
        """Generate and assign keys for several entries, one at a time.

        Each assignment is visible to the collection before the next entry
        is resolved, so keys generated in one batch do not collide.

        Returns:
            Changes for the entries whose key changed.
        """
        changes = []
        for entry in entries:
            change = self.generate_and_set_key(entry)
            if change:
                changes.append(change)
        return changes

    def _expand_bracket_content(self, entry: Entry) -> Callable[[str], str]:
        """Create the callback that expands and cleans one bracket body."""
        keyword_delimiter = self.preferences.keyword_delimiter

        def expand(bracket: str) -> str:
            expression = FieldExpression.parse(bracket)
            value = self.field_resolver.resolve(
                expression.field, entry, keyword_delimiter
            )
            value = remove_unwanted_characters(value, self.unwanted_characters)
            if expression.modifiers:
                value = apply_modifiers(value, expression.modifiers, expand)
            return clean_key(value, self.unwanted_characters)

        return expand
