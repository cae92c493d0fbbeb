"""Citation key generation.

This module expands bracketed key patterns such as ``[auth:lower][year]``
against bibliography entries, post-processes the result with a regex,
and appends letter suffixes to keep keys unique within a collection.
"""

from citekey.citations.exceptions import (
    EmptyKeyError,
    InvalidModifierError,
    KeyGenerationError,
    UniquenessExhaustedError,
)
from citekey.citations.filters import (
    DEFAULT_UNWANTED_CHARACTERS,
    DISALLOWED_CHARACTERS,
    clean_key,
    remove_default_unwanted_characters,
    remove_unwanted_characters,
    replace_special_characters,
)
from citekey.citations.keys import CitationKeyGenerator
from citekey.citations.modifiers import (
    Modifier,
    ModifierKind,
    apply_modifiers,
    parse_modifier,
)
from citekey.citations.patterns import (
    FieldExpression,
    KeyPatterns,
    expand_brackets,
    split_pattern,
)
from citekey.citations.postprocess import replace_with_regex
from citekey.citations.preferences import KeyPatternPreferences
from citekey.citations.resolvers import FieldResolver
from citekey.citations.uniqueness import (
    KeyOccurrenceCounter,
    KeySuffix,
    UniquenessResolver,
    get_appendix,
)

__all__ = [
    # Generator
    "CitationKeyGenerator",
    "KeyPatternPreferences",
    # Patterns
    "KeyPatterns",
    "FieldExpression",
    "split_pattern",
    "expand_brackets",
    "FieldResolver",
    # Modifiers
    "Modifier",
    "ModifierKind",
    "parse_modifier",
    "apply_modifiers",
    # Filters
    "DISALLOWED_CHARACTERS",
    "DEFAULT_UNWANTED_CHARACTERS",
    "remove_unwanted_characters",
    "remove_default_unwanted_characters",
    "replace_special_characters",
    "clean_key",
    "replace_with_regex",
    # Uniqueness
    "KeySuffix",
    "KeyOccurrenceCounter",
    "UniquenessResolver",
    "get_appendix",
    # Errors
    "KeyGenerationError",
    "InvalidModifierError",
    "EmptyKeyError",
    "UniquenessExhaustedError",
]
