"""Preferences for citation key generation."""

from collections.abc import Mapping
from typing import Any

import msgspec

from citekey.citations.filters import DEFAULT_UNWANTED_CHARACTERS
from citekey.citations.patterns import KeyPatterns
from citekey.citations.uniqueness import KeySuffix


class KeyPatternPreferences(msgspec.Struct, frozen=True, kw_only=True):
    """User preferences driving key generation.

    Attributes:
        unwanted_characters: Characters removed from keys, on top of the
            characters BibTeX cannot handle
        key_suffix: When to append disambiguation letters
        keyword_delimiter: Separator of the keywords field
        key_pattern_regex: Regex applied to the expanded key
        key_pattern_replacement: Replacement for key_pattern_regex
        default_pattern: Pattern for entry types without their own
        type_patterns: Entry type to pattern mapping
    """

    unwanted_characters: str = DEFAULT_UNWANTED_CHARACTERS
    key_suffix: KeySuffix = KeySuffix.SECOND_WITH_B
    keyword_delimiter: str = ","
    key_pattern_regex: str = ""
    key_pattern_replacement: str = ""
    default_pattern: str = KeyPatterns.DEFAULT_PATTERN
    type_patterns: dict[str, str] = msgspec.field(default_factory=dict)

    def key_patterns(self) -> KeyPatterns:
        """Build the per-type pattern lookup."""
        return KeyPatterns(self.default_pattern, self.type_patterns)

    def replace(self, **changes: Any) -> "KeyPatternPreferences":
        """Return a copy with the given preferences changed."""
        return msgspec.structs.replace(self, **changes)

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "KeyPatternPreferences":
        """Create preferences from a configuration mapping.

        Unknown keys are ignored so that the mapping can be a section of a
        larger configuration file.

        Raises:
            ValueError: If a value has the wrong type or an unknown suffix.
        """
        known = set(cls.__struct_fields__)
        data = {k: v for k, v in (config or {}).items() if k in known}
        try:
            return msgspec.convert(data, cls)
        except msgspec.ValidationError as e:
            raise ValueError(f"Invalid key pattern preferences: {e}") from e
