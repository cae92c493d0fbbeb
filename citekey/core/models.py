"""Core data models for bibliography entries.

An entry is a loose bag of BibTeX fields plus the citation key that the
key generator assigns. Field names are case-insensitive, matching BibTeX
conventions, and values are kept as raw text (braces and all) so that the
generator decides how to sanitize them.

Key components:
- Entry: Mutable bibliography entry carrying a citation key
- FieldChange: Record of a single field modification
"""

import re
from typing import Any

import msgspec

_NAME_SEPARATOR = re.compile(r"\s+and\s+")


class FieldChange(msgspec.Struct, frozen=True):
    """Change of one field value on an entry.

    Returned by mutators so callers can react only to actual changes.
    """

    field: str
    old_value: str | None
    new_value: str | None


class Entry(msgspec.Struct, kw_only=True):
    """Bibliography entry with a mutable citation key.

    Unlike most models in this package, the entry is not frozen: the key
    generator writes the generated key back onto it via set_citation_key().
    """

    type: str = "misc"
    fields: dict[str, str] = msgspec.field(default_factory=dict)
    citation_key: str | None = None

    def __post_init__(self):
        """Normalize field names to lowercase."""
        self.fields = {name.lower(): value for name, value in self.fields.items()}

    def get_field(self, name: str) -> str | None:
        """Get a field value by case-insensitive name."""
        return self.fields.get(name.lower())

    def set_field(self, name: str, value: str | None) -> FieldChange | None:
        """Set or clear a field value.

        Returns:
            FieldChange if the value changed, otherwise None.
        """
        name = name.lower()
        old_value = self.fields.get(name)
        if old_value == value:
            return None

        if value is None:
            del self.fields[name]
        else:
            self.fields[name] = value
        return FieldChange(name, old_value, value)

    def set_citation_key(self, key: str) -> FieldChange | None:
        """Assign the citation key.

        Returns:
            FieldChange if the key changed, otherwise None.
        """
        old_key = self.citation_key
        if old_key == key:
            return None

        self.citation_key = key
        return FieldChange("citationkey", old_key, key)

    @property
    def has_citation_key(self) -> bool:
        """Check whether a non-empty citation key is set."""
        return bool(self.citation_key)

    @property
    def authors(self) -> tuple[str, ...]:
        """Parse author field into individual names.

        BibTeX uses ' and ' as the delimiter between author names.
        Escaped ampersands (\\&) are not treated as delimiters.
        """
        return self._split_names(self.get_field("author"))

    @property
    def editors(self) -> tuple[str, ...]:
        """Parse editor field into individual names."""
        return self._split_names(self.get_field("editor"))

    def get_keywords(self, delimiter: str) -> tuple[str, ...]:
        """Split the keywords field on the given delimiter.

        Args:
            delimiter: Keyword separator, usually ',' or ';'

        Returns:
            Tuple of trimmed, non-empty keywords in field order.
        """
        keywords = self.get_field("keywords")
        if not keywords:
            return ()
        if not delimiter:
            return (keywords.strip(),) if keywords.strip() else ()
        return tuple(kw.strip() for kw in keywords.split(delimiter) if kw.strip())

    @staticmethod
    def _split_names(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        temp = value.replace(r"\&", "\x00")
        names = _NAME_SEPARATOR.split(temp)
        return tuple(
            name.replace("\x00", "&").strip() for name in names if name.strip()
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        data = msgspec.to_builtins(self)
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create Entry from dictionary representation.

        Field values that are not strings (e.g. a numeric year from JSON)
        are converted to text.

        Args:
            data: Dictionary with 'type', 'fields' and 'citation_key'.

        Returns:
            New Entry instance.
        """
        data = dict(data)
        if "fields" in data and data["fields"] is not None:
            data["fields"] = {
                str(name): str(value)
                for name, value in data["fields"].items()
                if value is not None
            }
        return msgspec.convert(data, cls)
