"""Bracketed key patterns.

A key pattern mixes literal text with field expressions in square
brackets, e.g. ``[auth:lower][year]_[veryshorttitle]``. Each expression
names a field (or pseudo-field) followed by colon-separated modifiers.

Brackets do not nest, with one exception: a parenthesized fallback
modifier may contain bracket expressions of its own, as in
``[auth:(anon[year])]``. Colons and brackets inside parentheses belong to
the fallback text.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from citekey.citations.modifiers import Modifier, parse_modifier
from citekey.core.models import Entry

MODIFIER_SEPARATOR = ":"


@dataclass(frozen=True)
class FieldExpression:
    """Parsed form of one bracketed expression."""

    field: str
    modifiers: tuple[Modifier, ...]
    raw: str

    @classmethod
    def parse(cls, body: str) -> FieldExpression:
        """Parse the text between the brackets.

        Raises:
            InvalidModifierError: If a modifier has a malformed argument.
        """
        parts = _split_outside_parentheses(body, MODIFIER_SEPARATOR)
        modifiers = tuple(parse_modifier(token) for token in parts[1:] if token)
        return cls(parts[0], modifiers, body)


def _split_outside_parentheses(text: str, separator: str) -> list[str]:
    parts = []
    current = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    parts.append("".join(current))
    return parts


def _scan(pattern: str) -> Iterator[tuple[bool, str]]:
    """Yield (is_bracket, text) spans of a pattern.

    An opening bracket without a matching close is literal text.
    """
    literal_start = 0
    pos = 0

    while pos < len(pattern):
        if pattern[pos] != "[":
            pos += 1
            continue

        end = _find_closing_bracket(pattern, pos + 1)
        if end < 0:
            break

        if pos > literal_start:
            yield False, pattern[literal_start:pos]
        yield True, pattern[pos + 1 : end]

        pos = end + 1
        literal_start = pos

    if literal_start < len(pattern):
        yield False, pattern[literal_start:]


def _find_closing_bracket(pattern: str, start: int) -> int:
    depth = 0
    for pos in range(start, len(pattern)):
        char = pattern[pos]
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == "]" and depth == 0:
            return pos
    return -1


def split_pattern(pattern: str) -> list[str | FieldExpression]:
    """Split a pattern into literal strings and field expressions.

    Args:
        pattern: Key pattern

    Returns:
        Segments in pattern order.

    Raises:
        InvalidModifierError: If a modifier has a malformed argument.
    """
    return [
        FieldExpression.parse(text) if is_bracket else text
        for is_bracket, text in _scan(pattern)
    ]


def expand_brackets(pattern: str, expand_bracket: Callable[[str], str]) -> str:
    """Expand every bracketed expression in a pattern.

    Literal text passes through unchanged, so a pattern without brackets
    comes back as is.

    Args:
        pattern: Key pattern
        expand_bracket: Maps the body of one bracket expression to its
            expansion; it may call expand_brackets again for nested text

    Returns:
        The expanded pattern.
    """
    return "".join(
        expand_bracket(text) if is_bracket else text
        for is_bracket, text in _scan(pattern)
    )


class KeyPatterns:
    """Key patterns per entry type with a default fallback."""

    DEFAULT_PATTERN = "[auth][year]"

    def __init__(
        self,
        default_pattern: str | None = None,
        type_patterns: Mapping[str, str] | None = None,
    ):
        """Initialize patterns.

        Args:
            default_pattern: Pattern for types without their own pattern
            type_patterns: Entry type to pattern mapping
        """
        self.default_pattern = default_pattern or self.DEFAULT_PATTERN
        self._patterns: dict[str, str] = {}
        for entry_type, pattern in (type_patterns or {}).items():
            self.set_pattern(entry_type, pattern)

    def set_pattern(self, entry_type: str, pattern: str) -> None:
        """Set the pattern for an entry type."""
        self._patterns[entry_type.lower()] = pattern

    def remove_pattern(self, entry_type: str) -> bool:
        """Remove a type-specific pattern, reverting to the default."""
        return self._patterns.pop(entry_type.lower(), None) is not None

    def get_pattern(self, entry: Entry | str) -> str:
        """Get the pattern for an entry or entry type."""
        entry_type = entry.type if isinstance(entry, Entry) else entry
        return self._patterns.get(entry_type.lower(), self.default_pattern)

    def __contains__(self, entry_type: str) -> bool:
        return entry_type.lower() in self._patterns

    def __repr__(self) -> str:
        return (
            f"KeyPatterns(default_pattern={self.default_pattern!r}, "
            f"type_patterns={self._patterns!r})"
        )
