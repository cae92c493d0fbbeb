"""Text modifiers for bracketed field expressions.

A field expression such as ``[title:veryshorttitle:lower]`` carries a chain
of modifiers that are applied left to right, each one receiving the output
of the previous one. Supported modifiers:

- lower, upper: Full case fold
- capitalize: Uppercase the first letter of each word, lowercase the rest
- sentencecase: Capitalize the first word, lowercase all others
- titlecase: Capitalize every word
- abbr: First letter of each space-separated word
- veryshorttitle: First word that is not a function word
- truncateN: First N characters
- regex...: Recognized but inert
- (text): Fallback used when the value is empty; may contain brackets

Unknown modifiers are ignored so that newer patterns still expand.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from citekey.citations.exceptions import InvalidModifierError

FUNCTION_WORDS = frozenset({"the", "with", "and", "or", "but"})

_TRUNCATE = re.compile(r"truncate(.*)", re.DOTALL)
_LENGTH = re.compile(r"[0-9]+")


class ModifierKind(Enum):
    """Closed set of modifier kinds."""

    LOWER = "lower"
    UPPER = "upper"
    CAPITALIZE = "capitalize"
    SENTENCE_CASE = "sentencecase"
    TITLE_CASE = "titlecase"
    ABBREVIATE = "abbr"
    VERY_SHORT_TITLE = "veryshorttitle"
    TRUNCATE = "truncate"
    REGEX = "regex"
    FALLBACK = "fallback"
    UNKNOWN = "unknown"


# Kinds whose token is more than a bare keyword
_PARAMETERIZED = {
    ModifierKind.TRUNCATE,
    ModifierKind.REGEX,
    ModifierKind.FALLBACK,
    ModifierKind.UNKNOWN,
}

_KEYWORDS = {
    kind.value: kind for kind in ModifierKind if kind not in _PARAMETERIZED
}


@dataclass(frozen=True)
class Modifier:
    """Parsed modifier token.

    Attributes:
        kind: Which transformation to apply
        raw: Token as written in the pattern
        length: Truncation length for TRUNCATE
        fallback: Replacement text for FALLBACK
    """

    kind: ModifierKind
    raw: str
    length: int | None = None
    fallback: str | None = None


def parse_modifier(token: str) -> Modifier:
    """Parse a single modifier token.

    Args:
        token: Modifier text, e.g. "lower", "truncate5" or "(anonymous)"

    Returns:
        Parsed modifier; unrecognized tokens yield ModifierKind.UNKNOWN.

    Raises:
        InvalidModifierError: If a truncate length is not a number.
    """
    if len(token) >= 2 and token.startswith("(") and token.endswith(")"):
        return Modifier(ModifierKind.FALLBACK, token, fallback=token[1:-1])

    name = token.lower()

    if name in _KEYWORDS:
        return Modifier(_KEYWORDS[name], token)

    if match := _TRUNCATE.fullmatch(name):
        argument = match.group(1)
        if not _LENGTH.fullmatch(argument):
            raise InvalidModifierError(
                token, "truncation length must be a non-negative integer"
            )
        return Modifier(ModifierKind.TRUNCATE, token, length=int(argument))

    if name.startswith("regex"):
        return Modifier(ModifierKind.REGEX, token)

    return Modifier(ModifierKind.UNKNOWN, token)


def apply_modifiers(
    value: str,
    modifiers: Iterable[Modifier | str],
    expand_bracket: Callable[[str], str] | None = None,
) -> str:
    """Apply a chain of modifiers to a value, left to right.

    Args:
        value: Expanded field value
        modifiers: Parsed modifiers or raw modifier tokens
        expand_bracket: Callback expanding a bracket body; used to expand
            bracket expressions inside fallback text

    Returns:
        The transformed value.

    Raises:
        InvalidModifierError: If a raw token has a malformed argument.
    """
    for modifier in modifiers:
        if isinstance(modifier, str):
            modifier = parse_modifier(modifier)

        match modifier.kind:
            case ModifierKind.LOWER:
                value = value.lower()
            case ModifierKind.UPPER:
                value = value.upper()
            case ModifierKind.CAPITALIZE:
                value = capitalize(value)
            case ModifierKind.SENTENCE_CASE:
                value = sentence_case(value)
            case ModifierKind.TITLE_CASE:
                value = title_case(value)
            case ModifierKind.ABBREVIATE:
                value = abbreviate(value)
            case ModifierKind.VERY_SHORT_TITLE:
                value = first_significant_word(value)
            case ModifierKind.TRUNCATE:
                value = truncate(value, modifier.length or 0)
            case ModifierKind.FALLBACK:
                if not value:
                    value = _expand_fallback(modifier.fallback or "", expand_bracket)
            case ModifierKind.REGEX | ModifierKind.UNKNOWN:
                pass

    return value


def _expand_fallback(text: str, expand_bracket: Callable[[str], str] | None) -> str:
    if expand_bracket is None:
        return text

    from citekey.citations.patterns import expand_brackets

    return expand_brackets(text, expand_bracket)


def _capitalize_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def capitalize(value: str) -> str:
    """Capitalize each whitespace-separated word."""
    return " ".join(_capitalize_word(word) for word in value.split())


def sentence_case(value: str) -> str:
    """Capitalize the first word and lowercase the rest."""
    words = value.split()
    if not words:
        return ""
    return " ".join([_capitalize_word(words[0])] + [w.lower() for w in words[1:]])


def title_case(value: str) -> str:
    """Capitalize every word of a title."""
    return " ".join(capitalize(word) for word in value.split())


def abbreviate(value: str) -> str:
    """Concatenate the first character of every space-separated word."""
    return "".join(word[0] for word in value.split(" ") if word)


def first_significant_word(value: str) -> str:
    """Return the first word that is not a function word.

    If every word is a function word, the value is returned unchanged.
    """
    for word in value.split():
        if word.lower() not in FUNCTION_WORDS:
            return word
    return value


def truncate(value: str, length: int) -> str:
    """Cut a value down to at most length characters."""
    return value[:length] if len(value) > length else value
