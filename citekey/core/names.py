"""Author name parsing according to BibTeX rules."""

import re
from dataclasses import dataclass

_BRACES = re.compile(r"[{}]")


def strip_braces(text: str) -> str:
    """Remove BibTeX grouping braces from text."""
    return _BRACES.sub("", text)


@dataclass
class ParsedName:
    """Parsed name components."""

    first: list[str]
    von: list[str]
    last: list[str]
    jr: list[str]

    @property
    def last_name(self) -> str:
        """Last name without von particle, braces removed.

        Corporate authors written as a single braced group, e.g.
        "{European Space Agency}", come back with their inner spaces.
        """
        return strip_braces(" ".join(self.last))


class NameParser:
    """Parse author names according to BibTeX rules."""

    @staticmethod
    def parse(name: str) -> ParsedName:
        """
        Parse name according to BibTeX's three formats.

        Format determined by comma count:
        - 0 commas: "First von Last"
        - 1 comma: "von Last, First"
        - 2 commas: "von Last, Jr, First"
        """
        name = name.strip()
        if not name:
            return ParsedName([], [], [], [])

        # Commas inside braces belong to corporate names
        parts = NameParser._split_top_level(name)

        if len(parts) == 1:
            return NameParser._parse_first_von_last(name)

        von, last = NameParser._split_von_last(NameParser._tokenize(parts[0]))
        if len(parts) == 2:
            return ParsedName(NameParser._tokenize(parts[1]), von, last, [])

        # Too many commas - everything after the 2nd comma is the first name
        first = ",".join(parts[2:])
        return ParsedName(
            NameParser._tokenize(first), von, last, NameParser._tokenize(parts[1])
        )

    @staticmethod
    def _split_top_level(name: str) -> list[str]:
        """Split on commas at brace depth zero."""
        parts = []
        current = []
        depth = 0

        for char in name:
            if char == "{":
                depth += 1
            elif char == "}":
                depth = max(0, depth - 1)
            elif char == "," and depth == 0:
                parts.append("".join(current).strip())
                current = []
                continue
            current.append(char)

        parts.append("".join(current).strip())
        return parts

    @staticmethod
    def _tokenize(name: str) -> list[str]:
        """Split name into tokens, preserving braced groups."""
        tokens = []
        current = []
        brace_level = 0

        for char in name:
            if char == "{":
                brace_level += 1
            elif char == "}":
                brace_level -= 1
            elif char in " \t\n~" and brace_level == 0:
                if current:
                    tokens.append("".join(current))
                    current = []
                continue
            current.append(char)

        if current:
            tokens.append("".join(current))

        return tokens

    @staticmethod
    def _starts_with_lowercase(word: str) -> bool:
        """
        Check if word starts with lowercase letter.

        BibTeX rules:
        - {X} at start means NOT lowercase (braced words are not von)
        - Special chars ignored
        - First real letter determines case
        """
        if word.startswith("{") and word.endswith("}"):
            return False

        for char in word:
            if char.isalpha():
                return char.islower()

        return False

    @staticmethod
    def _split_von_last(tokens: list[str]) -> tuple[list[str], list[str]]:
        """Split the 'von Last' part of a comma-separated name."""
        if not tokens:
            return [], []

        # Last name is at least the last token
        von_end = -1
        for i in range(len(tokens) - 1):
            if NameParser._starts_with_lowercase(tokens[i]):
                von_end = i

        return tokens[: von_end + 1], tokens[von_end + 1 :]

    @staticmethod
    def _parse_first_von_last(name: str) -> ParsedName:
        """Parse 'First von Last' format."""
        tokens = NameParser._tokenize(name)

        if not tokens:
            return ParsedName([], [], [], [])

        if len(tokens) == 1:
            return ParsedName([], [], tokens, [])

        # von is a continuous run of lowercase words, never the final word
        von_start = None
        von_end = None

        for i in range(len(tokens) - 1):
            if NameParser._starts_with_lowercase(tokens[i]):
                if von_start is None:
                    von_start = i
                von_end = i
            elif von_start is not None:
                break

        if von_start is None or von_end is None:
            return ParsedName(tokens[:-1], [], tokens[-1:], [])

        return ParsedName(
            tokens[:von_start],
            tokens[von_start : von_end + 1],
            tokens[von_end + 1 :],
            [],
        )
