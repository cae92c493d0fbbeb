"""Character filtering for citation keys.

Keys must survive BibTeX and LaTeX, so a fixed set of characters is
always removed, and non-ASCII letters are replaced with plain letter
sequences that BibTeX accepts.
"""

import re
import unicodedata

DISALLOWED_CHARACTERS = frozenset("{}(),=\\\"#%~'")

# '+' stays: alpha-style keys use it for "et al."
DEFAULT_UNWANTED_CHARACTERS = "-`ʹ:!;?^"

_WHITESPACE = re.compile(r"\s", re.UNICODE)

# Applied before accent stripping, so umlauts get their German spelling
SPECIAL_CHARACTERS = {
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "Ä": "Ae",
    "Ö": "Oe",
    "Ü": "Ue",
    "ß": "ss",
    "ẞ": "SS",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ø": "o",
    "Ø": "O",
    "å": "a",
    "Å": "A",
    "ł": "l",
    "Ł": "L",
    "đ": "d",
    "Đ": "D",
    "ð": "d",
    "Ð": "D",
    "þ": "th",
    "Þ": "Th",
    "ı": "i",
    "ħ": "h",
    "Ħ": "H",
}


def replace_special_characters(text: str) -> str:
    """Replace accented Latin and other special letters with ASCII spellings.

    Accents are stripped from ASCII base letters only. Other scripts (kana,
    Hangul, Devanagari, CJK ideographs) come back unchanged in NFC form.
    """
    for old, new in SPECIAL_CHARACTERS.items():
        text = text.replace(old, new)

    # Marks on non-ASCII bases (kana voicing, viramas) belong to the letter
    kept = []
    ascii_base = False
    for char in unicodedata.normalize("NFD", text):
        if unicodedata.category(char) == "Mn":
            if ascii_base:
                continue
        else:
            ascii_base = char.isascii()
        kept.append(char)

    return unicodedata.normalize("NFC", "".join(kept))


def remove_unwanted_characters(key: str, unwanted_characters: str) -> str:
    """Remove unwanted and disallowed characters, then transliterate.

    Args:
        key: Raw text, usually an expanded field value
        unwanted_characters: Additional characters to drop

    Returns:
        Filtered text.
    """
    filtered = _drop(key, unwanted_characters)
    # Decomposition can surface new characters (U+037E becomes ";")
    return _drop(replace_special_characters(filtered), unwanted_characters)


def remove_default_unwanted_characters(key: str) -> str:
    """Remove the default unwanted characters from a key."""
    return remove_unwanted_characters(key, DEFAULT_UNWANTED_CHARACTERS)


def clean_key(key: str, unwanted_characters: str) -> str:
    """Filter a key and strip all whitespace from it."""
    return _WHITESPACE.sub("", remove_unwanted_characters(key, unwanted_characters))


def _drop(text: str, unwanted_characters: str) -> str:
    return "".join(
        char
        for char in text
        if char not in unwanted_characters and char not in DISALLOWED_CHARACTERS
    )
