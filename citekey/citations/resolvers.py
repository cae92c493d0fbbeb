"""Resolution of field tokens against entries.

Plain tokens read the entry field of the same name. Pseudo-fields derive
a value from one or more fields:

- auth, authN: First author's last name (first N characters)
- authors, authorsN: Last names of all (or the first N) authors
- authorLast: Last author's last name
- authorIni: First letter of every author's last name
- authEtAl: First author, then "EtAl" (3+ authors) or "And<Last>" (2)
- authorcount: Number of authors
- edtr: First editor's last name
- year, shortyear: Year (from year or date), last two digits
- firstpage, lastpage: Page range ends
- shorttitle, veryshorttitle: First three / first significant title words
- keywords, keywordN: All keywords, or the Nth keyword
- entrytype: The entry type

Pseudo-field names are matched case-insensitively. Missing values
resolve to an empty string.
"""

import re

from citekey.citations.modifiers import FUNCTION_WORDS
from citekey.core.models import Entry
from citekey.core.names import NameParser, strip_braces

_NUMBERED = re.compile(r"([a-z]+?)([0-9]+)", re.IGNORECASE)
_YEAR = re.compile(r"\d{4}")
_PAGE_SEPARATOR = re.compile(r"\s*[-\u2013\u2014]+\s*")
_LATEX_COMMAND = re.compile(r"\\[a-zA-Z]+\s*")

SHORT_TITLE_WORDS = 3


class FieldResolver:
    """Resolves field tokens, including pseudo-fields, to raw text."""

    def resolve(self, token: str, entry: Entry, keyword_delimiter: str = ",") -> str:
        """Resolve a field token against an entry.

        Args:
            token: Field name or pseudo-field token
            entry: Entry to read from
            keyword_delimiter: Separator of the keywords field

        Returns:
            Raw field text, or "" if the value is absent.
        """
        name = token.strip().lower()
        if not name:
            return ""

        match name:
            case "auth":
                return self._first_last_name(entry.authors)
            case "authors":
                return "".join(self._last_names(entry.authors))
            case "authorlast":
                return self._last_names(entry.authors[-1:])[0] if entry.authors else ""
            case "authorini":
                return "".join(last[:1] for last in self._last_names(entry.authors))
            case "authetal":
                return self._auth_et_al(entry.authors)
            case "authorcount":
                return str(len(entry.authors))
            case "edtr":
                return self._first_last_name(entry.editors)
            case "year":
                return self._year(entry)
            case "shortyear":
                return self._year(entry)[-2:]
            case "firstpage":
                return self._pages(entry)[0]
            case "lastpage":
                return self._pages(entry)[-1]
            case "shorttitle":
                return " ".join(self._significant_title_words(entry)[:SHORT_TITLE_WORDS])
            case "veryshorttitle":
                words = self._significant_title_words(entry)
                return words[0] if words else ""
            case "keywords":
                return "".join(entry.get_keywords(keyword_delimiter))
            case "entrytype":
                return entry.type

        if match := _NUMBERED.fullmatch(name):
            prefix, number = match.group(1), int(match.group(2))
            match prefix:
                case "auth":
                    return self._first_last_name(entry.authors)[:number]
                case "authors":
                    return self._authors_n(entry.authors, number)
                case "keyword":
                    keywords = entry.get_keywords(keyword_delimiter)
                    return keywords[number - 1] if 0 < number <= len(keywords) else ""

        return strip_braces(entry.get_field(name) or "")

    @staticmethod
    def _last_names(names: tuple[str, ...]) -> list[str]:
        return [NameParser.parse(name).last_name for name in names]

    def _first_last_name(self, names: tuple[str, ...]) -> str:
        return self._last_names(names[:1])[0] if names else ""

    def _authors_n(self, authors: tuple[str, ...], count: int) -> str:
        result = "".join(self._last_names(authors[:count]))
        if len(authors) > count:
            result += "EtAl"
        return result

    def _auth_et_al(self, authors: tuple[str, ...]) -> str:
        if not authors:
            return ""
        last_names = self._last_names(authors)
        if len(last_names) == 1:
            return last_names[0]
        if len(last_names) == 2:
            return f"{last_names[0]}And{last_names[1]}"
        return f"{last_names[0]}EtAl"

    @staticmethod
    def _year(entry: Entry) -> str:
        for field in ("year", "date"):
            value = entry.get_field(field)
            if value and (match := _YEAR.search(value)):
                return match.group(0)
        return ""

    @staticmethod
    def _pages(entry: Entry) -> list[str]:
        pages = strip_braces(entry.get_field("pages") or "").strip()
        if not pages:
            return [""]
        return [page for page in _PAGE_SEPARATOR.split(pages) if page] or [""]

    @staticmethod
    def _significant_title_words(entry: Entry) -> list[str]:
        title = entry.get_field("title") or ""
        title = strip_braces(_LATEX_COMMAND.sub("", title))
        return [word for word in title.split() if word.lower() not in FUNCTION_WORDS]
