"""Core domain models for bibliography entries."""

# Models
from citekey.core.models import (
    Entry,
    FieldChange,
)

# Name parsing
from citekey.core.names import (
    NameParser,
    ParsedName,
    strip_braces,
)

__all__ = [
    # Models
    "Entry",
    "FieldChange",
    # Name parsing
    "NameParser",
    "ParsedName",
    "strip_braces",
]
