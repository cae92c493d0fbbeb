"""Regex find/replace applied to generated keys."""

import logging
import re

logger = logging.getLogger(__name__)

_JAVA_REFERENCE = re.compile(
    r"\\(.)|\$(?:(\d+)|\{([A-Za-z_][A-Za-z0-9_]*)\})", re.DOTALL
)


def to_python_template(replacement: str) -> str:
    """Translate $1 and ${name} group references to Python syntax.

    Python-style references (\\1, \\g<name>) are left alone, so
    replacements written for either dialect work. An escaped \\$ is a
    literal dollar sign.
    """
    return _JAVA_REFERENCE.sub(_translate_reference, replacement)


def _translate_reference(match: re.Match) -> str:
    escaped = match.group(1)
    if escaped is not None:
        return "$" if escaped == "$" else match.group(0)
    return f"\\g<{match.group(2) or match.group(3)}>"


def replace_with_regex(key: str, regex: str, replacement: str) -> str:
    """Replace every match of regex in key.

    An invalid regex or replacement never blocks key generation: the
    error is logged and the key is returned unchanged.

    Args:
        key: Expanded citation key
        regex: Pattern to search for; empty disables replacement
        replacement: Replacement template

    Returns:
        The rewritten key.
    """
    if not regex:
        return key

    try:
        return re.sub(regex, to_python_template(replacement), key)
    except (re.error, IndexError) as e:
        logger.error(f"Invalid regex pattern provided: {regex!r} ({e})")
        return key
