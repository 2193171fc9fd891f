"""Regular expressions for common tokens of the script format."""

import functools
import re

# Anything that is not =, { or }, or anything within quotes.
CATCHALL_REGEX = r'[^=^{^}]+|".+"'

INTEGER_REGEX = r"-?\d+"
QUOTED_INTEGER_REGEX = r'"-?\d+"'
FLOAT_REGEX = r"-?\d+(.\d+)?"
QUOTED_FLOAT_REGEX = r'"-?\d+(.\d+)?"'

STRING_REGEX = r'[^\s^=^\{^\}^\^\[^\]"]+'
QUOTED_STRING_REGEX = r'"[^\n"]+"'

DATE_REGEX = r"\d+[.]\d+[.]\d+"


@functools.lru_cache(maxsize=64)
def _compiled(pattern: str) -> "re.Pattern[str]":
    return re.compile(pattern, re.ASCII)


def full_match(pattern: str, text: str) -> bool:
    """Return True when ``pattern`` matches the whole of ``text``."""
    return _compiled(pattern).fullmatch(text) is not None