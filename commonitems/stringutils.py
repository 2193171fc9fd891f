"""Helpers for adding, removing and detecting surrounding double quotes."""

_QUOTE = '"'


def is_quoted(text: str) -> bool:
    """Return True when ``text`` starts and ends with a double quote."""
    return text.startswith(_QUOTE) and text.endswith(_QUOTE)


def rem_quotes(text: str) -> str:
    """Strip one pair of surrounding double quotes, if present."""
    if len(text) < 2 or not is_quoted(text):
        return text
    return text[1:-1]


def add_quotes(text: str) -> str:
    """Wrap ``text`` in double quotes unless it already carries any at its ends."""
    if len(text) > 2 and is_quoted(text):
        return text
    if not text.startswith(_QUOTE) and not text.endswith(_QUOTE):
        return f"{_QUOTE}{text}{_QUOTE}"
    return text