"""Delimited line splitting for exported pages."""

from __future__ import annotations

import re

from core.constants import FIELD_DELIMITER, LINE_BREAK_PATTERN, QUOTE_CHARACTER

_LINE_BREAK_RE = re.compile(LINE_BREAK_PATTERN)


def split_lines(page_text: str) -> list[str]:
    """Split raw page text into lines on CRLF, CR, or LF."""
    return _LINE_BREAK_RE.split(page_text)


def split_line(line: str, delimiter: str = FIELD_DELIMITER) -> list[str]:
    """Split one line into fields, honoring quoted spans.

    Quote characters toggle the inside-quotes state and are dropped from
    the output. Delimiters inside quotes are kept as field content. Doubled
    quotes are not treated as escapes.

    Args:
        line: One line of page text.
        delimiter: Field separator character.

    Returns:
        Ordered field strings; never empty.
    """
    fields: list[str] = []
    current: list[str] = []
    inside_quotes = False
    for character in line:
        if character == QUOTE_CHARACTER:
            inside_quotes = not inside_quotes
        elif character == delimiter and not inside_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(character)
    fields.append("".join(current))
    return fields
