"""Low-level text helpers shared by the DDL parsers.

Quoting policy: single-quoted string literals ('...') and double-quoted
identifiers ("...") are honored. A quoted span ends at the next quote of the
same kind, so a doubled quote ('' or "") closes and immediately reopens the
span and its content stays quoted. Backslash escapes are not recognized.
Dollar-quoted bodies are recognized by the statement splitter only.
"""

from typing import Iterator, Optional

from pgdiff.exceptions import ParserError
from pgdiff.types import ClauseBoundary

__all__ = [
    "QUOTE_CHARS",
    "iter_unquoted",
    "get_command_end",
    "remove_last_semicolon",
    "remove_substring",
]

QUOTE_CHARS = ("'", '"')


def iter_unquoted(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield (offset, char) for every character outside quoted spans.

    Quote characters themselves are never yielded.
    """
    quote: Optional[str] = None
    for pos in range(start, len(text)):
        char = text[pos]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTE_CHARS:
            quote = char
        else:
            yield pos, char


def get_command_end(text: str, start: int = 0) -> ClauseBoundary:
    """Find the end of the clause starting at start.

    The clause ends at the first ',' or ')' that is outside quotes and not
    nested in parentheses opened after start.

    Args:
        text: Body of a CREATE TABLE statement
        start: Offset the clause starts at

    Returns:
        ClauseBoundary with the terminator offset and whether it was ')'

    Raises:
        ParserError: If the text ends before the clause is terminated
    """
    depth = 0
    for pos, char in iter_unquoted(text, start):
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                return ClauseBoundary(end=pos, closes_list=True)
            depth -= 1
        elif char == "," and depth == 0:
            return ClauseBoundary(end=pos, closes_list=False)

    raise ParserError(
        f"{ParserError.CANNOT_PARSE_COMMAND}unterminated clause '{text[start:].strip()}'"
    )


def remove_last_semicolon(text: str) -> str:
    """Remove a single ';' ending the text, ignoring trailing whitespace."""
    stripped = text.rstrip()
    if stripped.endswith(";"):
        return stripped[:-1]
    return text


def remove_substring(text: str, start: int, end: int) -> str:
    """Remove text[start:end] and join what surrounds it with a space."""
    return f"{text[:start]} {text[end:]}"
