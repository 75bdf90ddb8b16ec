"""Load a schema from a DDL dump."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from pgdiff.exceptions import ParserError, SchemaLoadError
from pgdiff.parsers import create_table
from pgdiff.parsers.utils import QUOTE_CHARS
from pgdiff.schema.models import Schema

__all__ = ["split_statements", "load_schema", "load_schema_file"]

logger = logging.getLogger(__name__)

PATTERN_CREATE_TABLE = re.compile(r"^CREATE\s+TABLE\s")
PATTERN_DOLLAR_TAG = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


def split_statements(sql: str) -> list[str]:
    """Split SQL text into individual statements.

    Handles:
    - ';' terminators outside quotes and parentheses (kept on the statement)
    - dollar-quoted bodies ($$...$$, $tag$...$tag$), copied verbatim
    - -- line comments outside quotes (dropped)
    - empty statements (skipped)
    - a last statement without ';'

    Text ending inside an open quote or dollar-quoted body is kept as the
    last statement and a warning is logged.

    Args:
        sql: SQL text potentially containing multiple statements.

    Returns:
        List of stripped, non-empty statements.
    """
    statements: list[str] = []
    buf: list[str] = []
    depth = 0
    quote: Optional[str] = None
    dollar_tag: Optional[str] = None
    pos = 0

    while pos < len(sql):
        if dollar_tag is not None:
            close = sql.find(dollar_tag, pos)
            if close < 0:
                buf.append(sql[pos:])
                break
            end = close + len(dollar_tag)
            buf.append(sql[pos:end])
            dollar_tag = None
            pos = end
            continue

        char = sql[pos]
        if quote is None and char == "$":
            dollar_tag = _match_dollar_tag(sql, pos)
            if dollar_tag is not None:
                buf.append(dollar_tag)
                pos += len(dollar_tag)
                continue

        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTE_CHARS:
            quote = char
        elif sql.startswith("--", pos):
            newline = sql.find("\n", pos)
            pos = len(sql) if newline < 0 else newline
            continue
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        elif char == ";" and depth == 0:
            buf.append(char)
            _flush(statements, buf)
            buf = []
            pos += 1
            continue
        buf.append(char)
        pos += 1

    if dollar_tag is not None:
        logger.warning(f"Unterminated dollar-quoted body opened by {dollar_tag} at end of input")
    elif quote is not None:
        logger.warning(f"Unterminated {quote}-quoted span at end of input")

    _flush(statements, buf)
    return statements


def _match_dollar_tag(sql: str, pos: int) -> Optional[str]:
    """Return the dollar-quote tag opening at pos, if any.

    A '$' directly after an identifier character is part of the identifier.
    """
    if pos > 0 and (sql[pos - 1].isalnum() or sql[pos - 1] == "_"):
        return None
    match = PATTERN_DOLLAR_TAG.match(sql, pos)
    return match.group(0) if match else None


def _flush(statements: list[str], buf: list[str]) -> None:
    stmt = "".join(buf).strip()
    if stmt and stmt != ";":
        statements.append(stmt)


def load_schema(
    sql: str, schema: Optional[Schema] = None, skip_errors: bool = False
) -> Schema:
    """Parse every CREATE TABLE statement of a DDL dump.

    Other statements are ignored.

    Args:
        sql: DDL text
        schema: Schema to add tables to (default: a new, empty one)
        skip_errors: Log and skip statements that fail to parse instead of
            raising

    Returns:
        The filled schema

    Raises:
        ParserError: If a CREATE TABLE statement cannot be parsed and
            skip_errors is False
    """
    if schema is None:
        schema = Schema()

    parsed = 0
    failed = 0
    for statement in split_statements(sql):
        if not PATTERN_CREATE_TABLE.match(statement):
            logger.debug(f"Ignoring statement: {statement.splitlines()[0]}")
            continue
        try:
            create_table.parse(schema, statement)
        except ParserError as exc:
            if not skip_errors:
                raise
            failed += 1
            logger.warning(f"Skipping statement: {exc}")
            continue
        parsed += 1

    logger.info(
        f"Parsed {parsed} CREATE TABLE statement(s)"
        + (f", skipped {failed} failed" if failed else "")
    )
    return schema


def load_schema_file(
    path: Path, encoding: str = "utf-8", skip_errors: bool = False
) -> Schema:
    """Load a schema from a DDL file.

    Raises:
        SchemaLoadError: If the file does not exist or cannot be read
        ParserError: If a CREATE TABLE statement cannot be parsed and
            skip_errors is False
    """
    if not path.is_file():
        raise SchemaLoadError(f"DDL file does not exist: {path}")

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise SchemaLoadError(f"Failed to read DDL file '{path}': {exc}") from exc

    logger.debug(f"Loading schema from {path}")
    return load_schema(content, skip_errors=skip_errors)
