"""Parser for CREATE TABLE statements."""

from __future__ import annotations

import logging
import re

from pgdiff.exceptions import ParserError
from pgdiff.parsers.utils import (
    get_command_end,
    remove_last_semicolon,
    remove_substring,
)
from pgdiff.schema.models import Schema, Table
from pgdiff.types import Clause, ClauseKind

__all__ = [
    "parse",
    "extract_table_name",
    "classify_clause",
    "apply_clause",
    "parse_post_columns",
]

logger = logging.getLogger(__name__)

PATTERN_TABLE_NAME = re.compile(r"^\s*CREATE\s+TABLE\s+([^\s(]+)\s*\(")
PATTERN_CONSTRAINT_KEYWORD = re.compile(r"^CONSTRAINT\s")
# a name is a double-quoted identifier ("" escapes a quote) or a run of non-space
NAME_TOKEN = r'("(?:[^"]|"")*"|\S+)'
PATTERN_CONSTRAINT = re.compile(rf"^CONSTRAINT\s+{NAME_TOKEN}\s+(.+)$", re.DOTALL)
PATTERN_COLUMN = re.compile(rf"^{NAME_TOKEN}\s+(.+)$", re.DOTALL)
PATTERN_INHERITS = re.compile(r"INHERITS\s*\(([^()]*)\)\s*;?")

WITH_OIDS = "WITH OIDS"
WITHOUT_OIDS = "WITHOUT OIDS"


def parse(schema: Schema, command: str) -> Table:
    """Parse a CREATE TABLE command into schema.

    Args:
        schema: Schema to be filled; the table is looked up or created in it
        command: One complete CREATE TABLE statement, optionally ending in ';'

    Returns:
        The table the statement described

    Raises:
        ParserError: If any part of the statement cannot be parsed. Columns and
            constraints parsed before the failure stay on the table.
    """
    table_name, body = extract_table_name(command)
    table = schema.get_table(table_name)
    body = remove_last_semicolon(body)

    try:
        residual = _parse_rows(table, body)
    # Only input errors get the table context; any other exception is a bug
    # in a collaborator and propagates as is.
    except ParserError as exc:
        raise ParserError(
            f"Cannot parse CREATE TABLE '{table.name}': {exc}\n"
            f"  in command: {command.strip()}",
            cause=exc,
        ) from exc

    residual = residual.strip()
    if residual:
        raise ParserError(
            f"Cannot parse CREATE TABLE '{table.name}' - "
            f"do not know how to parse '{residual}'"
        )

    logger.debug(
        f"Parsed table {table.name}: {len(table.columns)} columns, "
        f"{len(table.constraints)} constraints"
    )
    return table


def extract_table_name(command: str) -> tuple[str, str]:
    """Split "CREATE TABLE <name> (" off the command.

    Returns:
        Tuple of (table name, text following the opening parenthesis)

    Raises:
        ParserError: If the command does not start with CREATE TABLE <name> (
    """
    match = PATTERN_TABLE_NAME.match(command)
    if not match:
        raise ParserError(f"{ParserError.CANNOT_PARSE_COMMAND}{command}")
    return match.group(1).strip(), command[match.end() :]


def _parse_rows(table: Table, body: str) -> str:
    """Parse the column list and return whatever follows it, unparsed."""
    pos = 0
    while True:
        boundary = get_command_end(body, pos)
        apply_clause(table, classify_clause(body[pos : boundary.end]))
        pos = boundary.end + 1
        if boundary.closes_list:
            return parse_post_columns(table, body[pos:])


def classify_clause(text: str) -> Clause:
    """Tell a column definition from a named constraint.

    Raises:
        ParserError: If a non-empty clause is not "<name> <definition>" shaped
    """
    clause = text.strip()
    if not clause:
        return Clause(kind=ClauseKind.EMPTY)

    if PATTERN_CONSTRAINT_KEYWORD.match(clause):
        kind = ClauseKind.CONSTRAINT
        match = PATTERN_CONSTRAINT.match(clause)
    else:
        kind = ClauseKind.COLUMN
        match = PATTERN_COLUMN.match(clause)

    if not match:
        raise ParserError(f"{ParserError.CANNOT_PARSE_COMMAND}{clause}")

    return Clause(kind=kind, name=match.group(1), definition=match.group(2).strip())


def apply_clause(table: Table, clause: Clause) -> None:
    """Write a classified clause into table."""
    if clause.kind is ClauseKind.CONSTRAINT:
        table.get_constraint(clause.name).definition = clause.definition
    elif clause.kind is ClauseKind.COLUMN:
        table.get_column(clause.name).parse_definition(clause.definition)


def parse_post_columns(table: Table, text: str) -> str:
    """Parse the table options that follow the column list.

    INHERITS is handled independently of the OIDS option; of WITH OIDS and
    WITHOUT OIDS only the first one found is applied.

    Returns:
        The text left after removing the recognized options
    """
    line = text

    match = PATTERN_INHERITS.search(line)
    if match:
        table.inherits = match.group(1).strip()
        line = remove_substring(line, match.start(), match.end())

    if WITH_OIDS in line:
        table.with_oids = True
        line = _remove_option(line, WITH_OIDS)
    elif WITHOUT_OIDS in line:
        table.with_oids = False
        line = _remove_option(line, WITHOUT_OIDS)

    return line


def _remove_option(line: str, option: str) -> str:
    start = line.index(option)
    return remove_substring(line, start, start + len(option))
