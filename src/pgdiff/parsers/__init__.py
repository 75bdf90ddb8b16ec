"""DDL parsers."""

from pgdiff.parsers.create_table import parse as parse_create_table
from pgdiff.parsers.loader import load_schema, load_schema_file, split_statements
from pgdiff.parsers.utils import get_command_end

__all__ = [
    "get_command_end",
    "load_schema",
    "load_schema_file",
    "parse_create_table",
    "split_statements",
]
