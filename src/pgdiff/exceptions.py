"""Exception classes for pgdiff."""

from typing import Optional

__all__ = [
    "PgDiffError",
    "ParserError",
    "SchemaLoadError",
    "ConfigError",
]


class PgDiffError(Exception):
    """Base exception for pgdiff."""


class ParserError(PgDiffError):
    """Error parsing a DDL statement.

    Args:
        message: Human readable description, usually quoting the offending text
        cause: Underlying error when this one wraps a lower level failure
    """

    CANNOT_PARSE_COMMAND = "Cannot parse command: "

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class SchemaLoadError(PgDiffError):
    """Error reading a DDL dump."""


class ConfigError(PgDiffError):
    """Error in configuration."""
