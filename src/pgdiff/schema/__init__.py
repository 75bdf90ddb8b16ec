"""Schema model and export modules."""

from pgdiff.schema.models import (
    Column,
    Constraint,
    Schema,
    Table,
)

__all__ = [
    "Column",
    "Constraint",
    "Schema",
    "Table",
]
