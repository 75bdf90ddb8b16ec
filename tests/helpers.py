"""Shared test helpers for pgdiff tests."""

from pathlib import Path

from pgdiff.schema.models import Table

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "ddl"


def table_snapshot(table: Table) -> dict:
    """Reduce a table to plain data for order-sensitive comparisons.

    Columns and constraints are lists of (name, definition) pairs in the
    order they were declared.
    """
    return {
        "name": table.name,
        "columns": [(c.name, c.definition) for c in table.columns],
        "constraints": [(c.name, c.definition) for c in table.constraints.values()],
        "inherits": table.inherits,
        "with_oids": table.with_oids,
    }


def write_ddl(directory: Path, content: str, name: str = "schema.sql") -> Path:
    """Write DDL text to a file and return its path."""
    path = directory / name
    path.write_text(content)
    return path
