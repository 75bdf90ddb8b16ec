"""Export parsed schema models to YAML."""

from pathlib import Path
from typing import Any

import yaml

from pgdiff.schema.models import Column, Schema, Table


def table_to_dict(table: Table) -> dict[str, Any]:
    """Convert a Table model to a dictionary suitable for YAML export."""
    data: dict[str, Any] = {"table": table.name}

    data["columns"] = [_column_to_dict(col) for col in table.columns]

    if table.constraints:
        data["constraints"] = [
            {"name": c.name, "definition": c.definition}
            for c in table.constraints.values()
        ]

    if table.inherits is not None:
        data["inherits"] = table.inherits

    if table.with_oids is not None:
        data["with_oids"] = table.with_oids

    return data


def _column_to_dict(col: Column) -> dict[str, Any]:
    """Convert a Column model to a dictionary."""
    data: dict[str, Any] = {"name": col.name, "type": col.type}

    if not col.nullable:
        data["nullable"] = False

    if col.default is not None:
        data["default"] = col.default

    return data


def schema_to_dict(schema: Schema) -> dict[str, Any]:
    """Convert a Schema to a dictionary, tables in parse order."""
    return {"tables": [table_to_dict(t) for t in schema.tables.values()]}


def export_table_yaml(table: Table) -> str:
    """Export a single table to YAML string."""
    return _dump(table_to_dict(table))


def export_schema_yaml(schema: Schema) -> str:
    """Export a whole schema to a single YAML string."""
    return _dump(schema_to_dict(schema))


def _dump(data: dict[str, Any]) -> str:
    return yaml.dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def export_schema_to_directory(schema: Schema, output_dir: Path) -> list[Path]:
    """Export all tables in a schema to individual YAML files.

    Returns list of created file paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    created_files = []

    for table_name in sorted(schema.table_names()):
        table = schema.find_table(table_name)
        if table is None:
            continue

        file_path = output_dir / f"{table_name}.yaml"
        file_path.write_text(export_table_yaml(table))
        created_files.append(file_path)

    return created_files
