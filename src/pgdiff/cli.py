"""Command-line interface for pgdiff."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pgdiff.config import Config
from pgdiff.exceptions import ConfigError, PgDiffError
from pgdiff.parsers.loader import load_schema_file
from pgdiff.schema.exporter import export_schema_to_directory, export_schema_yaml


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    parser = argparse.ArgumentParser(
        prog="pgdiff",
        description="PostgreSQL DDL schema parser",
    )
    parser.add_argument("--profile", help="Profile to read from ~/.pgdiffcfg")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser(
        "parse", help="List the tables found in a DDL dump"
    )
    parse_parser.add_argument("ddl_path", type=Path)
    parse_parser.add_argument(
        "--skip-errors",
        action="store_true",
        default=None,
        help="Skip CREATE TABLE statements that cannot be parsed",
    )

    export_parser = subparsers.add_parser(
        "export", help="Export the parsed schema as YAML"
    )
    export_parser.add_argument("ddl_path", type=Path)
    export_parser.add_argument(
        "--skip-errors",
        action="store_true",
        default=None,
        help="Skip CREATE TABLE statements that cannot be parsed",
    )
    output_group = export_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    output_group.add_argument(
        "--output-dir",
        type=Path,
        help="Write one YAML file per table into this directory",
    )

    args = parser.parse_args(argv)

    if args.command == "parse":
        return cmd_parse(args)
    elif args.command == "export":
        return cmd_export(args)
    else:
        print(f"Command '{args.command}' not yet implemented", file=sys.stderr)
        return 1


def _load_config(args: argparse.Namespace) -> Config:
    """Resolve configuration for a command and apply its log level."""
    config = Config.from_env(
        skip_errors=getattr(args, "skip_errors", None),
        profile=getattr(args, "profile", None),
    )
    config.validate()
    logging.getLogger().setLevel(config.logging_level)
    return config


def cmd_parse(args: argparse.Namespace) -> int:
    """List tables with their column and constraint counts."""
    try:
        config = _load_config(args)
        schema = load_schema_file(
            args.ddl_path, encoding=config.encoding, skip_errors=config.skip_errors
        )
        print(f"Parsed {len(schema.tables)} tables:")
        for table in schema.tables.values():
            print(
                f"  - {table.name} ({len(table.columns)} columns, "
                f"{len(table.constraints)} constraints)"
            )
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except PgDiffError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1


def cmd_export(args: argparse.Namespace) -> int:
    """Export the parsed schema as YAML."""
    try:
        config = _load_config(args)
        schema = load_schema_file(
            args.ddl_path, encoding=config.encoding, skip_errors=config.skip_errors
        )

        output_dir = getattr(args, "output_dir", None)
        if output_dir is not None:
            created = export_schema_to_directory(schema, output_dir)
            print(f"Wrote {len(created)} files to {output_dir}")
            return 0

        content = export_schema_yaml(schema)
        if args.output is not None:
            args.output.write_text(content)
            print(f"Wrote {len(schema.tables)} tables to {args.output}")
        else:
            print(content, end="")
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except PgDiffError as e:
        print(f"Export error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Export error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
