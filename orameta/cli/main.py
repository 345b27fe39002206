"""Command-line interface for orameta - Oracle table metadata extractor."""
import argparse
import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List

from orameta.catalog import UnsupportedCatalogError, get_adapter
from orameta.catalog.base import CatalogError, SchemaNotFoundError
from orameta.config.connection import (
    ConnectionConfigError,
    build_filter_spec,
    load_config,
    mask_config,
    validate_connection_config,
)
from orameta.core.extract import extract_schema
from orameta.core.matcher import FilterConfigError
from orameta.models.filter import SYSTEM_TABLE_PATTERNS
from orameta.models.schema import Table
from orameta.output import UnsupportedFormatError, file_extension, get_renderer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ExitCode(IntEnum):
    """Process exit codes."""
    SUCCESS = 0
    INVALID_ARGS = 1
    DB_CONNECTION_FAILED = 2
    SCHEMA_NOT_FOUND = 3
    EXPORT_FAILED = 4
    CONFIG_ERROR = 5
    METADATA_EXTRACTION_FAILED = 6
    UNEXPECTED_ERROR = 99


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with INVALID_ARGS on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCode.INVALID_ARGS, f"Error: {message}\n")


def _error(message: str, code: ExitCode) -> ExitCode:
    print(f"Error: {message}", file=sys.stderr)
    return code


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for a CLI run.

    Raises:
        ConnectionConfigError: If both verbose and quiet are requested
    """
    if verbose and quiet:
        raise ConnectionConfigError("--verbose and --quiet cannot be used together")
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _resolve_config(args) -> Dict[str, Any]:
    """Load configuration and apply command-line overrides to it."""
    config = load_config(getattr(args, 'config', None))
    database = config['database']
    for key in ('user', 'password', 'dsn', 'schema'):
        value = getattr(args, key, None)
        if value:
            database[key] = value

    export = config['export']
    if getattr(args, 'format', None):
        export['format'] = args.format
    if getattr(args, 'output', None):
        export['output'] = args.output
    if getattr(args, 'no_comments', False):
        export['include_comments'] = False
    if getattr(args, 'append', False):
        export['append'] = True

    logger.debug("Effective configuration: %s", mask_config(config))
    return config


def output_path(path: str, fmt: str) -> Path:
    """Return ``path`` with the format's extension appended when missing."""
    target = Path(path)
    extension = file_extension(fmt)
    if target.suffix.lower() != extension:
        target = target.with_name(target.name + extension)
    return target


def write_output(content: str, export: Dict[str, Any]) -> None:
    """Write rendered content to the configured file, or to stdout.

    Raises:
        OSError: If the file cannot be written
    """
    if not export.get('output'):
        sys.stdout.write(content)
        return

    target = output_path(export['output'], export['format'])
    target.parent.mkdir(parents=True, exist_ok=True)
    mode = 'a' if export.get('append') else 'w'
    with open(target, mode, encoding=export.get('encoding') or 'utf-8') as f:
        f.write(content)
    logger.info("Wrote %d characters to %s", len(content), target)


def render_tables(tables: List[Table], export: Dict[str, Any]) -> str:
    renderer = get_renderer(export['format'])
    return renderer(
        tables,
        include_comments=bool(export.get('include_comments', True)),
        pretty=bool(export.get('pretty_print', True)),
    )


def run_extract(args) -> ExitCode:
    """Execute the extract command."""
    try:
        configure_logging(args.verbose, args.quiet)
        config = _resolve_config(args)
        validate_connection_config(config)
        filter_spec = build_filter_spec(
            config,
            include=args.include,
            exclude=args.exclude,
            case_sensitive=True if args.case_sensitive else None,
            use_regex=True if args.regex else None,
            exclude_system=args.exclude_system_tables,
        )
        filter_spec.validate_patterns()
        # Fail on a bad format before touching the database
        get_renderer(config['export']['format'])
    except UnsupportedFormatError as e:
        return _error(str(e), ExitCode.INVALID_ARGS)
    except (ConnectionConfigError, FilterConfigError) as e:
        return _error(str(e), ExitCode.CONFIG_ERROR)

    database = config['database']
    adapter = None
    try:
        try:
            adapter = get_adapter('oracle')
            adapter.connect(database)
        except (CatalogError, UnsupportedCatalogError) as e:
            return _error(str(e), ExitCode.DB_CONNECTION_FAILED)

        try:
            tables = extract_schema(adapter, database['schema'], filter_spec)
        except SchemaNotFoundError as e:
            return _error(str(e), ExitCode.SCHEMA_NOT_FOUND)
        except CatalogError as e:
            return _error(str(e), ExitCode.METADATA_EXTRACTION_FAILED)

        try:
            write_output(render_tables(tables, config['export']), config['export'])
        except OSError as e:
            return _error(f"Failed to write output: {e}", ExitCode.EXPORT_FAILED)

        logger.info("Exported %d tables from schema %s", len(tables), database['schema'])
        return ExitCode.SUCCESS

    except Exception as e:  # pylint: disable=broad-except
        logger.debug("Unexpected failure", exc_info=True)
        return _error(str(e), ExitCode.UNEXPECTED_ERROR)
    finally:
        if adapter:
            adapter.close()


def run_schemas(args) -> ExitCode:
    """Execute the schemas command: list the schemas visible to the user."""
    try:
        configure_logging(args.verbose, args.quiet)
        config = _resolve_config(args)
        validate_connection_config(config, require_schema=False)
    except ConnectionConfigError as e:
        return _error(str(e), ExitCode.CONFIG_ERROR)

    adapter = None
    try:
        try:
            adapter = get_adapter('oracle')
            adapter.connect(config['database'])
        except CatalogError as e:
            return _error(str(e), ExitCode.DB_CONNECTION_FAILED)

        try:
            schemas = adapter.list_schemas()
        except CatalogError as e:
            return _error(str(e), ExitCode.METADATA_EXTRACTION_FAILED)

        for schema in schemas:
            print(schema)
        return ExitCode.SUCCESS

    except Exception as e:  # pylint: disable=broad-except
        return _error(str(e), ExitCode.UNEXPECTED_ERROR)
    finally:
        if adapter:
            adapter.close()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        help="Path to YAML config file (default: ~/.orameta/config.yaml, then ORACLE_* env vars)"
    )
    parser.add_argument("--user", help="Database user (overrides config)")
    parser.add_argument("--password", help="Database password (overrides config)")
    parser.add_argument("--dsn", help="Oracle DSN, e.g. host:1521/service (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="orameta",
        description="orameta - Oracle table metadata extractor",
        epilog="Examples:\n"
               "  orameta extract --schema HR --format json --output hr\n"
               "  orameta extract --schema HR --include 'EMP*' --exclude-system-tables\n"
               "  orameta schemas --config config.yaml",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", parser_class=_ArgumentParser)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract table metadata from a schema",
        description="Extract columns, primary keys and indexes for the tables of one schema"
    )
    extract_parser.add_argument("-s", "--schema", help="Schema (owner) to extract")
    _add_common_arguments(extract_parser)
    extract_parser.add_argument(
        "-i", "--include", action="append",
        help="Table name pattern to include (repeatable; wildcards * and ?)"
    )
    extract_parser.add_argument(
        "-e", "--exclude", action="append",
        help="Table name pattern to exclude (repeatable, applied after includes)"
    )
    extract_parser.add_argument(
        "--case-sensitive", action="store_true",
        help="Match table name patterns case-sensitively"
    )
    extract_parser.add_argument(
        "--regex", action="store_true",
        help="Treat patterns as regular expressions instead of wildcards"
    )
    extract_parser.add_argument(
        "--exclude-system-tables", action="store_true",
        help=f"Exclude tables with Oracle-reserved prefixes ({', '.join(SYSTEM_TABLE_PATTERNS)})"
    )
    extract_parser.add_argument(
        "-f", "--format", type=str.lower, choices=["csv", "json", "xml", "ddl", "sql"],
        help="Output format (default: csv)"
    )
    extract_parser.add_argument(
        "-o", "--output",
        help="Output file; the format's extension is added when missing (default: stdout)"
    )
    extract_parser.add_argument(
        "--append", action="store_true", help="Append to the output file instead of replacing it"
    )
    extract_parser.add_argument(
        "--no-comments", action="store_true", help="Leave table and column comments out"
    )

    schemas_parser = subparsers.add_parser(
        "schemas",
        help="List schemas visible to the connected user"
    )
    _add_common_arguments(schemas_parser)

    return parser


def main():
    """Parse command line arguments and execute appropriate command."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "extract":
        sys.exit(run_extract(args))
    elif args.command == "schemas":
        sys.exit(run_schemas(args))
    else:
        parser.print_help()
        sys.exit(ExitCode.INVALID_ARGS)


if __name__ == "__main__":
    main()
