"""Schema extraction orchestration."""
import logging
from typing import List, Optional

from orameta.catalog.base import CatalogAdapter, CatalogError, SchemaNotFoundError
from orameta.core.assembler import assemble_table
from orameta.core.filters import filter_table_names
from orameta.models.filter import FilterSpec
from orameta.models.schema import Table

logger = logging.getLogger(__name__)


def _check_schema(adapter: CatalogAdapter, schema: str) -> None:
    if adapter.schema_exists(schema):
        return
    try:
        available = adapter.list_schemas()
    except CatalogError as e:
        raise SchemaNotFoundError(schema, "Unable to retrieve available schemas") from e
    suggestion = (
        f"Available schemas: {', '.join(available)}" if available
        else "No schemas are accessible to the current user"
    )
    raise SchemaNotFoundError(schema, suggestion)


def extract_schema(adapter: CatalogAdapter, schema: str,
                   filter_spec: Optional[FilterSpec] = None) -> List[Table]:
    """Extract metadata for every table in ``schema`` that passes the filter.

    Table names are filtered before any per-table query runs. A table whose
    detail queries fail is logged and skipped.

    Raises:
        FilterConfigError: If the filter holds an invalid pattern.
        SchemaNotFoundError: If the schema is not visible.
        CatalogError: If the table list itself cannot be read.
    """
    logger.info("Starting metadata extraction for schema %s with filters %s",
                schema, filter_spec)

    if filter_spec is not None:
        filter_spec.validate_patterns()

    _check_schema(adapter, schema)

    table_rows = adapter.fetch_tables(schema)
    rows_by_name = {r.get('table_name'): r for r in table_rows}
    names = filter_table_names(rows_by_name.keys(), filter_spec)
    logger.info("Found %d tables matching filter criteria in schema %s", len(names), schema)

    tables = []
    for name in names:
        try:
            table = assemble_table(
                schema,
                name,
                rows_by_name[name],
                adapter.fetch_columns(schema, name),
                adapter.fetch_primary_key(schema, name),
                adapter.fetch_indexes(schema, name),
            )
        except CatalogError as e:
            logger.warning("Failed to extract metadata for table %s.%s: %s", schema, name, e)
            continue
        tables.append(table)
        logger.debug("Extracted metadata for table %s.%s", schema, name)

    logger.info("Successfully extracted metadata for %d tables from schema %s",
                len(tables), schema)
    return tables
