"""Assembly of Table metadata from raw Oracle catalog rows."""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from orameta.core.types import categorize_type, effective_length, map_type
from orameta.core.validator import collect_violations, validate_table_strict
from orameta.models.schema import DESCENDING_SUFFIX, Column, Index, PrimaryKey, Table

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


def _normalize(row: Optional[Row]) -> Dict[str, Any]:
    """Lower-case the keys of a catalog row (drivers report upper-case names)."""
    if not row:
        return {}
    return {str(k).lower(): v for k, v in row.items()}


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.lstrip('-').isdigit():
            return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_column(row: Row) -> Column:
    """Build a Column from one ALL_TAB_COLUMNS row."""
    r = _normalize(row)
    raw_type = r.get("data_type")
    char_used = r.get("char_used")
    length = effective_length(
        raw_type,
        _to_int(r.get("data_length")),
        _to_int(r.get("char_length")),
        char_used,
    )
    precision = _to_int(r.get("data_precision"))
    scale = _to_int(r.get("data_scale"))

    return Column(
        name=r.get("column_name") or r.get("name") or "",
        data_type=map_type(raw_type, length, precision, scale, char_used),
        type_category=categorize_type(raw_type),
        raw_type=raw_type,
        length=length,
        precision=precision,
        scale=scale,
        nullable=str(r.get("nullable", "Y")).upper() != "N",
        default_value=_clean_text(r.get("data_default")),
        comment=r.get("column_comment") or r.get("comments"),
        position=_to_int(r.get("column_id")) or 0,
    )


def build_primary_key(rows: Iterable[Row]) -> Optional[PrimaryKey]:
    """Build the primary key from position-ordered constraint rows.

    The first row carries the constraint attributes; every row adds a column.
    """
    rows = [_normalize(r) for r in rows]
    if not rows:
        return None

    first = rows[0]
    return PrimaryKey(
        constraint_name=first.get("constraint_name") or "",
        column_names=[r.get("column_name") or "" for r in rows],
        index_name=first.get("index_name"),
        enabled=first.get("status") == "ENABLED",
        validated=first.get("validated") == "VALIDATED",
    )


def build_indexes(rows: Iterable[Row]) -> List[Index]:
    """Group index rows by index name, keeping first-seen order.

    An index is flagged as backing the primary key when Oracle generated its
    name and it is unique. That is a heuristic: Oracle also generates unique
    indexes for unique constraints.
    """
    groups: Dict[str, Dict[str, Any]] = {}
    for raw in rows:
        r = _normalize(raw)
        name = r.get("index_name") or ""
        group = groups.get(name)
        if group is None:
            unique = r.get("uniqueness") == "UNIQUE"
            group = {
                "name": name,
                "index_type": r.get("index_type") or "NORMAL",
                "unique": unique,
                "status": r.get("status"),
                "tablespace": r.get("tablespace_name"),
                "degree": _to_int(r.get("degree")),
                "primary_key_index": r.get("generated") == "Y" and unique,
                "column_names": [],
            }
            groups[name] = group

        column = r.get("column_name") or ""
        if column and str(r.get("descend", "")).upper() == "DESC":
            column = f"{column}{DESCENDING_SUFFIX}"
        group["column_names"].append(column)

    return [Index(**g) for g in groups.values()]


def assemble_table(schema_name: str, table_name: str, table_row: Optional[Row],
                   column_rows: Iterable[Row], pk_rows: Iterable[Row] = (),
                   index_rows: Iterable[Row] = ()) -> Table:
    """Assemble a Table from catalog rows.

    Validation problems are logged as warnings and the table is returned
    anyway, so one odd table never stops a schema extraction.
    """
    info = _normalize(table_row)
    table = Table(
        schema_name=schema_name,
        table_name=table_name,
        comment=info.get("table_comment") or info.get("comments"),
        columns=[build_column(r) for r in column_rows],
        primary_key=build_primary_key(pk_rows),
        indexes=build_indexes(index_rows),
        created=info.get("created"),
        last_modified=info.get("last_ddl_time") or info.get("last_analyzed"),
    )

    problems = collect_violations(table)
    for problem in problems:
        logger.warning("Metadata validation: %s", problem)
    if not problems:
        logger.debug("Assembled %s", table.summary())
    return table


def build_table(schema_name: str, table_name: str, columns: List[Column],
                primary_key: Optional[PrimaryKey] = None,
                indexes: Optional[List[Index]] = None,
                comment: Optional[str] = None,
                created: Optional[datetime] = None,
                last_modified: Optional[datetime] = None) -> Table:
    """Construct a Table in one step and validate it strictly.

    Raises:
        StructuralError: If the resulting table is inconsistent.
    """
    table = Table(
        schema_name=schema_name,
        table_name=table_name,
        comment=comment,
        columns=columns,
        primary_key=primary_key,
        indexes=indexes or [],
        created=created,
        last_modified=last_modified,
    )
    validate_table_strict(table)
    return table
