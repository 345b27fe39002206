"""Oracle DDL generation from table metadata."""
import logging
import re
from typing import List

from sqlglot import exp

from orameta.core.validator import RESERVED_WORDS
from orameta.models.schema import DESCENDING_SUFFIX, Index, Table, strip_descending

logger = logging.getLogger(__name__)

DIALECT = "oracle"

_PLAIN_IDENTIFIER = re.compile(r"^[A-Z][A-Z0-9_$#]*$")


def quote_identifier(name: str) -> str:
    """Render an identifier, quoting it only when Oracle would need quotes."""
    quoted = not _PLAIN_IDENTIFIER.match(name) or name in RESERVED_WORDS
    return exp.to_identifier(name, quoted=quoted).sql(dialect=DIALECT)


def quote_literal(text: str) -> str:
    return exp.Literal.string(text).sql(dialect=DIALECT)


def _qualified(schema: str, name: str) -> str:
    return f"{quote_identifier(schema)}.{quote_identifier(name)}"


def _index_column(column: str) -> str:
    base = strip_descending(column)
    if base != column:
        return f"{quote_identifier(base)}{DESCENDING_SUFFIX}"
    return quote_identifier(base)


def _index_statement(table: Table, index: Index) -> str:
    kind = ""
    if index.is_bitmap:
        kind = "BITMAP "
    elif index.unique:
        kind = "UNIQUE "
    columns = ", ".join(_index_column(c) for c in index.column_names)
    return (
        f"CREATE {kind}INDEX {_qualified(table.schema_name, index.name)} "
        f"ON {_qualified(table.schema_name, table.table_name)} ({columns});"
    )


def render_table_ddl(table: Table, include_comments: bool = True, pretty: bool = True) -> str:
    """Render CREATE TABLE, CREATE INDEX and COMMENT statements for one table."""
    table_name = _qualified(table.schema_name, table.table_name)
    lines = []
    for column in sorted(table.columns, key=lambda c: c.position):
        line = f"{quote_identifier(column.name)} {column.data_type}"
        if column.default_value is not None:
            line += f" DEFAULT {column.default_value}"
        if not column.nullable:
            line += " NOT NULL"
        lines.append(line)

    pk = table.primary_key
    if table.has_primary_key():
        pk_columns = ", ".join(quote_identifier(c) for c in pk.column_names)
        lines.append(f"CONSTRAINT {quote_identifier(pk.constraint_name)} PRIMARY KEY ({pk_columns})")

    if pretty:
        body = ",\n".join(f"    {line}" for line in lines)
        statements = [f"CREATE TABLE {table_name} (\n{body}\n);"]
    else:
        statements = [f"CREATE TABLE {table_name} ({', '.join(lines)});"]

    pk_index = pk.index_name.upper() if pk is not None and pk.index_name else None
    for index in table.indexes:
        if index.primary_key_index or index.name.upper() == pk_index:
            logger.debug("Skipping primary key index %s", index.name)
            continue
        statements.append(_index_statement(table, index))

    if include_comments:
        if table.comment:
            statements.append(f"COMMENT ON TABLE {table_name} IS {quote_literal(table.comment)};")
        for column in table.columns:
            if column.comment:
                statements.append(
                    f"COMMENT ON COLUMN {table_name}.{quote_identifier(column.name)} "
                    f"IS {quote_literal(column.comment)};"
                )

    return "\n".join(statements)


def render_ddl(tables: List[Table], include_comments: bool = True, pretty: bool = True) -> str:
    """Render DDL for every table, separated by blank lines."""
    separator = "\n\n" if pretty else "\n"
    return separator.join(render_table_ddl(t, include_comments, pretty) for t in tables) + "\n"
