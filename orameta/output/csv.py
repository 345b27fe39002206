"""CSV output rendering: one row per column."""
import csv  # pylint: disable=import-self
import io
from typing import List

from orameta.models.schema import Table

HEADER = ["SCHEMA", "TABLE", "COLUMN", "POSITION", "DATA_TYPE", "NULLABLE",
          "DEFAULT", "PRIMARY_KEY"]


def render_csv(tables: List[Table], include_comments: bool = True,
               pretty: bool = True) -> str:  # pylint: disable=unused-argument
    """Render the columns of every table as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADER + (["COMMENT"] if include_comments else []))

    for table in tables:
        pk_columns = {c.upper() for c in table.primary_key.column_names} \
            if table.has_primary_key() else set()
        for column in sorted(table.columns, key=lambda c: c.position):
            row = [
                table.schema_name,
                table.table_name,
                column.name,
                column.position,
                column.data_type,
                "Y" if column.nullable else "N",
                column.default_value or "",
                "Y" if column.name.upper() in pk_columns else "N",
            ]
            if include_comments:
                row.append(column.comment or "")
            writer.writerow(row)

    return buffer.getvalue()
