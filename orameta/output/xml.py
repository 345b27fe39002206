"""XML output rendering for table metadata."""
import xml.etree.ElementTree as ET
from typing import List, Optional

from orameta.models.schema import Table


def _set(element: ET.Element, name: str, value: Optional[object]) -> None:
    if value is None:
        return
    if isinstance(value, bool):
        value = "true" if value else "false"
    element.set(name, str(value))


def _table_element(table: Table, include_comments: bool) -> ET.Element:
    node = ET.Element("table", {"schema": table.schema_name, "name": table.table_name})
    if table.created:
        _set(node, "created", table.created.isoformat())
    if table.last_modified:
        _set(node, "last-modified", table.last_modified.isoformat())
    if include_comments and table.comment:
        ET.SubElement(node, "comment").text = table.comment

    columns = ET.SubElement(node, "columns")
    for column in sorted(table.columns, key=lambda c: c.position):
        col = ET.SubElement(columns, "column")
        _set(col, "name", column.name)
        _set(col, "position", column.position)
        _set(col, "type", column.data_type)
        _set(col, "nullable", column.nullable)
        if column.default_value is not None:
            ET.SubElement(col, "default").text = column.default_value
        if include_comments and column.comment:
            ET.SubElement(col, "comment").text = column.comment

    if table.has_primary_key():
        pk = table.primary_key
        pk_node = ET.SubElement(node, "primary-key")
        _set(pk_node, "name", pk.constraint_name)
        _set(pk_node, "index", pk.index_name)
        _set(pk_node, "enabled", pk.enabled)
        _set(pk_node, "validated", pk.validated)
        for name in pk.column_names:
            ET.SubElement(pk_node, "column", {"name": name})

    if table.indexes:
        indexes = ET.SubElement(node, "indexes")
        for index in table.indexes:
            idx = ET.SubElement(indexes, "index")
            _set(idx, "name", index.name)
            _set(idx, "type", index.index_type)
            _set(idx, "unique", index.unique)
            _set(idx, "status", index.status)
            _set(idx, "tablespace", index.tablespace)
            _set(idx, "degree", index.degree)
            _set(idx, "primary-key", index.primary_key_index)
            for name in index.column_names:
                ET.SubElement(idx, "column", {"name": name})

    return node


def render_xml(tables: List[Table], include_comments: bool = True, pretty: bool = True) -> str:
    """Render tables as an XML document."""
    root = ET.Element("schema-metadata")
    for table in tables:
        root.append(_table_element(table, include_comments))
    if pretty:
        ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
