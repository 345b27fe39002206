"""End-to-end tests: catalog rows to rendered output."""
import json
import logging
import xml.etree.ElementTree as ET

from orameta.core.extract import extract_schema
from orameta.core.validator import collect_violations
from orameta.models.filter import FilterSpec
from orameta.output import render


def test_extract_and_render_all_formats(mock_adapter):
    """Test one extraction rendered in every format."""
    tables = extract_schema(mock_adapter, 'HR', FilterSpec(include_patterns=['TEST_*']))

    assert len(tables) == 1
    table = tables[0]
    assert table.has_primary_key()
    assert collect_violations(table) == []

    assert 'HR,TEST_TABLE,PRICE,2,"NUMBER(10,2)",N,,N' in render(tables, 'csv')
    assert json.loads(render(tables, 'json'))[0]['primary_key']['constraint_name'] == 'PK_TEST'
    root = ET.fromstring(render(tables, 'xml').split('\n', 1)[1])
    assert root.find('table').get('name') == 'TEST_TABLE'
    ddl = render(tables, 'ddl')
    assert 'PRICE NUMBER(10,2) NOT NULL' in ddl
    assert 'CONSTRAINT PK_TEST PRIMARY KEY (NAME)' in ddl


def test_invalid_catalog_table_is_kept_with_warning(mock_adapter, test_table_rows, caplog):
    """Test a table with a broken PK is still exported."""
    mock_adapter.fetch_primary_key.return_value = [
        dict(test_table_rows['pk'][0], column_name='MISSING')
    ]

    with caplog.at_level(logging.WARNING):
        tables = extract_schema(mock_adapter, 'HR', FilterSpec.include_pattern('test_table'))

    assert tables[0].primary_key.column_names == ('MISSING',)
    assert "Primary key column 'MISSING' not found in table HR.TEST_TABLE" in caplog.text
    assert 'CONSTRAINT PK_TEST PRIMARY KEY (MISSING)' in render(tables, 'ddl')
