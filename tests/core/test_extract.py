"""Tests for schema extraction orchestration."""
import pytest

from orameta.catalog.base import CatalogError, SchemaNotFoundError
from orameta.core.extract import extract_schema
from orameta.core.matcher import FilterConfigError
from orameta.models.filter import FilterSpec


def test_extract_all_tables(mock_adapter):
    """Test extraction without a filter."""
    tables = extract_schema(mock_adapter, 'HR')
    assert [t.table_name for t in tables] == ['TEST_TABLE', 'SYS_EXPORT_JOB']
    assert tables[0].schema_name == 'HR'


def test_extract_filters_before_detail_queries(mock_adapter):
    """Test excluded tables are never queried."""
    spec = FilterSpec.exclude_system_tables()
    tables = extract_schema(mock_adapter, 'HR', spec)

    assert [t.table_name for t in tables] == ['TEST_TABLE']
    mock_adapter.fetch_columns.assert_called_once_with('HR', 'TEST_TABLE')


def test_extract_invalid_filter_fails_before_queries(mock_adapter):
    """Test a bad pattern stops extraction before any catalog access."""
    spec = FilterSpec(include_patterns=['TEST_[('], use_regex=True)
    with pytest.raises(FilterConfigError):
        extract_schema(mock_adapter, 'HR', spec)
    mock_adapter.schema_exists.assert_not_called()


def test_extract_schema_not_found(mock_adapter):
    """Test missing schema error lists available schemas."""
    mock_adapter.schema_exists.return_value = False
    with pytest.raises(SchemaNotFoundError, match="Schema not found: NOPE.*HR, SCOTT"):
        extract_schema(mock_adapter, 'NOPE')


def test_extract_schema_not_found_without_listing(mock_adapter):
    """Test missing schema when schemas cannot be listed."""
    mock_adapter.schema_exists.return_value = False
    mock_adapter.list_schemas.side_effect = CatalogError("denied")
    with pytest.raises(SchemaNotFoundError, match="Unable to retrieve"):
        extract_schema(mock_adapter, 'NOPE')


def test_extract_skips_failing_table(mock_adapter):
    """Test a table whose detail query fails is skipped."""
    mock_adapter.fetch_indexes.side_effect = [CatalogError("ORA-01031"), []]
    tables = extract_schema(mock_adapter, 'HR')
    assert [t.table_name for t in tables] == ['SYS_EXPORT_JOB']


def test_extract_table_list_failure_propagates(mock_adapter):
    """Test failure to list tables is raised."""
    mock_adapter.fetch_tables.side_effect = CatalogError("ORA-00942")
    with pytest.raises(CatalogError):
        extract_schema(mock_adapter, 'HR')
