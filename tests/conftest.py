"""Common test fixtures."""
# pylint: disable=redefined-outer-name,too-many-arguments,too-many-positional-arguments
from unittest.mock import MagicMock

import pytest

from orameta.catalog.base import CatalogAdapter
from orameta.models.schema import Column, Index, PrimaryKey, Table, TypeCategory


@pytest.fixture
def column_factory():
    """Factory to create Column instances for testing."""
    def _make_column(
        name="TEST_COL",
        data_type="VARCHAR2(100 BYTE)",
        type_category=TypeCategory.CHARACTER,
        position=1,
        nullable=True,
        precision=None,
        scale=None,
        comment=None,
        default_value=None
    ):
        return Column(
            name=name,
            data_type=data_type,
            type_category=type_category,
            position=position,
            nullable=nullable,
            precision=precision,
            scale=scale,
            comment=comment,
            default_value=default_value
        )
    return _make_column


@pytest.fixture
def primary_key_factory():
    """Factory to create PrimaryKey instances for testing."""
    def _make_primary_key(constraint_name="PK_TEST", column_names=None, index_name=None):
        if column_names is None:
            column_names = ["ID"]
        return PrimaryKey(
            constraint_name=constraint_name,
            column_names=column_names,
            index_name=index_name
        )
    return _make_primary_key


@pytest.fixture
def index_factory():
    """Factory to create Index instances for testing."""
    def _make_index(
        name="IDX_TEST",
        column_names=None,
        unique=False,
        index_type="NORMAL",
        status="VALID",
        degree=1,
        primary_key_index=False
    ):
        if column_names is None:
            column_names = ["NAME"]
        return Index(
            name=name,
            column_names=column_names,
            unique=unique,
            index_type=index_type,
            status=status,
            degree=degree,
            primary_key_index=primary_key_index
        )
    return _make_index


@pytest.fixture
def table_factory(column_factory):
    """Factory to create Table instances for testing.

    The default table has a non-nullable ID NUMBER(10) and a nullable NAME.
    """
    def _make_table(
        schema_name="HR",
        table_name="TEST_TABLE",
        columns=None,
        primary_key=None,
        indexes=None,
        comment=None
    ):
        if columns is None:
            columns = [
                column_factory(name="ID", data_type="NUMBER(10)",
                               type_category=TypeCategory.NUMERIC, position=1,
                               nullable=False, precision=10, scale=0),
                column_factory(name="NAME", position=2),
            ]
        return Table(
            schema_name=schema_name,
            table_name=table_name,
            columns=columns,
            primary_key=primary_key,
            indexes=indexes or [],
            comment=comment
        )
    return _make_table


@pytest.fixture
def column_row_factory():
    """Factory to create ALL_TAB_COLUMNS style rows."""
    def _make_row(
        column_name="NAME",
        data_type="VARCHAR2",
        column_id=1,
        nullable="Y",
        data_length=100,
        char_length=100,
        char_used="B",
        data_precision=None,
        data_scale=None,
        data_default=None,
        column_comment=None
    ):
        return {
            'column_name': column_name,
            'data_type': data_type,
            'column_id': column_id,
            'nullable': nullable,
            'data_length': data_length,
            'char_length': char_length,
            'char_used': char_used,
            'data_precision': data_precision,
            'data_scale': data_scale,
            'data_default': data_default,
            'column_comment': column_comment,
        }
    return _make_row


@pytest.fixture
def test_table_rows(column_row_factory):
    """Catalog rows for TEST_TABLE(NAME VARCHAR2(100) NOT NULL, PRICE NUMBER(10,2) NOT NULL)."""
    return {
        'table': {'table_name': 'TEST_TABLE', 'table_comment': 'Test table'},
        'columns': [
            column_row_factory(column_name='NAME', column_id=1, nullable='N'),
            column_row_factory(column_name='PRICE', data_type='NUMBER', column_id=2,
                               nullable='N', data_length=22, char_length=0, char_used=None,
                               data_precision=10, data_scale=2),
        ],
        'pk': [{
            'constraint_name': 'PK_TEST', 'column_name': 'NAME', 'position': 1,
            'index_name': 'PK_TEST', 'status': 'ENABLED', 'validated': 'VALIDATED',
        }],
    }


@pytest.fixture
def mock_adapter(test_table_rows):
    """Catalog adapter mock serving TEST_TABLE plus a SYS_ table from schema HR."""
    adapter = MagicMock(spec=CatalogAdapter)
    adapter.schema_exists.return_value = True
    adapter.list_schemas.return_value = ['HR', 'SCOTT']
    adapter.fetch_tables.return_value = [
        test_table_rows['table'],
        {'table_name': 'SYS_EXPORT_JOB', 'table_comment': None},
    ]
    adapter.fetch_columns.return_value = test_table_rows['columns']
    adapter.fetch_primary_key.return_value = test_table_rows['pk']
    adapter.fetch_indexes.return_value = []
    return adapter
