"""Tests for assembling tables from catalog rows."""
import logging
from datetime import datetime

import pytest

from orameta.core.assembler import (
    assemble_table,
    build_column,
    build_indexes,
    build_primary_key,
    build_table,
)
from orameta.core.filters import should_include
from orameta.core.validator import StructuralError, collect_violations
from orameta.models.filter import FilterSpec
from orameta.models.schema import PrimaryKey, TypeCategory


def test_end_to_end_assembly(test_table_rows):
    """Test filtering and assembling TEST_TABLE from catalog rows."""
    spec = FilterSpec(include_patterns=["TEST_*"], exclude_patterns=[])
    assert should_include("TEST_TABLE", spec) is True

    table = assemble_table("HR", "TEST_TABLE", test_table_rows['table'],
                           test_table_rows['columns'], test_table_rows['pk'])

    assert table.column_count == 2
    assert table.has_primary_key()
    assert table.primary_key.column_names == ("NAME",)
    assert table.find_column("NAME").nullable is False
    assert table.find_column("NAME").data_type == "VARCHAR2(100 BYTE)"
    assert table.find_column("PRICE").data_type == "NUMBER(10,2)"
    assert table.comment == "Test table"
    assert collect_violations(table) == []


def test_strict_construction_rejects_missing_pk_column(test_table_rows):
    """Test build_table raises when the PK names an unknown column."""
    columns = [build_column(r) for r in test_table_rows['columns']]
    pk = PrimaryKey(constraint_name="PK_TEST", column_names=["MISSING"])

    with pytest.raises(StructuralError) as exc:
        build_table("HR", "TEST_TABLE", columns, primary_key=pk)

    assert "MISSING" in str(exc.value)
    assert "HR.TEST_TABLE" in str(exc.value)


def test_lenient_assembly_logs_missing_pk_column(test_table_rows, caplog):
    """Test catalog assembly warns and still returns the table."""
    pk_rows = [dict(test_table_rows['pk'][0], column_name='MISSING')]

    with caplog.at_level(logging.WARNING, logger="orameta.core.assembler"):
        table = assemble_table("HR", "TEST_TABLE", test_table_rows['table'],
                               test_table_rows['columns'], pk_rows)

    assert table.primary_key.column_names == ("MISSING",)
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("MISSING" in w and "HR.TEST_TABLE" in w for w in warnings)


def test_build_table_valid(column_factory):
    """Test build_table returns the validated table."""
    table = build_table("HR", "T", [column_factory(name="ID", nullable=False)],
                        primary_key=PrimaryKey(constraint_name="PK_T", column_names=["ID"]))
    assert table.has_primary_key()
    assert table.indexes == ()


def test_build_table_rejects_reserved_identifiers(column_factory):
    """Test the strict path checks identifier syntax."""
    with pytest.raises(StructuralError, match="reserved word"):
        build_table("HR", "T", [column_factory(name="ORDER")])


def test_interval_day_to_second_column_builds_on_both_paths(column_row_factory):
    """Test an INTERVAL DAY(2) TO SECOND(6) catalog column is accepted."""
    column = build_column(column_row_factory(
        column_name="DURATION", data_type="INTERVAL DAY(2) TO SECOND(6)",
        data_length=11, char_length=0, data_precision=2, data_scale=6))
    assert column.type_category == TypeCategory.TEMPORAL
    table = build_table("HR", "T", [column])
    assert collect_violations(table) == []
    assert table.columns[0].scale == 6


def test_build_column_char_semantics(column_row_factory):
    """Test CHAR_USED=C uses the character length."""
    column = build_column(column_row_factory(data_length=200, char_length=50, char_used='C'))
    assert column.data_type == "VARCHAR2(50 CHAR)"
    assert column.length == 50
    assert column.type_category == TypeCategory.CHARACTER


def test_build_column_upper_case_keys():
    """Test rows with upper-case keys are accepted."""
    column = build_column({
        'COLUMN_NAME': 'CREATED_AT', 'DATA_TYPE': 'TIMESTAMP(6)', 'COLUMN_ID': 3,
        'NULLABLE': 'N', 'DATA_SCALE': 6, 'DATA_DEFAULT': 'SYSTIMESTAMP  \n',
        'COMMENTS': 'Creation time',
    })
    assert column.name == 'CREATED_AT'
    assert column.data_type == 'TIMESTAMP(6)'
    assert column.is_temporal
    assert column.nullable is False
    assert column.default_value == 'SYSTIMESTAMP'
    assert column.comment == 'Creation time'
    assert column.position == 3


def test_build_primary_key_composite():
    """Test composite keys keep position order."""
    pk = build_primary_key([
        {'constraint_name': 'PK_ORD', 'column_name': 'ORDER_ID', 'status': 'ENABLED',
         'validated': 'NOT VALIDATED', 'index_name': 'PK_ORD'},
        {'constraint_name': 'PK_ORD', 'column_name': 'LINE_NO'},
    ])
    assert pk.column_names == ('ORDER_ID', 'LINE_NO')
    assert pk.is_composite
    assert pk.enabled is True
    assert pk.validated is False
    assert pk.index_name == 'PK_ORD'


def test_build_primary_key_none_without_rows():
    """Test tables without a PK."""
    assert build_primary_key([]) is None


def test_build_indexes_groups_rows():
    """Test index rows are grouped and descending columns marked."""
    indexes = build_indexes([
        {'index_name': 'IDX_B', 'index_type': 'NORMAL', 'uniqueness': 'NONUNIQUE',
         'column_name': 'HIRE_DATE', 'descend': 'DESC', 'degree': '1', 'status': 'VALID'},
        {'index_name': 'IDX_B', 'column_name': 'NAME', 'descend': 'ASC'},
        {'index_name': 'IDX_A', 'index_type': 'BITMAP', 'uniqueness': 'NONUNIQUE',
         'column_name': 'STATUS', 'degree': 'DEFAULT'},
    ])
    assert [i.name for i in indexes] == ['IDX_B', 'IDX_A']
    assert indexes[0].column_names == ('HIRE_DATE DESC', 'NAME')
    assert indexes[0].base_column_names == ['HIRE_DATE', 'NAME']
    assert indexes[0].degree == 1
    assert indexes[1].is_bitmap
    assert indexes[1].degree is None


def test_primary_key_index_heuristic_is_an_approximation():
    """Test generated unique indexes are flagged as PK-backing.

    The flag is a heuristic: a system-generated unique index created for a
    UNIQUE constraint is flagged the same way.
    """
    indexes = build_indexes([
        {'index_name': 'SYS_C0011', 'uniqueness': 'UNIQUE', 'generated': 'Y', 'column_name': 'ID'},
        {'index_name': 'SYS_C0012', 'uniqueness': 'UNIQUE', 'generated': 'Y', 'column_name': 'EMAIL'},
        {'index_name': 'UQ_NAME', 'uniqueness': 'UNIQUE', 'generated': 'N', 'column_name': 'NAME'},
        {'index_name': 'SYS_C0013', 'uniqueness': 'NONUNIQUE', 'generated': 'Y', 'column_name': 'X'},
    ])
    flags = {i.name: i.primary_key_index for i in indexes}
    assert flags == {'SYS_C0011': True, 'SYS_C0012': True, 'UQ_NAME': False, 'SYS_C0013': False}


def test_assemble_table_timestamps(test_table_rows):
    """Test created and last_modified come from the table row."""
    created = datetime(2024, 1, 1, 8, 0)
    analyzed = datetime(2024, 6, 1, 9, 30)
    row = dict(test_table_rows['table'], created=created, last_analyzed=analyzed)

    table = assemble_table("HR", "TEST_TABLE", row, test_table_rows['columns'])

    assert table.created == created
    assert table.last_modified == analyzed
