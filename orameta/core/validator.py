"""Structural validation of assembled table metadata.

One rule set backs two entry points: ``validate_table_strict`` raises on the
first problem, ``collect_violations`` returns every problem so catalog
extraction can log them and carry on.
"""
import re
from collections import Counter
from typing import Iterator, List, Optional

from orameta.models.schema import Table, TypeCategory

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_$#]{0,127}$")

RESERVED_WORDS = frozenset({
    "SELECT", "FROM", "WHERE", "INSERT", "UPDATE", "DELETE", "CREATE", "DROP", "ALTER",
    "TABLE", "INDEX", "VIEW", "SEQUENCE", "TRIGGER", "PROCEDURE", "FUNCTION", "PACKAGE",
    "AND", "OR", "NOT", "NULL", "TRUE", "FALSE", "DISTINCT", "ORDER", "GROUP", "HAVING",
    "UNION", "INTERSECT", "MINUS", "CONNECT", "START", "WITH", "BY", "AS", "IS", "IN",
    "EXISTS", "BETWEEN", "LIKE", "ESCAPE", "CASE", "WHEN", "THEN", "ELSE", "END",
    "PRIMARY", "KEY", "FOREIGN", "REFERENCES", "UNIQUE", "CHECK", "CONSTRAINT",
    "DEFAULT", "COLUMN", "GRANT", "REVOKE", "COMMIT", "ROLLBACK", "SAVEPOINT",
})


class StructuralError(ValueError):
    """Raised when table metadata violates a structural invariant."""

    def __init__(self, message: str, table_name: Optional[str] = None,
                 identifier: Optional[str] = None):
        super().__init__(message)
        self.table_name = table_name
        self.identifier = identifier


class Violation:  # pylint: disable=too-few-public-methods
    """A single failed rule."""

    def __init__(self, message: str, table_name: str, identifier: Optional[str] = None):
        self.message = message
        self.table_name = table_name
        self.identifier = identifier

    def to_error(self) -> StructuralError:
        return StructuralError(self.message, self.table_name, self.identifier)

    def __str__(self) -> str:
        return self.message


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def identifier_problem(identifier: Optional[str], kind: str) -> Optional[str]:
    """Describe why ``identifier`` is not a valid plain Oracle name, if it isn't."""
    if _blank(identifier):
        return f"{kind} cannot be null or empty"
    name = identifier.strip()
    if not IDENTIFIER_PATTERN.match(name):
        return (
            f"{kind} '{name}' is not a valid identifier. Must start with a letter, "
            f"contain only letters, digits, _, $, # and be at most 128 characters"
        )
    if name.upper() in RESERVED_WORDS:
        return f"{kind} '{name}' is an Oracle reserved word"
    return None


def validate_identifier(identifier: Optional[str], kind: str = "Identifier") -> None:
    """Raise StructuralError if ``identifier`` is not a usable Oracle name."""
    problem = identifier_problem(identifier, kind)
    if problem:
        raise StructuralError(problem, identifier=identifier)


def _column_violations(table: Table, fqn: str) -> Iterator[Violation]:
    for column in table.columns:
        label = column.name or "<unnamed>"
        if _blank(column.name):
            yield Violation(f"Column name cannot be null or empty in table {fqn}", fqn)
            continue
        if _blank(column.data_type):
            yield Violation(
                f"Data type cannot be null or empty for column '{label}' in table {fqn}",
                fqn, label)
        if column.position < 1:
            yield Violation(
                f"Column position must be positive for column '{label}' in table {fqn}",
                fqn, label)
        # precision/scale of INTERVAL and TIMESTAMP columns mean something else
        if column.type_category != TypeCategory.NUMERIC:
            continue
        if column.precision is not None and column.precision <= 0:
            yield Violation(
                f"Numeric precision must be positive for column '{label}' in table {fqn}",
                fqn, label)
        if column.scale is not None and column.scale < 0:
            yield Violation(
                f"Data scale cannot be negative for column '{label}' in table {fqn}",
                fqn, label)
        if column.precision is not None and column.scale is not None \
                and column.scale > column.precision:
            yield Violation(
                f"Data scale cannot exceed precision for column '{label}' in table {fqn}",
                fqn, label)


def _duplicates(names: List[str]) -> List[str]:
    counts = Counter(n.upper() for n in names if n)
    seen = set()
    dupes = []
    for name in names:
        if name and counts[name.upper()] > 1 and name.upper() not in seen:
            seen.add(name.upper())
            dupes.append(name)
    return dupes


def _primary_key_violations(table: Table, fqn: str, known: set) -> Iterator[Violation]:
    pk = table.primary_key
    if _blank(pk.constraint_name):
        yield Violation(f"Primary key constraint name cannot be null or empty in table {fqn}", fqn)
    if not pk.column_names:
        yield Violation(
            f"Primary key '{pk.constraint_name}' must have at least one column in table {fqn}",
            fqn, pk.constraint_name)
    for name in pk.column_names:
        if _blank(name):
            yield Violation(
                f"Primary key column name cannot be null or empty in table {fqn}",
                fqn, pk.constraint_name)
        elif name.upper() not in known:
            yield Violation(
                f"Primary key column '{name}' not found in table {fqn}", fqn, name)
    for name in _duplicates(pk.column_names):
        yield Violation(
            f"Primary key '{pk.constraint_name}' contains duplicate column '{name}' "
            f"in table {fqn}", fqn, name)
    for column in table.primary_key_columns():
        if column.nullable:
            yield Violation(
                f"Primary key column '{column.name}' cannot be nullable in table {fqn}",
                fqn, column.name)


def _index_violations(table: Table, fqn: str, known: set) -> Iterator[Violation]:
    for index in table.indexes:
        if _blank(index.name):
            yield Violation(f"Index name cannot be null or empty in table {fqn}", fqn)
            continue
        if not index.column_names:
            yield Violation(
                f"Index '{index.name}' must have at least one column in table {fqn}",
                fqn, index.name)
        columns = index.base_column_names
        for name in columns:
            if _blank(name):
                yield Violation(
                    f"Index column name cannot be null or empty for index '{index.name}' "
                    f"in table {fqn}", fqn, index.name)
            elif name.upper() not in known:
                yield Violation(
                    f"Index column '{name}' not found in table {fqn} for index '{index.name}'",
                    fqn, name)
        for name in _duplicates(columns):
            yield Violation(
                f"Index '{index.name}' contains duplicate column '{name}' in table {fqn}",
                fqn, name)
        if index.degree is not None and index.degree < 1:
            yield Violation(
                f"Index degree must be positive for index '{index.name}' in table {fqn}",
                fqn, index.name)
    for name in _duplicates([i.name for i in table.indexes]):
        yield Violation(f"Duplicate index name '{name}' found in table {fqn}", fqn, name)


def _identifier_violations(table: Table, fqn: str) -> Iterator[Violation]:
    checks = [(c.name, "Column name") for c in table.columns]
    if table.primary_key is not None:
        checks.append((table.primary_key.constraint_name, "Constraint name"))
    checks.extend((i.name, "Index name") for i in table.indexes)
    for name, kind in checks:
        problem = identifier_problem(name, kind)
        if problem:
            yield Violation(f"{problem} in table {fqn}", fqn, name)


def iter_violations(table: Table, check_identifiers: bool = False) -> Iterator[Violation]:
    """Yield every rule failure for ``table`` in a fixed order."""
    fqn = table.fully_qualified_name

    # 1. names
    if _blank(table.schema_name):
        yield Violation(f"Schema name cannot be null or empty for table {fqn}", fqn)
    if _blank(table.table_name):
        yield Violation(f"Table name cannot be null or empty for table {fqn}", fqn)

    # 2. at least one column
    if not table.columns:
        yield Violation(f"Table must have at least one column: {fqn}", fqn)
        return

    # 3. columns individually
    yield from _column_violations(table, fqn)

    # 4. duplicate column names
    for name in _duplicates([c.name for c in table.columns]):
        yield Violation(f"Table {fqn} contains duplicate column name '{name}'", fqn, name)

    # 5. contiguous positions
    positions = sorted(c.position for c in table.columns)
    expected = list(range(1, len(table.columns) + 1))
    if positions != expected:
        for want, got in zip(expected, positions):
            if want != got:
                offender = next(c.name for c in table.columns if c.position == got)
                yield Violation(
                    f"Column position gap in table {fqn}: expected {want}, "
                    f"found {got} for column '{offender}'", fqn, offender)
                break

    known = {c.name.upper() for c in table.columns if c.name}

    # 6. primary key
    if table.primary_key is not None:
        yield from _primary_key_violations(table, fqn, known)

    # 7. indexes
    if table.indexes:
        yield from _index_violations(table, fqn, known)

    # 8. identifier syntax (strict path only)
    if check_identifiers:
        yield from _identifier_violations(table, fqn)


def validate_table(table: Table) -> None:
    """Raise StructuralError on the first consistency problem (checks 1-7)."""
    for violation in iter_violations(table):
        raise violation.to_error()


def validate_table_strict(table: Table) -> None:
    """Raise StructuralError on the first problem, including identifier syntax."""
    for violation in iter_violations(table, check_identifiers=True):
        raise violation.to_error()


def collect_violations(table: Table) -> List[str]:
    """Return every consistency problem (checks 1-7) without raising."""
    return [v.message for v in iter_violations(table)]


def validate_table_list(tables: List[Table]) -> None:
    """Strictly validate each table and reject duplicate qualified names."""
    for table in tables:
        validate_table_strict(table)
    for name in _duplicates([t.fully_qualified_name for t in tables]):
        raise StructuralError(f"Duplicate table name found in table list: {name}", name, name)
