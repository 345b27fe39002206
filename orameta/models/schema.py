"""Table metadata models assembled from the Oracle catalog."""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

DESCENDING_SUFFIX = " DESC"

class TypeCategory(str, Enum):
    """Broad families of Oracle column types."""

    CHARACTER = "CHARACTER"
    NUMERIC = "NUMERIC"
    TEMPORAL = "TEMPORAL"
    LOB = "LOB"
    OTHER = "OTHER"

class Column(BaseModel):
    """Represents a single column of a table."""

    model_config = ConfigDict(frozen=True)

    name: str
    data_type: str
    type_category: TypeCategory = TypeCategory.OTHER
    raw_type: Optional[str] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    nullable: bool = True
    default_value: Optional[str] = None
    comment: Optional[str] = None
    position: int

    @property
    def is_character(self) -> bool:
        return self.type_category == TypeCategory.CHARACTER

    @property
    def is_numeric(self) -> bool:
        return self.type_category == TypeCategory.NUMERIC

    @property
    def is_temporal(self) -> bool:
        return self.type_category == TypeCategory.TEMPORAL

    @property
    def is_lob(self) -> bool:
        """CLOB and NCLOB count as both character and LOB types."""
        if self.type_category == TypeCategory.LOB:
            return True
        base = (self.raw_type or self.data_type).upper()
        return base in ("CLOB", "NCLOB")

class PrimaryKey(BaseModel):
    """Primary key constraint of a table."""

    model_config = ConfigDict(frozen=True)

    constraint_name: str
    column_names: Tuple[str, ...]
    index_name: Optional[str] = None
    enabled: bool = True
    validated: bool = True

    @property
    def is_composite(self) -> bool:
        return len(self.column_names) > 1

    @property
    def column_count(self) -> int:
        return len(self.column_names)

class Index(BaseModel):
    """Index defined on a table.

    Column names may carry a trailing `` DESC`` marker for descending
    key columns; ``base_column_names`` strips it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    index_type: str = "NORMAL"
    column_names: Tuple[str, ...]
    unique: bool = False
    status: Optional[str] = None
    tablespace: Optional[str] = None
    degree: Optional[int] = None
    primary_key_index: bool = False

    @property
    def base_column_names(self) -> List[str]:
        return [strip_descending(c) for c in self.column_names]

    @property
    def is_composite(self) -> bool:
        return len(self.column_names) > 1

    @property
    def is_usable(self) -> bool:
        return (self.status or "").upper() == "VALID"

    @property
    def is_bitmap(self) -> bool:
        return self.index_type.upper() == "BITMAP"

    @property
    def is_function_based(self) -> bool:
        return "FUNCTION-BASED" in self.index_type.upper()

    def summary(self) -> str:
        """One-line human readable description."""
        text = f"Index: {self.name} ({self.index_type})"
        if self.unique:
            text += " [UNIQUE]"
        if self.primary_key_index:
            text += " [PK]"
        text += f" on ({', '.join(self.column_names)})"
        if self.status and not self.is_usable:
            text += f" [{self.status}]"
        return text

class Table(BaseModel):
    """Represents a table with its columns, primary key and indexes."""

    model_config = ConfigDict(frozen=True)

    schema_name: str
    table_name: str
    comment: Optional[str] = None
    columns: Tuple[Column, ...]
    primary_key: Optional[PrimaryKey] = None
    indexes: Tuple[Index, ...] = ()
    created: Optional[datetime] = None
    last_modified: Optional[datetime] = None

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.schema_name}.{self.table_name}"

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def has_primary_key(self) -> bool:
        return self.primary_key is not None and bool(self.primary_key.column_names)

    def has_indexes(self) -> bool:
        return bool(self.indexes)

    def find_column(self, name: Optional[str]) -> Optional[Column]:
        """Look up a column by name, ignoring case."""
        if not name:
            return None
        wanted = name.upper()
        for column in self.columns:
            if column.name.upper() == wanted:
                return column
        return None

    def primary_key_columns(self) -> List[Column]:
        """Columns of the primary key in key order; unknown names are skipped."""
        if not self.has_primary_key():
            return []
        found = (self.find_column(name) for name in self.primary_key.column_names)
        return [c for c in found if c is not None]

    def nullable_columns(self) -> List[Column]:
        return [c for c in self.columns if c.nullable]

    def non_nullable_columns(self) -> List[Column]:
        return [c for c in self.columns if not c.nullable]

    def columns_by_category(self, category: TypeCategory) -> List[Column]:
        if category == TypeCategory.LOB:
            return [c for c in self.columns if c.is_lob]
        return [c for c in self.columns if c.type_category == category]

    def summary(self) -> str:
        """One-line human readable description."""
        text = f"Table: {self.fully_qualified_name} ({self.column_count} columns)"
        if self.has_primary_key():
            text += f", PK: {', '.join(self.primary_key.column_names)}"
        if self.has_indexes():
            text += f", {len(self.indexes)} indexes"
        if self.comment and self.comment.strip():
            text += f", Comment: {self.comment}"
        return text

def strip_descending(column_name: str) -> str:
    """Remove the descending-order marker from an index column name."""
    if column_name.upper().endswith(DESCENDING_SUFFIX):
        return column_name[:-len(DESCENDING_SUFFIX)]
    return column_name
