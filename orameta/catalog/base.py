"""Abstract base class for catalog adapters."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class CatalogError(RuntimeError):
    """Raised when reading the database catalog fails."""


class SchemaNotFoundError(CatalogError):
    """Raised when the requested schema does not exist or is not visible."""

    def __init__(self, schema: str, suggestion: str = ""):
        message = f"Schema not found: {schema}"
        if suggestion:
            message = f"{message}. {suggestion}"
        super().__init__(message)
        self.schema = schema


class CatalogAdapter(ABC):
    """Reads raw metadata rows from a database catalog.

    Implementations return plain dict rows keyed by lower-case catalog
    column names; turning them into Table objects is left to
    ``orameta.core.assembler``.
    """

    @abstractmethod
    def connect(self, config: Dict[str, Any]) -> None:
        """Open the database connection.

        Args:
            config: Database section of the configuration
                ({user, password, dsn, connection_timeout, query_timeout}).

        Raises:
            CatalogError: If the connection cannot be established.
        """

    @abstractmethod
    def list_schemas(self) -> List[str]:
        """Return the schema names visible to the connected user."""

    @abstractmethod
    def schema_exists(self, schema: str) -> bool:
        """Return True if ``schema`` is visible to the connected user."""

    @abstractmethod
    def fetch_tables(self, schema: str) -> List[Dict[str, Any]]:
        """Fetch one row per table: table_name, table_comment, created, last_analyzed."""

    @abstractmethod
    def fetch_columns(self, schema: str, table: str) -> List[Dict[str, Any]]:
        """Fetch column rows ordered by column_id."""

    @abstractmethod
    def fetch_primary_key(self, schema: str, table: str) -> List[Dict[str, Any]]:
        """Fetch primary key rows ordered by column position (empty if none)."""

    @abstractmethod
    def fetch_indexes(self, schema: str, table: str) -> List[Dict[str, Any]]:
        """Fetch index rows ordered by index name and column position."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection.

        Should be idempotent (safe to call multiple times).
        """
