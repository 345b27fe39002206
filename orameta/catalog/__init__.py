"""Catalog adapter registry and factory."""
import logging
from typing import Dict, Type

from orameta.catalog.base import CatalogAdapter, CatalogError, SchemaNotFoundError
from orameta.catalog.oracle import OracleCatalogAdapter

logger = logging.getLogger(__name__)


class UnsupportedCatalogError(ValueError):
    """Raised when an unsupported database type is requested."""


# Registry of available catalog adapters
CATALOG_ADAPTERS: Dict[str, Type[CatalogAdapter]] = {
    'oracle': OracleCatalogAdapter,
}


def get_adapter(database_type: str = 'oracle') -> CatalogAdapter:
    """Get a catalog adapter instance by database type.

    Raises:
        UnsupportedCatalogError: If the database type is not recognized
    """
    adapter_class = CATALOG_ADAPTERS.get((database_type or '').lower())
    if adapter_class is None:
        raise UnsupportedCatalogError(
            f"Unsupported database: '{database_type}'. "
            f"Supported types: {', '.join(CATALOG_ADAPTERS.keys())}"
        )

    logger.debug("Creating catalog adapter for: %s", database_type)
    return adapter_class()


__all__ = [
    'CATALOG_ADAPTERS',
    'CatalogAdapter',
    'CatalogError',
    'OracleCatalogAdapter',
    'SchemaNotFoundError',
    'UnsupportedCatalogError',
    'get_adapter',
]
