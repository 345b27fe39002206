"""Oracle catalog adapter backed by python-oracledb."""
import logging
from typing import Any, Dict, List, Optional

import oracledb

from orameta.catalog.base import CatalogAdapter, CatalogError

logger = logging.getLogger(__name__)

AVAILABLE_SCHEMAS_QUERY = "SELECT username FROM all_users ORDER BY username"

SCHEMA_EXISTS_QUERY = "SELECT COUNT(*) FROM all_users WHERE username = UPPER(:owner)"

TABLE_QUERY = """
    SELECT t.table_name,
           t.tablespace_name,
           c.comments AS table_comment,
           o.created,
           o.last_ddl_time,
           t.last_analyzed
    FROM   all_tables t
    LEFT JOIN all_tab_comments c
           ON c.owner = t.owner AND c.table_name = t.table_name
    LEFT JOIN all_objects o
           ON o.owner = t.owner AND o.object_name = t.table_name
          AND o.object_type = 'TABLE'
    WHERE  t.owner = UPPER(:owner)
    ORDER  BY t.table_name
"""

COLUMN_QUERY = """
    SELECT c.column_name,
           c.data_type,
           c.data_length,
           c.data_precision,
           c.data_scale,
           c.nullable,
           c.data_default,
           c.column_id,
           c.char_length,
           c.char_used,
           cc.comments AS column_comment
    FROM   all_tab_columns c
    LEFT JOIN all_col_comments cc
           ON cc.owner = c.owner AND cc.table_name = c.table_name
          AND cc.column_name = c.column_name
    WHERE  c.owner = UPPER(:owner) AND c.table_name = :table_name
    ORDER  BY c.column_id
"""

PRIMARY_KEY_QUERY = """
    SELECT cons.constraint_name,
           cons.index_name,
           cons.status,
           cons.validated,
           cols.column_name,
           cols.position
    FROM   all_constraints cons
    JOIN   all_cons_columns cols
           ON cols.owner = cons.owner AND cols.constraint_name = cons.constraint_name
    WHERE  cons.owner = UPPER(:owner) AND cons.table_name = :table_name
      AND  cons.constraint_type = 'P'
    ORDER  BY cols.position
"""

INDEX_QUERY = """
    SELECT i.index_name,
           i.index_type,
           i.uniqueness,
           i.status,
           i.tablespace_name,
           TRIM(i.degree) AS degree,
           i.generated,
           ic.column_name,
           ic.column_position,
           ic.descend
    FROM   all_indexes i
    JOIN   all_ind_columns ic
           ON ic.index_owner = i.owner AND ic.index_name = i.index_name
    WHERE  i.table_owner = UPPER(:owner) AND i.table_name = :table_name
    ORDER  BY i.index_name, ic.column_position
"""


class OracleCatalogAdapter(CatalogAdapter):
    """Reads table metadata from Oracle's ALL_* dictionary views."""

    def __init__(self):
        """Initialize Oracle adapter."""
        self.conn = None
        self.query_timeout: Optional[int] = None

    def connect(self, config: Dict[str, Any]) -> None:
        """Establish connection to Oracle.

        Args:
            config: Database configuration with keys:
                - user: Username
                - password: Password
                - dsn: Easy Connect string or TNS alias (host:port/service)
                - connection_timeout: Seconds to wait for the connection (optional)
                - query_timeout: Seconds allowed per catalog round trip (optional)

        Raises:
            CatalogError: If connection fails
        """
        params = {
            'user': config.get('user'),
            'password': config.get('password'),
            'dsn': config.get('dsn'),
        }
        if config.get('connection_timeout'):
            params['tcp_connect_timeout'] = float(config['connection_timeout'])

        try:
            self.conn = oracledb.connect(**params)
        except oracledb.Error as e:
            logger.error("Failed to connect to Oracle: %s", e)
            raise CatalogError(f"Failed to connect to Oracle at {params['dsn']}: {e}") from e

        self.query_timeout = config.get('query_timeout')
        if self.query_timeout:
            # call_timeout is in milliseconds
            self.conn.call_timeout = int(self.query_timeout) * 1000
        logger.info("Successfully connected to Oracle as %s", params['user'])

    def _query(self, sql: str, **binds) -> List[Dict[str, Any]]:
        """Run a catalog query and return rows keyed by lower-case column name."""
        if not self.conn:
            raise CatalogError("Not connected to Oracle. Call connect() first.")

        try:
            with self.conn.cursor() as cursor:
                cursor.execute(sql, binds)
                names = [d[0].lower() for d in cursor.description]
                return [dict(zip(names, row)) for row in cursor.fetchall()]
        except oracledb.Error as e:
            raise CatalogError(f"Catalog query failed: {e}") from e

    def list_schemas(self) -> List[str]:
        rows = self._query(AVAILABLE_SCHEMAS_QUERY)
        schemas = [r['username'] for r in rows]
        logger.debug("Found %d available schemas", len(schemas))
        return schemas

    def schema_exists(self, schema: str) -> bool:
        rows = self._query(SCHEMA_EXISTS_QUERY, owner=schema)
        if not rows:
            return False
        return next(iter(rows[0].values())) > 0

    def fetch_tables(self, schema: str) -> List[Dict[str, Any]]:
        rows = self._query(TABLE_QUERY, owner=schema)
        logger.info("Fetched %d tables from schema %s", len(rows), schema)
        return rows

    def fetch_columns(self, schema: str, table: str) -> List[Dict[str, Any]]:
        return self._query(COLUMN_QUERY, owner=schema, table_name=table)

    def fetch_primary_key(self, schema: str, table: str) -> List[Dict[str, Any]]:
        return self._query(PRIMARY_KEY_QUERY, owner=schema, table_name=table)

    def fetch_indexes(self, schema: str, table: str) -> List[Dict[str, Any]]:
        return self._query(INDEX_QUERY, owner=schema, table_name=table)

    def close(self) -> None:
        """Close Oracle connection."""
        if self.conn:
            try:
                self.conn.close()
                logger.info("Closed Oracle connection")
            except oracledb.Error as e:
                logger.warning("Error closing connection: %s", e)
            finally:
                self.conn = None
