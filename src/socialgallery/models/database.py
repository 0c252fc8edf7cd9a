"""
Database initialization and management for socialgallery application.

This module provides functions to initialize the DuckDB file backing the
gallery key-value store and manage its connection.
"""

import logging
from pathlib import Path
from typing import Any

import duckdb

from .schema import KV_REQUIRED_COLUMNS, KV_TABLE_NAME, get_schema_statements, validate_schema_compatibility

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages a DuckDB database connection and its schema.
    """

    def __init__(self, db_path: str):
        """
        Initialize DatabaseManager.

        Args:
            db_path: Path to the DuckDB database file (":memory:" for a transient database)
        """
        self.db_path = db_path
        self._connection: duckdb.DuckDBPyConnection | None = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Get or create a database connection.

        Returns:
            DuckDB connection object
        """
        if self._connection is None:
            self._connection = duckdb.connect(self.db_path)
            logger.info(f"Connected to DuckDB database at {self.db_path}")

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("Closed DuckDB database connection")

    def initialize_schema(self) -> None:
        """
        Create the key-value table if it does not exist.

        Raises:
            RuntimeError: If schema validation fails
            duckdb.Error: If database operations fail
        """
        if not validate_schema_compatibility():
            raise RuntimeError("Key-value schema is missing required columns")

        conn = self.connect()

        try:
            for statement in get_schema_statements():
                logger.debug(f"Executing SQL: {statement}")
                conn.execute(statement)

            logger.info("Database schema initialized successfully")

        except duckdb.Error as e:
            logger.error(f"Failed to initialize database schema: {e}")
            raise

    def verify_schema(self) -> bool:
        """
        Verify that the key-value table exists with the expected columns.

        Returns:
            True if schema is valid, False otherwise
        """
        conn = self.connect()

        try:
            result = conn.execute(
                "SELECT table_name FROM information_schema.tables WHERE table_name = ?", (KV_TABLE_NAME,)
            ).fetchone()

            if not result:
                logger.warning(f"{KV_TABLE_NAME} table does not exist")
                return False

            columns = conn.execute(f"PRAGMA table_info('{KV_TABLE_NAME}')").fetchall()
            column_names = {col[1] for col in columns}

            missing_columns = KV_REQUIRED_COLUMNS - column_names
            if missing_columns:
                logger.warning(f"Missing columns: {missing_columns}")
                return False

            return True

        except duckdb.Error as e:
            logger.error(f"Schema verification failed: {e}")
            return False

    def execute_query(self, query: str, parameters: tuple | None = None) -> list[tuple]:
        """
        Execute a SQL query and return results.

        Args:
            query: SQL query string
            parameters: Optional query parameters

        Returns:
            List of result tuples (empty for statements without a result set)

        Raises:
            duckdb.Error: If query execution fails
        """
        conn = self.connect()

        try:
            if parameters:
                result = conn.execute(query, parameters)
            else:
                result = conn.execute(query)

            if result.description is None:
                return []
            return result.fetchall()

        except duckdb.Error as e:
            logger.error(f"Query execution failed: {query}, error: {e}")
            raise

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def get_database_manager(db_path: str) -> DatabaseManager:
    """
    Get a DatabaseManager for ``db_path``, creating the file and schema if needed.

    Args:
        db_path: Path to the database file, or ":memory:"

    Returns:
        DatabaseManager instance with a verified schema

    Raises:
        RuntimeError: If the database cannot be created
    """
    try:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        db_manager = DatabaseManager(db_path)

        if not db_manager.verify_schema():
            db_manager.initialize_schema()
            if not db_manager.verify_schema():
                raise RuntimeError("Schema verification failed after creation")

        return db_manager

    except (OSError, duckdb.Error) as e:
        logger.error(f"Failed to open database at {db_path}: {e}")
        raise RuntimeError(f"Database creation failed: {e}") from e
