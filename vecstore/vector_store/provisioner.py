"""
Table provisioning: create the document table and its vector index once.
"""

from __future__ import annotations

import logging

from vecstore.errors import (
    SchemaError,
    StoreConnectionError,
    TableAlreadyExistsError,
    VectorStoreError,
)
from vecstore.vector_store.base import COSINE, EMBEDDING_COLUMN, EngineConnection
from vecstore.vector_store.codec import table_schema

logger = logging.getLogger(__name__)


class SchemaProvisioner:
    def __init__(
        self,
        connection: EngineConnection,
        table: str,
        vector_dimensions: int,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.connection = connection
        self.table = table
        self.vector_dimensions = vector_dimensions
        self.logger = logger_ or logger

    async def initialize(self) -> None:
        """Create the table and its index; an existing table counts as success."""
        schema = table_schema(self.vector_dimensions)
        try:
            created = await self.connection.create_table(self.table, schema)
        except TableAlreadyExistsError:
            self.logger.warning("Table already exists, skipping creation", extra={"table": self.table})
            return
        except VectorStoreError:
            raise
        except ConnectionError as exc:
            raise StoreConnectionError(f"cannot reach engine to create `{self.table}`: {exc}") from exc
        except Exception as exc:
            raise SchemaError(f"failed to create table `{self.table}`: {exc}") from exc

        try:
            await created.create_index(EMBEDDING_COLUMN, COSINE)
        except VectorStoreError:
            raise
        except Exception as exc:
            raise SchemaError(f"failed to index `{self.table}.{EMBEDDING_COLUMN}`: {exc}") from exc

        self.logger.info(
            "Table created",
            extra={"table": self.table, "vector_dimensions": self.vector_dimensions},
        )

    async def create_index(self) -> None:
        """(Re)build the vector index on an existing table, e.g. after a bulk load."""
        try:
            table = await self.connection.open_table(self.table)
            await table.create_index(EMBEDDING_COLUMN, COSINE)
        except VectorStoreError:
            raise
        except Exception as exc:
            raise SchemaError(f"failed to index `{self.table}.{EMBEDDING_COLUMN}`: {exc}") from exc

    async def table_exists(self) -> bool:
        try:
            names = await self.connection.list_tables()
        except VectorStoreError:
            raise
        except Exception as exc:
            raise StoreConnectionError(f"cannot list tables: {exc}") from exc
        return self.table in names

    async def drop_table(self) -> bool:
        """Drop the table if present. Returns whether anything was dropped."""
        if not await self.table_exists():
            self.logger.info("Table not present, nothing to drop", extra={"table": self.table})
            return False

        try:
            await self.connection.drop_table(self.table)
        except VectorStoreError:
            raise
        except Exception as exc:
            raise SchemaError(f"failed to drop table `{self.table}`: {exc}") from exc
        self.logger.info("Table dropped", extra={"table": self.table})
        return True


__all__ = ["SchemaProvisioner"]
