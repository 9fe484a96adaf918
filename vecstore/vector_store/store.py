"""
Store facade over the provisioning, ingestion and query pipelines.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from vecstore.embeddings.base import Embedder
from vecstore.models.schemas import Document
from vecstore.vector_store.base import EngineConnection, VecStoreOptions, VectorStore
from vecstore.vector_store.ingestion import IngestionPipeline
from vecstore.vector_store.provisioner import SchemaProvisioner
from vecstore.vector_store.query import QueryPipeline

logger = logging.getLogger(__name__)


class Store(VectorStore):
    """
    Document table in a columnar engine plus the embedder used to fill it.

    Built through ``StoreBuilder``; configuration does not change afterwards,
    so one instance can serve concurrent calls without locking.
    """

    def __init__(
        self,
        connection: EngineConnection,
        table: str,
        vector_dimensions: int,
        embedder: Embedder,
    ) -> None:
        self._connection = connection
        self._table = table
        self._vector_dimensions = vector_dimensions
        self._embedder = embedder
        self._provisioner = SchemaProvisioner(connection, table, vector_dimensions)
        self._ingestion = IngestionPipeline(connection, table, vector_dimensions)
        self._query = QueryPipeline(connection, table, vector_dimensions)

    @property
    def connection(self) -> EngineConnection:
        return self._connection

    @property
    def table(self) -> str:
        return self._table

    @property
    def vector_dimensions(self) -> int:
        return self._vector_dimensions

    @property
    def embedder(self) -> Embedder:
        return self._embedder

    async def initialize(self) -> None:
        await self._provisioner.initialize()

    async def create_index(self) -> None:
        await self._provisioner.create_index()

    async def drop_table(self) -> bool:
        return await self._provisioner.drop_table()

    async def table_exists(self) -> bool:
        return await self._provisioner.table_exists()

    def _active_embedder(self, options: VecStoreOptions | None) -> Embedder:
        if options is not None and options.embedder is not None:
            return options.embedder
        return self._embedder

    async def add_documents(
        self, documents: Sequence[Document], options: VecStoreOptions | None = None
    ) -> List[str]:
        return await self._ingestion.run(documents, self._active_embedder(options))

    async def similarity_search(
        self, query: str, limit: int, options: VecStoreOptions | None = None
    ) -> List[Document]:
        return await self._query.run(query, limit, self._active_embedder(options))

    def __repr__(self) -> str:
        return f"Store(table={self._table!r}, vector_dimensions={self._vector_dimensions})"


__all__ = ["Store"]
