"""
Builder that validates configuration once and produces a ``Store``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from vecstore.config import Settings
from vecstore.embeddings.base import Embedder
from vecstore.errors import ConfigurationError
from vecstore.vector_store.base import DEFAULT_TABLE_NAME, EngineConnection
from vecstore.vector_store.engines import DEFAULT_BACKEND, connect
from vecstore.vector_store.store import Store

DEFAULT_CONNECTION_URL = "./tmp/tmp_lancedb"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionHandle:
    connection: EngineConnection


@dataclass(frozen=True)
class ConnectionUrl:
    url: str
    backend: str = DEFAULT_BACKEND


ConnectionConfig = Union[ConnectionHandle, ConnectionUrl]


class StoreBuilder:
    """
    Fluent configuration for ``Store``.

    ``connection`` and ``connection_url`` are alternatives; whichever is
    called last wins. Without either, a local LanceDB directory is used.
    """

    def __init__(self) -> None:
        self._connection: ConnectionConfig | None = None
        self._table = DEFAULT_TABLE_NAME
        self._vector_dimensions = 0
        self._embedder: Embedder | None = None

    @classmethod
    def from_settings(cls, current: Settings) -> "StoreBuilder":
        return (
            cls()
            .connection_url(current.vector_store_uri, backend=current.vector_store_backend)
            .table(current.vector_store_table)
            .vector_dimensions(current.vector_dimensions)
        )

    def connection(self, connection: EngineConnection) -> "StoreBuilder":
        self._connection = ConnectionHandle(connection)
        return self

    def connection_url(self, url: str, backend: str = DEFAULT_BACKEND) -> "StoreBuilder":
        self._connection = ConnectionUrl(url, backend)
        return self

    def table(self, table: str) -> "StoreBuilder":
        self._table = table
        return self

    def vector_dimensions(self, vector_dimensions: int) -> "StoreBuilder":
        self._vector_dimensions = vector_dimensions
        return self

    def embedder(self, embedder: Embedder) -> "StoreBuilder":
        self._embedder = embedder
        return self

    @property
    def connection_config(self) -> ConnectionConfig:
        return self._connection or ConnectionUrl(DEFAULT_CONNECTION_URL)

    async def build(self) -> Store:
        if self._embedder is None:
            raise ConfigurationError("Embedder is required")
        if self._vector_dimensions <= 0:
            raise ConfigurationError(
                f"vector_dimensions must be set to a positive value, got {self._vector_dimensions}"
            )
        if not self._table:
            raise ConfigurationError("table name must not be empty")

        config = self.connection_config
        if isinstance(config, ConnectionHandle):
            connection = config.connection
        else:
            connection = await connect(config.url, config.backend)

        logger.info(
            "Store configured",
            extra={"table": self._table, "vector_dimensions": self._vector_dimensions},
        )
        return Store(
            connection=connection,
            table=self._table,
            vector_dimensions=self._vector_dimensions,
            embedder=self._embedder,
        )


__all__ = [
    "ConnectionConfig",
    "ConnectionHandle",
    "ConnectionUrl",
    "DEFAULT_CONNECTION_URL",
    "StoreBuilder",
]
