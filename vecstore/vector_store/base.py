"""
Vector store interface, engine capabilities and shared types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence

import pyarrow as pa

from vecstore.embeddings.base import Embedder
from vecstore.models.schemas import Document

DEFAULT_TABLE_NAME = "documents"
EMBEDDING_COLUMN = "embedding"
DISTANCE_COLUMN = "_distance"
COSINE = "cosine"


@dataclass(frozen=True)
class VectorRecord:
    id: str
    text: str
    metadata: str
    embedding: List[float]


@dataclass(frozen=True)
class VecStoreOptions:
    """Per-call options; ``embedder`` replaces the store default for that call only."""

    embedder: Embedder | None = None


class EngineTable(Protocol):
    async def create_index(self, column: str, metric: str) -> None:
        """Build a vector index on ``column`` for the given distance metric."""
        ...

    async def append(self, batch: pa.RecordBatch) -> None:
        ...

    async def nearest(
        self, column: str, vector: Sequence[float], metric: str, limit: int
    ) -> List[pa.RecordBatch]:
        """Return row batches with the stored columns plus ``_distance``."""
        ...


class EngineConnection(Protocol):
    async def create_table(self, name: str, schema: pa.Schema) -> EngineTable:
        """Create an empty table; raise ``TableAlreadyExistsError`` if present."""
        ...

    async def open_table(self, name: str) -> EngineTable:
        ...

    async def list_tables(self) -> List[str]:
        ...

    async def drop_table(self, name: str) -> None:
        ...


class VectorStore(Protocol):
    async def add_documents(
        self, documents: Sequence[Document], options: VecStoreOptions | None = None
    ) -> List[str]:
        ...

    async def similarity_search(
        self, query: str, limit: int, options: VecStoreOptions | None = None
    ) -> List[Document]:
        ...


__all__ = [
    "COSINE",
    "DEFAULT_TABLE_NAME",
    "DISTANCE_COLUMN",
    "EMBEDDING_COLUMN",
    "EngineConnection",
    "EngineTable",
    "VecStoreOptions",
    "VectorRecord",
    "VectorStore",
]
