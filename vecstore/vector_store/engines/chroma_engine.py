"""
Chroma-based engine exposing the same table capabilities as LanceDB.

Chroma is row oriented: batches are unpacked into the collection's
``ids``/``documents``/``metadatas``/``embeddings`` arguments and query
results are packed back into a row batch with a ``_distance`` column.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Sequence

import chromadb
import pyarrow as pa

from vecstore.errors import EngineError, StoreConnectionError, TableAlreadyExistsError
from vecstore.vector_store.base import COSINE, DISTANCE_COLUMN, EMBEDDING_COLUMN
from vecstore.vector_store.codec import schema_dimensions

DIMENSIONS_KEY = "vector_dimensions"
SPACE_KEY = "hnsw:space"

logger = logging.getLogger(__name__)


class ChromaTable:
    def __init__(self, collection: Any) -> None:
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    @property
    def vector_dimensions(self) -> int | None:
        return (self.collection.metadata or {}).get(DIMENSIONS_KEY)

    async def create_index(self, column: str, metric: str) -> None:
        # Chroma maintains its HNSW index on every write, in the space fixed at creation.
        space = (self.collection.metadata or {}).get(SPACE_KEY, "l2")
        if metric != space:
            raise EngineError(f"collection `{self.name}` uses {space} distance, {metric} index requested")
        logger.info("Chroma collection indexes on write", extra={"collection": self.name, "column": column})

    async def append(self, batch: pa.RecordBatch) -> None:
        if batch.num_rows == 0:
            return
        dimensions = self.vector_dimensions
        if dimensions is not None and batch.schema.field(EMBEDDING_COLUMN).type.list_size != dimensions:
            raise EngineError(
                f"batch vectors do not match collection `{self.name}` dimensionality {dimensions}"
            )

        columns = batch.to_pydict()
        await asyncio.to_thread(
            self.collection.add,
            ids=columns["id"],
            documents=columns["text"],
            metadatas=[{"metadata": m} for m in columns["metadata"]],
            embeddings=columns[EMBEDDING_COLUMN],
        )
        logger.info("Upserted documents into Chroma", extra={"count": batch.num_rows, "collection": self.name})

    async def nearest(
        self, column: str, vector: Sequence[float], metric: str, limit: int
    ) -> List[pa.RecordBatch]:
        space = (self.collection.metadata or {}).get(SPACE_KEY, "l2")
        if metric != space:
            raise EngineError(f"collection `{self.name}` uses {space} distance, {metric} requested")
        if limit <= 0:
            return []

        count = await asyncio.to_thread(self.collection.count)
        if count == 0:
            return []

        result = await asyncio.to_thread(
            self.collection.query,
            query_embeddings=[list(vector)],
            n_results=min(limit, count),
            include=["documents", "metadatas", "distances"],
        )

        ids = (result.get("ids") or [[]])[0] or []
        texts = (result.get("documents") or [[]])[0] or []
        metadatas = (result.get("metadatas") or [[]])[0] or []
        distances = (result.get("distances") or [[]])[0] or []

        return [
            pa.RecordBatch.from_pydict(
                {
                    "id": list(ids),
                    "text": list(texts),
                    "metadata": [(m or {}).get("metadata", "{}") for m in metadatas],
                    DISTANCE_COLUMN: pa.array([float(d) for d in distances], type=pa.float32()),
                }
            )
        ]


class ChromaConnection:
    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    async def connect(cls, url: str) -> "ChromaConnection":
        try:
            client = await asyncio.to_thread(chromadb.PersistentClient, path=url)
        except Exception as exc:
            raise StoreConnectionError(f"cannot open Chroma at {url!r}: {exc}") from exc
        logger.info("Chroma client initialised", extra={"persist_directory": url})
        return cls(client)

    async def create_table(self, name: str, schema: pa.Schema) -> ChromaTable:
        if name in await self.list_tables():
            raise TableAlreadyExistsError(name)
        collection = await asyncio.to_thread(
            self.client.create_collection,
            name,
            metadata={SPACE_KEY: COSINE, DIMENSIONS_KEY: schema_dimensions(schema)},
            embedding_function=None,
        )
        return ChromaTable(collection)

    async def open_table(self, name: str) -> ChromaTable:
        collection = await asyncio.to_thread(self.client.get_collection, name, embedding_function=None)
        return ChromaTable(collection)

    async def list_tables(self) -> List[str]:
        collections = await asyncio.to_thread(self.client.list_collections)
        # Older clients return Collection objects, newer ones plain names.
        return [getattr(c, "name", c) for c in collections]

    async def drop_table(self, name: str) -> None:
        await asyncio.to_thread(self.client.delete_collection, name)


__all__ = ["ChromaConnection", "ChromaTable"]
