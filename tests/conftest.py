"""
Shared fixtures: an in-memory columnar engine and deterministic embedders.
"""

from __future__ import annotations

import math
import re
import zlib
from typing import Dict, List, Sequence

import pyarrow as pa
import pytest
import pytest_asyncio

from vecstore.errors import TableAlreadyExistsError
from vecstore.vector_store import StoreBuilder
from vecstore.vector_store.base import DISTANCE_COLUMN

DIMS = 16


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 1.0
    return 1.0 - dot / norm


class MemoryTable:
    def __init__(self, name: str, schema: pa.Schema) -> None:
        self.name = name
        self.schema = schema
        self.rows: List[dict] = []
        self.indexed_columns: List[str] = []
        self.index_metrics: List[str] = []
        self.append_calls = 0
        self.fail_append = False
        self.fail_index = False

    async def create_index(self, column: str, metric: str) -> None:
        if self.fail_index:
            raise RuntimeError("index build failed")
        self.indexed_columns.append(column)
        self.index_metrics.append(metric)

    async def append(self, batch: pa.RecordBatch) -> None:
        self.append_calls += 1
        if self.fail_append:
            raise RuntimeError("disk full")
        if not batch.schema.equals(self.schema):
            raise ValueError(f"schema mismatch: {batch.schema} != {self.schema}")
        self.rows.extend(batch.to_pylist())

    async def nearest(self, column: str, vector: Sequence[float], metric: str, limit: int) -> List[pa.RecordBatch]:
        assert metric == "cosine"
        if not self.rows:
            return []
        ranked = sorted(
            ({**row, DISTANCE_COLUMN: cosine_distance(row[column], vector)} for row in self.rows),
            key=lambda row: row[DISTANCE_COLUMN],
        )[:limit]
        # Split into two batches to exercise multi-batch decoding.
        half = max(1, len(ranked) // 2)
        return [pa.RecordBatch.from_pylist(part) for part in (ranked[:half], ranked[half:]) if part]


class MemoryConnection:
    def __init__(self) -> None:
        self.tables: Dict[str, MemoryTable] = {}
        self.create_calls = 0
        self.drop_calls: List[str] = []
        self.create_error: Exception | None = None
        self.next_table_flags: dict = {}

    async def create_table(self, name: str, schema: pa.Schema) -> MemoryTable:
        self.create_calls += 1
        if self.create_error is not None:
            raise self.create_error
        if name in self.tables:
            raise TableAlreadyExistsError(name)
        table = MemoryTable(name, schema)
        for key, value in self.next_table_flags.items():
            setattr(table, key, value)
        self.tables[name] = table
        return table

    async def open_table(self, name: str) -> MemoryTable:
        return self.tables[name]

    async def list_tables(self) -> List[str]:
        return list(self.tables)

    async def drop_table(self, name: str) -> None:
        self.drop_calls.append(name)
        del self.tables[name]


class HashingEmbedder:
    """Bag-of-words vectors; equal token sets give identical vectors."""

    def __init__(self, dims: int = DIMS) -> None:
        self.dims = dims
        self.document_calls: List[List[str]] = []
        self.query_calls: List[str] = []

    def vector(self, text: str) -> List[float]:
        vec = [0.0] * self.dims
        for token in re.findall(r"\w+", text.lower()):
            vec[zlib.crc32(token.encode("utf-8")) % self.dims] += 1.0
        return vec

    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        self.document_calls.append(list(texts))
        return [self.vector(t) for t in texts]

    async def embed_query(self, text: str) -> List[float]:
        self.query_calls.append(text)
        return self.vector(text)


class StaticEmbedder:
    """Returns preset vectors keyed by text."""

    def __init__(self, vectors: Dict[str, List[float]]) -> None:
        self.vectors = vectors

    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        return [self.vectors[t] for t in texts]

    async def embed_query(self, text: str) -> List[float]:
        return self.vectors[text]


class ShortEmbedder:
    """Drops the last vector of every batch."""

    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        return [[1.0] * DIMS for _ in texts][:-1]

    async def embed_query(self, text: str) -> List[float]:
        return [1.0] * DIMS


class FailingEmbedder:
    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        raise RuntimeError("provider unavailable")

    async def embed_query(self, text: str) -> List[float]:
        raise RuntimeError("provider unavailable")


@pytest.fixture
def connection() -> MemoryConnection:
    return MemoryConnection()


@pytest.fixture
def embedder() -> HashingEmbedder:
    return HashingEmbedder()


@pytest_asyncio.fixture
async def store(connection, embedder):
    built = await StoreBuilder().connection(connection).vector_dimensions(DIMS).embedder(embedder).build()
    await built.initialize()
    return built
