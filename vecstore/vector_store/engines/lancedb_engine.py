"""
LanceDB-backed engine using the async connection API.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import lancedb
import pyarrow as pa
from lancedb.index import IvfPq

from vecstore.errors import StoreConnectionError, TableAlreadyExistsError

# IVF_PQ training needs at least this many rows; smaller tables are searched exhaustively.
MIN_INDEX_ROWS = 256

logger = logging.getLogger(__name__)


class LanceDBTable:
    def __init__(self, table: lancedb.AsyncTable) -> None:
        self._table = table

    @property
    def name(self) -> str:
        return self._table.name

    async def create_index(self, column: str, metric: str) -> None:
        rows = await self._table.count_rows()
        if rows < MIN_INDEX_ROWS:
            logger.info(
                "Deferring vector index, table too small to train",
                extra={"table": self.name, "rows": rows, "min_rows": MIN_INDEX_ROWS},
            )
            return
        await self._table.create_index(column, replace=True, config=IvfPq(distance_type=metric))
        logger.info(
            "Vector index created",
            extra={"table": self.name, "column": column, "metric": metric, "rows": rows},
        )

    async def append(self, batch: pa.RecordBatch) -> None:
        await self._table.add(pa.Table.from_batches([batch]))

    async def nearest(
        self, column: str, vector: Sequence[float], metric: str, limit: int
    ) -> List[pa.RecordBatch]:
        result = await (
            self._table.query()
            .nearest_to(list(vector))
            .column(column)
            .distance_type(metric)
            .limit(limit)
            .to_arrow()
        )
        return result.to_batches()


class LanceDBConnection:
    def __init__(self, db: lancedb.AsyncConnection) -> None:
        self._db = db

    @classmethod
    async def connect(cls, url: str) -> "LanceDBConnection":
        try:
            db = await lancedb.connect_async(url)
        except Exception as exc:
            raise StoreConnectionError(f"cannot connect to LanceDB at {url!r}: {exc}") from exc
        logger.info("LanceDB connection opened", extra={"uri": url})
        return cls(db)

    async def create_table(self, name: str, schema: pa.Schema) -> LanceDBTable:
        try:
            table = await self._db.create_table(name, schema=schema)
        except Exception as exc:
            if name in await self.list_tables():
                raise TableAlreadyExistsError(name) from exc
            raise
        return LanceDBTable(table)

    async def open_table(self, name: str) -> LanceDBTable:
        return LanceDBTable(await self._db.open_table(name))

    async def list_tables(self) -> List[str]:
        response = await self._db.list_tables()
        names = list(response.tables)
        while response.page_token:
            response = await self._db.list_tables(page_token=response.page_token)
            names.extend(response.tables)
        return names

    async def drop_table(self, name: str) -> None:
        await self._db.drop_table(name)


__all__ = ["LanceDBConnection", "LanceDBTable", "MIN_INDEX_ROWS"]
