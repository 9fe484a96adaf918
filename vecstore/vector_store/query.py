"""
Query pipeline: embed the query, run a cosine nearest-neighbour search, decode rows.
"""

from __future__ import annotations

import logging
from typing import List

from vecstore.embeddings.base import Embedder
from vecstore.errors import ConfigurationError, EmbeddingError, EngineError, VectorStoreError
from vecstore.models.schemas import Document
from vecstore.vector_store.base import COSINE, EMBEDDING_COLUMN, EngineConnection
from vecstore.vector_store.codec import check_vector, decode_batches

logger = logging.getLogger(__name__)


class QueryPipeline:
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

    async def run(self, query: str, limit: int, embedder: Embedder) -> List[Document]:
        """
        Return up to ``limit`` documents in engine order (ascending distance).

        ``Document.score`` carries the raw cosine distance, not a similarity.
        """
        if limit < 0:
            raise ConfigurationError(f"limit must be >= 0, got {limit}")
        if limit == 0:
            return []

        try:
            query_vector = list(await embedder.embed_query(query))
        except VectorStoreError:
            raise
        except Exception as exc:
            raise EmbeddingError(f"embedding provider failed for query: {exc}") from exc
        check_vector(query_vector, self.vector_dimensions)

        try:
            table = await self.connection.open_table(self.table)
            batches = await table.nearest(EMBEDDING_COLUMN, query_vector, COSINE, limit)
        except VectorStoreError:
            raise
        except Exception as exc:
            raise EngineError(f"nearest-neighbour query on `{self.table}` failed: {exc}") from exc

        documents = decode_batches(batches)
        self.logger.info(
            "Similarity search",
            extra={"table": self.table, "limit": limit, "results": len(documents)},
        )
        return documents


__all__ = ["QueryPipeline"]
