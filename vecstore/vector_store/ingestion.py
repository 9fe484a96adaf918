"""
Ingestion pipeline: embed documents, assign ids, encode rows and append them.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import List, Sequence

from vecstore.embeddings.base import Embedder
from vecstore.errors import DimensionMismatchError, EmbeddingError, EngineError, VectorStoreError
from vecstore.models.schemas import Document
from vecstore.vector_store.base import EngineConnection, VectorRecord
from vecstore.vector_store.codec import check_vector, encode_records, serialize_metadata, table_schema

logger = logging.getLogger(__name__)


def new_record_id() -> str:
    return str(uuid.uuid4())


async def embed_documents(embedder: Embedder, texts: Sequence[str]) -> List[List[float]]:
    try:
        vectors = await embedder.embed_documents(list(texts))
        return [list(v) for v in vectors]
    except VectorStoreError:
        raise
    except Exception as exc:
        raise EmbeddingError(f"embedding provider failed for {len(texts)} texts: {exc}") from exc


def build_records(
    documents: Sequence[Document], vectors: Sequence[Sequence[float]], vector_dimensions: int
) -> List[VectorRecord]:
    if len(vectors) != len(documents):
        raise DimensionMismatchError(
            f"Number of vectors ({len(vectors)}) and documents ({len(documents)}) do not match"
        )

    records: List[VectorRecord] = []
    for document, vector in zip(documents, vectors):
        check_vector(vector, vector_dimensions)
        records.append(
            VectorRecord(
                id=new_record_id(),
                text=document.page_content,
                metadata=serialize_metadata(document.metadata),
                embedding=list(vector),
            )
        )
    return records


class IngestionPipeline:
    """
    Writes documents to the table as one columnar batch per call.

    Nothing is written unless every document was embedded and encoded.
    A failed append is not retried; atomicity of the append itself is
    whatever the engine provides.
    """

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

    async def run(self, documents: Sequence[Document], embedder: Embedder) -> List[str]:
        if not documents:
            return []

        started = time.time()
        texts = [doc.page_content for doc in documents]
        vectors = await embed_documents(embedder, texts)
        records = build_records(documents, vectors, self.vector_dimensions)
        batch = encode_records(records, table_schema(self.vector_dimensions))

        try:
            table = await self.connection.open_table(self.table)
        except VectorStoreError:
            raise
        except Exception as exc:
            raise EngineError(f"failed to open table `{self.table}`: {exc}") from exc

        try:
            await table.append(batch)
        except VectorStoreError:
            raise
        except Exception as exc:
            raise EngineError(f"failed to append {len(records)} rows to `{self.table}`: {exc}") from exc

        self.logger.info(
            "Appended documents",
            extra={
                "table": self.table,
                "count": len(records),
                "elapsed_sec": round(time.time() - started, 3),
            },
        )
        return [record.id for record in records]


__all__ = ["IngestionPipeline", "build_records", "embed_documents", "new_record_id"]
