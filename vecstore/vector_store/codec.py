"""
Conversion between documents, vector records and columnar row batches.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping, Sequence

import pyarrow as pa

from vecstore.errors import ConfigurationError, DimensionMismatchError, EncodingError, EngineError
from vecstore.models.schemas import Document
from vecstore.vector_store.base import DISTANCE_COLUMN, EMBEDDING_COLUMN, VectorRecord


def table_schema(vector_dimensions: int) -> pa.Schema:
    if vector_dimensions <= 0:
        raise ConfigurationError(f"vector_dimensions must be positive, got {vector_dimensions}")
    return pa.schema(
        [
            pa.field("id", pa.string(), nullable=False),
            pa.field("text", pa.string(), nullable=False),
            pa.field("metadata", pa.string(), nullable=False),
            pa.field(EMBEDDING_COLUMN, pa.list_(pa.float32(), vector_dimensions), nullable=False),
        ]
    )


def schema_dimensions(schema: pa.Schema) -> int:
    return schema.field(EMBEDDING_COLUMN).type.list_size


def serialize_metadata(metadata: Mapping[str, Any]) -> str:
    try:
        return json.dumps(dict(metadata), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"metadata is not JSON serialisable: {exc}") from exc


def deserialize_metadata(raw: str) -> dict:
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"stored metadata is not valid JSON: {raw!r}") from exc
    if not isinstance(value, dict):
        raise EncodingError(f"stored metadata must be a JSON object, got {type(value).__name__}")
    return value


def check_vector(vector: Sequence[float], vector_dimensions: int) -> None:
    if len(vector) != vector_dimensions:
        raise DimensionMismatchError(
            f"embedding has length {len(vector)}, table expects {vector_dimensions}"
        )


def encode_records(records: Sequence[VectorRecord], schema: pa.Schema) -> pa.RecordBatch:
    """
    Build a single row batch matching ``schema``.

    Vectors are checked against the schema's fixed list size so a wrong
    length fails here instead of being truncated or padded by the engine.
    """
    dimensions = schema_dimensions(schema)
    for record in records:
        check_vector(record.embedding, dimensions)

    try:
        return pa.RecordBatch.from_arrays(
            [
                pa.array([r.id for r in records], type=pa.string()),
                pa.array([r.text for r in records], type=pa.string()),
                pa.array([r.metadata for r in records], type=pa.string()),
                pa.array([list(r.embedding) for r in records], type=schema.field(EMBEDDING_COLUMN).type),
            ],
            schema=schema,
        )
    except (pa.ArrowInvalid, pa.ArrowTypeError) as exc:
        raise EncodingError(f"could not encode record batch: {exc}") from exc


def decode_batches(batches: Iterable[pa.RecordBatch]) -> List[Document]:
    documents: List[Document] = []
    for batch in batches:
        columns = batch.to_pydict()
        try:
            texts = columns["text"]
            metadatas = columns["metadata"]
            distances = columns[DISTANCE_COLUMN]
        except KeyError as exc:
            raise EngineError(f"query result is missing column {exc}") from exc

        for text, metadata, distance in zip(texts, metadatas, distances):
            documents.append(
                Document(
                    page_content=text,
                    metadata=deserialize_metadata(metadata),
                    score=float(distance),
                )
            )
    return documents


__all__ = [
    "check_vector",
    "decode_batches",
    "deserialize_metadata",
    "encode_records",
    "schema_dimensions",
    "serialize_metadata",
    "table_schema",
]
