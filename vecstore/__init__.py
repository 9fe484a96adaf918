"""
Columnar vector store: documents plus embeddings in an indexable table.
"""

from vecstore.errors import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingError,
    EncodingError,
    EngineError,
    SchemaError,
    StoreConnectionError,
    TableAlreadyExistsError,
    VectorStoreError,
)
from vecstore.models.schemas import Document
from vecstore.vector_store import Store, StoreBuilder, VecStoreOptions, VectorStore, get_vector_store

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "Document",
    "EmbeddingError",
    "EncodingError",
    "EngineError",
    "SchemaError",
    "Store",
    "StoreBuilder",
    "StoreConnectionError",
    "TableAlreadyExistsError",
    "VecStoreOptions",
    "VectorStore",
    "VectorStoreError",
    "get_vector_store",
]
