"""
Error taxonomy raised by the vector store.

Callers branch on the exception class; every error raised by this package
derives from ``VectorStoreError``.
"""

from __future__ import annotations


class VectorStoreError(Exception):
    """Base class for all vecstore failures."""


class ConfigurationError(VectorStoreError, ValueError):
    """Missing embedder, invalid vector dimensions or other bad settings."""


class StoreConnectionError(VectorStoreError, ConnectionError):
    """The columnar engine could not be reached or opened."""


class SchemaError(VectorStoreError):
    """Table or index creation failed for a reason other than "already exists"."""


class TableAlreadyExistsError(VectorStoreError):
    """Raised by engines when ``create_table`` targets an existing table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"table `{name}` already exists")
        self.name = name


class EmbeddingError(VectorStoreError):
    """The embedding provider call failed."""


class DimensionMismatchError(VectorStoreError):
    """Vector count or vector length is inconsistent with documents or schema."""


class EncodingError(VectorStoreError):
    """Metadata could not be serialised to, or parsed from, its stored form."""


class EngineError(VectorStoreError):
    """Open-table, append or query failure reported by the columnar engine."""


__all__ = [
    "VectorStoreError",
    "ConfigurationError",
    "StoreConnectionError",
    "SchemaError",
    "TableAlreadyExistsError",
    "EmbeddingError",
    "DimensionMismatchError",
    "EncodingError",
    "EngineError",
]
