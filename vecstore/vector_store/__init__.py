"""
Vector store abstractions and factories.
"""

from vecstore.config import Settings, settings
from vecstore.embeddings.base import Embedder
from vecstore.vector_store.base import VecStoreOptions, VectorStore
from vecstore.vector_store.builder import ConnectionHandle, ConnectionUrl, StoreBuilder
from vecstore.vector_store.engines import DEFAULT_BACKEND, SUPPORTED_BACKENDS, connect
from vecstore.vector_store.store import Store


async def get_vector_store(embedder: Embedder, current: Settings | None = None) -> Store:
    """
    Factory to obtain a Store configured from settings.
    Supports the LanceDB and Chroma backends.
    """
    return await StoreBuilder.from_settings(current or settings).embedder(embedder).build()


__all__ = [
    "ConnectionHandle",
    "ConnectionUrl",
    "DEFAULT_BACKEND",
    "SUPPORTED_BACKENDS",
    "Store",
    "StoreBuilder",
    "VecStoreOptions",
    "VectorStore",
    "connect",
    "get_vector_store",
]
