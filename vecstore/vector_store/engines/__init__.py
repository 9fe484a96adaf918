"""
Columnar engine backends and the URL-based connection factory.
"""

from __future__ import annotations

from vecstore.errors import ConfigurationError
from vecstore.vector_store.base import EngineConnection

DEFAULT_BACKEND = "lancedb"
SUPPORTED_BACKENDS = ("lancedb", "chroma")


async def connect(url: str, backend: str = DEFAULT_BACKEND) -> EngineConnection:
    """
    Open a connection for the configured backend.
    Backend modules are imported on demand so only the selected engine has to be installed.
    """
    name = backend.lower()
    if name == "lancedb":
        from vecstore.vector_store.engines.lancedb_engine import LanceDBConnection

        return await LanceDBConnection.connect(url)
    if name == "chroma":
        from vecstore.vector_store.engines.chroma_engine import ChromaConnection

        return await ChromaConnection.connect(url)
    raise ConfigurationError(f"Unsupported vector store backend: {backend}")


__all__ = ["DEFAULT_BACKEND", "SUPPORTED_BACKENDS", "connect"]
