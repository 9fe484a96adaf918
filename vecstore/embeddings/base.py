"""
Embedding provider interface.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Embedder(Protocol):
    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        ...

    async def embed_query(self, text: str) -> List[float]:
        ...


__all__ = ["Embedder"]
