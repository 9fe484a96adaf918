"""
OpenAI embeddings client.
"""

from __future__ import annotations

from typing import List, Sequence

from openai import AsyncOpenAI

from vecstore.config import settings
from vecstore.embeddings.base import Embedder

DEFAULT_EMBEDDING_MODEL = settings.embedding_model_name
DEFAULT_EMBED_BATCH_SIZE = settings.embedding_batch_size


class OpenAIEmbedder(Embedder):
    def __init__(
        self,
        model: str = DEFAULT_EMBEDDING_MODEL,
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self.batch_size = batch_size
        if client is None:
            api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
            client = AsyncOpenAI(api_key=api_key)
        self.client = client

    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        embeddings: List[List[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = list(texts[i : i + self.batch_size])
            response = await self.client.embeddings.create(model=self.model, input=batch)
            embeddings.extend([item.embedding for item in response.data])
        return embeddings

    async def embed_query(self, text: str) -> List[float]:
        vectors = await self.embed_documents([text])
        return vectors[0] if vectors else []


__all__ = ["OpenAIEmbedder", "DEFAULT_EMBEDDING_MODEL"]
