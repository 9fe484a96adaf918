"""
CLI to search the vector store by text query.

Example:
    python -m scripts.search_query --query "capital of France" --limit 5
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from vecstore.config import setup_logging
from vecstore.embeddings.client import OpenAIEmbedder
from vecstore.vector_store import get_vector_store


async def search(query: str, limit: int):
    store = await get_vector_store(OpenAIEmbedder())
    return await store.similarity_search(query, limit)


def main() -> None:
    logger = setup_logging()
    parser = argparse.ArgumentParser(description="Search stored documents by text query.")
    parser.add_argument("--query", "-q", required=True, help="Query text")
    parser.add_argument("--limit", type=int, default=5, help="How many results to return")
    parser.add_argument("--snippet", type=int, default=300, help="Snippet length")
    args = parser.parse_args()

    try:
        results = asyncio.run(search(args.query, args.limit))
    except Exception:
        logger.exception("Search failed")
        sys.exit(1)

    if not results:
        print("No results found.")
        return

    for idx, doc in enumerate(results, start=1):
        snippet = doc.page_content[: args.snippet].replace("\n", " ")
        print(f"\n#{idx} distance={doc.score:.4f}")
        print("metadata:", json.dumps(dict(doc.metadata), ensure_ascii=False))
        print("text:", snippet + ("..." if len(doc.page_content) > args.snippet else ""))


if __name__ == "__main__":
    main()
