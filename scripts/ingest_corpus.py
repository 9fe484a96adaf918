"""
CLI to load a JSONL corpus into the vector store.

Each line is ``{"page_content": "...", "metadata": {...}}``.

Example:
    python -m scripts.ingest_corpus --corpus data/corpus.jsonl --batch 64
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import List

from tqdm import tqdm

from vecstore.config import public_settings, setup_logging
from vecstore.embeddings.client import OpenAIEmbedder
from vecstore.models.schemas import Document
from vecstore.vector_store import get_vector_store


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load a JSONL corpus into the vector store.")
    parser.add_argument("--corpus", required=True, type=Path, help="Path to the JSONL corpus")
    parser.add_argument("--batch", type=int, default=64, help="Documents per add_documents call")
    parser.add_argument("--recreate", action="store_true", help="Drop the table before loading")
    return parser.parse_args()


def load_documents(path: Path) -> List[Document]:
    documents: List[Document] = []
    with path.open(encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if line:
                documents.append(Document.model_validate(json.loads(line)))
    return documents


async def run(args: argparse.Namespace, logger: logging.Logger) -> int:
    store = await get_vector_store(OpenAIEmbedder())
    if args.recreate:
        await store.drop_table()
    await store.initialize()

    documents = load_documents(args.corpus)
    started = time.time()
    for i in tqdm(range(0, len(documents), args.batch), desc="Ingesting", unit="batch"):
        ids = await store.add_documents(documents[i : i + args.batch])
        logger.info("Stored batch", extra={"count": len(ids), "offset": i})

    await store.create_index()
    logger.info(
        "Ingestion completed",
        extra={"documents": len(documents), "elapsed_sec": round(time.time() - started, 2)},
    )
    return len(documents)


def main() -> None:
    logger = setup_logging()
    args = parse_args()
    logger.info("Loaded settings: %s", public_settings())

    try:
        total = asyncio.run(run(args, logger))
    except Exception:
        logger.exception("Ingestion failed")
        sys.exit(1)

    print(f"Ingested documents: {total}")


if __name__ == "__main__":
    main()
