"""
Tests for add_documents.
"""

import json

import pytest

from conftest import DIMS, FailingEmbedder, HashingEmbedder, ShortEmbedder, StaticEmbedder
from vecstore.errors import DimensionMismatchError, EmbeddingError, EncodingError, EngineError
from vecstore.models.schemas import Document
from vecstore.vector_store import StoreBuilder, VecStoreOptions


def make_docs(n):
    return [Document(page_content=f"document number {i}", metadata={"i": i}) for i in range(n)]


@pytest.mark.asyncio
async def test_returns_distinct_ids_in_input_order(store, connection):
    docs = make_docs(5)

    ids = await store.add_documents(docs)

    assert len(ids) == 5
    assert len(set(ids)) == 5
    assert all(isinstance(i, str) and i for i in ids)
    rows = connection.tables["documents"].rows
    assert [r["id"] for r in rows] == ids
    assert [r["text"] for r in rows] == [d.page_content for d in docs]


@pytest.mark.asyncio
async def test_embeds_once_and_appends_once(store, connection, embedder):
    await store.add_documents(make_docs(3))

    assert embedder.document_calls == [["document number 0", "document number 1", "document number 2"]]
    assert connection.tables["documents"].append_calls == 1


@pytest.mark.asyncio
async def test_metadata_stored_as_json(store, connection):
    await store.add_documents([Document(page_content="x", metadata={"topic": "geography", "tags": ["a"]})])

    stored = connection.tables["documents"].rows[0]["metadata"]
    assert json.loads(stored) == {"topic": "geography", "tags": ["a"]}


@pytest.mark.asyncio
async def test_count_mismatch_fails_without_write(connection):
    store = await StoreBuilder().connection(connection).vector_dimensions(DIMS).embedder(ShortEmbedder()).build()
    await store.initialize()

    with pytest.raises(DimensionMismatchError):
        await store.add_documents(make_docs(3))

    table = connection.tables["documents"]
    assert table.append_calls == 0
    assert table.rows == []


@pytest.mark.asyncio
async def test_wrong_vector_length_is_rejected(connection):
    embedder = StaticEmbedder({"short vector": [0.1] * 128})
    store = await StoreBuilder().connection(connection).vector_dimensions(384).embedder(embedder).build()
    await store.initialize()

    with pytest.raises(DimensionMismatchError):
        await store.add_documents([Document(page_content="short vector")])

    assert connection.tables["documents"].rows == []


@pytest.mark.asyncio
async def test_provider_failure_is_embedding_error(connection):
    store = await StoreBuilder().connection(connection).vector_dimensions(DIMS).embedder(FailingEmbedder()).build()
    await store.initialize()

    with pytest.raises(EmbeddingError) as excinfo:
        await store.add_documents(make_docs(1))

    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_options_embedder_overrides_default(store, embedder):
    override = HashingEmbedder()

    await store.add_documents(make_docs(2), VecStoreOptions(embedder=override))

    assert embedder.document_calls == []
    assert len(override.document_calls) == 1


@pytest.mark.asyncio
async def test_unserialisable_metadata_fails_before_write(store, connection):
    doc = Document(page_content="bad", metadata={"handle": object()})

    with pytest.raises(EncodingError):
        await store.add_documents([doc])

    assert connection.tables["documents"].append_calls == 0


@pytest.mark.asyncio
async def test_append_failure_is_engine_error(store, connection):
    connection.tables["documents"].fail_append = True

    with pytest.raises(EngineError):
        await store.add_documents(make_docs(2))


@pytest.mark.asyncio
async def test_missing_table_is_engine_error(connection, embedder):
    store = await StoreBuilder().connection(connection).vector_dimensions(DIMS).embedder(embedder).build()

    with pytest.raises(EngineError):
        await store.add_documents(make_docs(1))


@pytest.mark.asyncio
async def test_empty_input_touches_nothing(store, connection, embedder):
    assert await store.add_documents([]) == []
    assert embedder.document_calls == []
    assert connection.tables["documents"].append_calls == 0


class NoneVectorEmbedder:
    async def embed_documents(self, texts):
        return [None for _ in texts]

    async def embed_query(self, text):
        return None


@pytest.mark.asyncio
async def test_non_iterable_vectors_are_embedding_error(connection):
    store = await StoreBuilder().connection(connection).vector_dimensions(DIMS).embedder(NoneVectorEmbedder()).build()
    await store.initialize()

    with pytest.raises(EmbeddingError):
        await store.add_documents(make_docs(2))

    assert connection.tables["documents"].append_calls == 0
