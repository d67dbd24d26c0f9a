import asyncio
import pytest
from app.core.exceptions import StoreError
from ingestion.ingest import ingest_many
from store.document_store import InMemoryDocumentStore
from store.executor import (
    MalformedIdentifier,
    NotFound,
    Ok,
    TransientBackendError,
    Unexpected,
    point_lookup,
    run_query,
)
from store.query import build_actor_query, build_movie_query

raw_docs = [
    {"type": "Movie", "id": "tt0133093", "title": "The Matrix", "year": 1999, "rating": 8.7, "genres": ["Action", "Sci-Fi"], "cast": ["nm0000206"]},
    {"type": "Movie", "id": "tt0120737", "title": "The Lord of the Rings", "year": 2001, "rating": 8.8, "genres": ["Adventure"], "cast": ["nm0000704"]},
    {"type": "Movie", "id": "tt0116282", "title": "Fargo", "year": 1996, "rating": 8.1, "genres": ["Crime"], "cast": []},
    {"type": "Movie", "id": "tt1375666", "title": "Inception", "year": 2010, "rating": 8.8, "genres": ["Action"], "cast": []},
    {"type": "Actor", "id": "nm0000206", "name": "Keanu Reeves", "movies": ["tt0133093"]},
    {"type": "Actor", "id": "nm0000704", "name": "Elijah Wood", "movies": ["tt0120737"]},
]


@pytest.fixture
def store():
    s = InMemoryDocumentStore(partition_count=10, page_size=2)
    s.load(ingest_many(raw_docs))
    return s


def titles(outcome):
    assert isinstance(outcome, Ok)
    return [d["title"] for d in outcome.value]


# ------------------------------------------------------
# store
# ------------------------------------------------------

def test_documents_are_partitioned(store):
    assert store.total_documents == 6
    assert "tt0133093" in store.partitions["3"]
    assert "nm0000704" in store.partitions["4"]

def test_read_item_missing_raises_404(store):
    with pytest.raises(StoreError) as e:
        asyncio.run(store.read_item("tt0000001", "1"))
    assert e.value.status_code == 404
    assert e.value.activity_id

def test_read_item_wrong_partition_is_missing(store):
    with pytest.raises(StoreError):
        asyncio.run(store.read_item("tt0133093", "4"))

def test_cursor_pages(store):
    cursor = store.query_items(build_movie_query(), max_item_count=3)

    first = asyncio.run(cursor.read_next())
    second = asyncio.run(cursor.read_next())

    assert len(first) == 3
    assert len(second) == 1
    assert not cursor.has_more_results

def test_add_requires_partition_key():
    with pytest.raises(ValueError):
        InMemoryDocumentStore().add({"id": "tt0133093"})


# ------------------------------------------------------
# run_query
# ------------------------------------------------------

def test_listing_is_ordered_and_drains_every_page(store):
    outcome = asyncio.run(run_query(store, build_movie_query(), dict))
    assert titles(outcome) == ["Fargo", "Inception", "The Lord of the Rings", "The Matrix"]

def test_listing_is_idempotent(store):
    query = build_movie_query(genre="action")
    first = asyncio.run(run_query(store, query, dict))
    second = asyncio.run(run_query(store, query, dict))
    assert first == second

def test_offset_and_limit(store):
    outcome = asyncio.run(run_query(store, build_movie_query(offset=1, limit=2), dict))
    assert titles(outcome) == ["Inception", "The Lord of the Rings"]

def test_filters(store):
    outcome = asyncio.run(run_query(store, build_movie_query(rating=8.8), dict))
    assert titles(outcome) == ["Inception", "The Lord of the Rings"]

    outcome = asyncio.run(run_query(store, build_movie_query(actor_id="nm0000206"), dict))
    assert titles(outcome) == ["The Matrix"]

def test_empty_result_is_ok(store):
    outcome = asyncio.run(run_query(store, build_movie_query(q="nothing like this"), dict))
    assert outcome == Ok([])

def test_actor_listing_by_name(store):
    outcome = asyncio.run(run_query(store, build_actor_query(), dict))
    assert [a["name"] for a in outcome.value] == ["Elijah Wood", "Keanu Reeves"]  # type: ignore

def test_store_error_becomes_backend_error(store, monkeypatch):
    def failing(query, max_item_count=None):
        raise StoreError(429, "Request rate is large", activity_id="abc")

    monkeypatch.setattr(store, "query_items", failing)

    outcome = asyncio.run(run_query(store, build_movie_query(), dict))
    assert outcome == TransientBackendError(429, "abc", "Request rate is large")

def test_parse_failure_is_unexpected(store):
    def parse(doc):
        raise KeyError("boom")

    outcome = asyncio.run(run_query(store, build_movie_query(), parse))
    assert isinstance(outcome, Unexpected)
    assert isinstance(outcome.cause, KeyError)


# ------------------------------------------------------
# point_lookup
# ------------------------------------------------------

def test_lookup_found(store):
    outcome = asyncio.run(point_lookup(store, "tt0133093", dict, doc_type="Movie"))
    assert isinstance(outcome, Ok)
    assert outcome.value["id"] == "tt0133093"

def test_lookup_round_trip_from_listing(store):
    listing = asyncio.run(run_query(store, build_movie_query(), dict))
    for doc in listing.value:  # type: ignore
        outcome = asyncio.run(point_lookup(store, doc["id"], dict, doc_type="Movie"))
        assert outcome.value["id"] == doc["id"]  # type: ignore

def test_lookup_missing(store):
    outcome = asyncio.run(point_lookup(store, "tt9999999", dict))
    assert outcome == NotFound("tt9999999")

def test_lookup_other_type_is_missing(store):
    outcome = asyncio.run(point_lookup(store, "nm0000206", dict, doc_type="Movie"))
    assert isinstance(outcome, NotFound)

def test_lookup_malformed_never_reaches_store(store, monkeypatch):
    calls = []

    async def read_item(item_id, partition_key):
        calls.append(item_id)
        return {}

    monkeypatch.setattr(store, "read_item", read_item)

    outcome = asyncio.run(point_lookup(store, "garbage", dict))
    assert outcome == MalformedIdentifier("garbage")
    assert calls == []

def test_lookup_backend_error(store, monkeypatch):
    async def read_item(item_id, partition_key):
        raise StoreError(503, "Service unavailable", activity_id="xyz")

    monkeypatch.setattr(store, "read_item", read_item)

    outcome = asyncio.run(point_lookup(store, "tt0133093", dict))
    assert outcome == TransientBackendError(503, "xyz", "Service unavailable")

def test_lookup_unexpected(store, monkeypatch):
    async def read_item(item_id, partition_key):
        raise RuntimeError("socket closed")

    monkeypatch.setattr(store, "read_item", read_item)

    outcome = asyncio.run(point_lookup(store, "tt0133093", dict))
    assert isinstance(outcome, Unexpected)
