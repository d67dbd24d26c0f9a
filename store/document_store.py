import logging
import uuid
from typing import Dict, Iterable, List

from app.core.exceptions import StoreError
from store.query import Query

logger = logging.getLogger(__name__)


class QueryCursor:
    """
    Paged view over a query result. Callers keep calling read_next() while
    has_more_results is true; each call hands back at most page_size documents.
    """

    def __init__(self, documents: List[dict], page_size: int):
        self._documents = documents
        self._page_size = max(page_size, 1)
        self._position = 0

    @property
    def has_more_results(self) -> bool:
        return self._position < len(self._documents)

    async def read_next(self) -> List[dict]:
        page = self._documents[self._position:self._position + self._page_size]
        self._position += len(page)
        return page


def _sort_key(doc: dict, fields):
    # missing values sort last
    return tuple((doc.get(f) is None, doc.get(f) if doc.get(f) is not None else 0) for f in fields)


class InMemoryDocumentStore:
    """
    Partitioned document container kept in process memory.

    Documents are addressed by (id, partitionKey). Queries fan out over every
    partition, then the ordering and offset/limit clauses are applied to the
    merged result, the way a cross-partition SQL query behaves.
    """

    def __init__(self, partition_count: int = 10, page_size: int = 100):
        self.partition_count = partition_count
        self.page_size = page_size
        self.partitions: Dict[str, Dict[str, dict]] = {}
        self.total_documents = 0

    @property
    def is_ready(self) -> bool:
        return self.total_documents > 0

    def add(self, doc: dict) -> None:
        partition_key = doc.get("partitionKey")
        doc_id = doc.get("id")
        if partition_key is None or not doc_id:
            raise ValueError(f"Document needs both id and partitionKey: {doc!r}")

        partition = self.partitions.setdefault(str(partition_key), {})
        if doc_id not in partition:
            self.total_documents += 1
        partition[doc_id] = doc

    def load(self, documents: Iterable[dict]) -> None:
        for doc in documents:
            self.add(doc)

        logger.info("Loaded %d documents into %d partitions", self.total_documents, len(self.partitions))

    async def read_item(self, item_id: str, partition_key: str) -> dict:
        partition = self.partitions.get(partition_key, {})
        doc = partition.get(item_id)
        if doc is None:
            raise StoreError(404, f"Entity with the specified id does not exist: {item_id}", activity_id=uuid.uuid4().hex)
        return dict(doc)

    def query_items(self, query: Query, max_item_count: int | None = None) -> QueryCursor:
        matched = [
            doc
            for partition in self.partitions.values()
            for doc in partition.values()
            if query.matches(doc)
        ]

        if query.order_by:
            matched.sort(key=lambda d: _sort_key(d, query.order_by))

        if query.limit is not None:
            start = query.offset or 0
            matched = matched[start:start + query.limit]

        return QueryCursor([query.project(d) for d in matched], max_item_count or self.page_size)
