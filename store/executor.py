import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, TypeVar, Union

from app.core.exceptions import MalformedIdentifierError, StoreError
from store.partition import DEFAULT_PARTITION_COUNT, get_partition_key
from store.query import Query

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    entity_id: str | None = None


@dataclass(frozen=True)
class MalformedIdentifier:
    entity_id: str


@dataclass(frozen=True)
class TransientBackendError:
    status_code: int
    activity_id: str | None = None
    message: str = ""


@dataclass(frozen=True)
class Unexpected:
    cause: BaseException


Outcome = Union[Ok, NotFound, MalformedIdentifier, TransientBackendError, Unexpected]


def _backend_error(e: StoreError) -> TransientBackendError:
    return TransientBackendError(status_code=e.status_code, activity_id=e.activity_id, message=e.message)


async def run_query(store, query: Query, parse: Callable[[dict], T], page_size: int | None = None) -> Outcome:
    """
    Execute a query and drain every page of its cursor.

    Returns Ok(list) in store order (an empty list is a normal result),
    TransientBackendError when the store rejects the query, or Unexpected for
    anything else.
    """
    try:
        cursor = store.query_items(query, max_item_count=page_size)

        results: List[T] = []
        while cursor.has_more_results:
            for doc in await cursor.read_next():
                results.append(parse(doc))

        return Ok(results)

    except StoreError as e:
        return _backend_error(e)

    except Exception as e:
        return Unexpected(e)


async def point_lookup(
    store,
    entity_id: str,
    parse: Callable[[dict], T],
    doc_type: str | None = None,
    partition_count: int = DEFAULT_PARTITION_COUNT,
) -> Outcome:
    """
    Read one document by id, going straight to its partition.

    The partition key is derived before the store is touched, so a malformed
    id never costs a store call. A document of another type stored under the
    same key counts as not found.
    """
    try:
        partition_key = get_partition_key(entity_id, partition_count)
    except MalformedIdentifierError:
        return MalformedIdentifier(entity_id)

    try:
        doc: Any = await store.read_item(entity_id, partition_key)

        if doc_type is not None and doc.get("type") != doc_type:
            return NotFound(entity_id)

        return Ok(parse(doc))

    except StoreError as e:
        if e.status_code == 404:
            return NotFound(entity_id)
        return _backend_error(e)

    except Exception as e:
        return Unexpected(e)
