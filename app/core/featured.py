import logging
import random
import time
from typing import Iterable, List

from app.models.document import MovieDocument
from store.executor import NotFound, Ok, Outcome, point_lookup, run_query
from store.query import build_featured_query

logger = logging.getLogger(__name__)


class LazyList:
    """
    Shared list that is filled once and then only read.

    Two callers may both see it empty and both fill it; the content they load
    is the same, so the last fill simply wins. There is no expiry.
    """

    def __init__(self):
        self._items: List[str] = []

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def items(self) -> List[str]:
        return self._items

    def fill(self, items: Iterable[str]) -> None:
        self._items = list(items)


class FeaturedMovieSelector:
    def __init__(self, store, cache: LazyList, partition_count: int, seed: int | None = None):
        self.store = store
        self.cache = cache
        self.partition_count = partition_count
        # feature rotation only, not security sensitive
        self._rand = random.Random(seed if seed is not None else time.time_ns())

    async def pick(self) -> Outcome:
        if self.cache.is_empty:
            outcome = await run_query(self.store, build_featured_query(), lambda doc: doc["movieId"])
            if not isinstance(outcome, Ok):
                return outcome

            self.cache.fill(outcome.value)
            logger.info("Loaded %d featured movie ids", len(self.cache.items))

        if self.cache.is_empty:
            return NotFound()

        movie_id = self._rand.choice(self.cache.items)

        return await point_lookup(
            self.store,
            movie_id,
            MovieDocument.model_validate,
            doc_type="Movie",
            partition_count=self.partition_count,
        )
