import logging
import time
from pathlib import Path

from app import config
from app.core.exceptions import StoreNotReadyError
from app.core.featured import FeaturedMovieSelector, LazyList
from app.models.document import ActorDocument, MovieDocument
from app.models.search_query import ActorSearchParams, MovieSearchParams
from ingestion.ingest import ingest_many, load_json_file
from store.document_store import InMemoryDocumentStore
from store.executor import Outcome, point_lookup, run_query
from store.pagination import normalize_page
from store.query import build_actor_query, build_genre_query, build_movie_query

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(
        self,
        store=None,
        partition_count: int = config.PARTITION_COUNT,
        default_page_size: int = config.DEFAULT_PAGE_SIZE,
        max_page_size: int = config.MAX_PAGE_SIZE,
        query_page_size: int = config.QUERY_PAGE_SIZE,
        featured_cache: LazyList | None = None,
    ):
        self.partition_count = partition_count
        # a page always holds at least one item
        self.default_page_size = max(default_page_size, 1)
        self.max_page_size = max(max_page_size, 1)
        self.query_page_size = query_page_size
        self.store = store if store is not None else InMemoryDocumentStore(partition_count, query_page_size)
        self.featured_cache = featured_cache if featured_cache is not None else LazyList()
        self.featured = FeaturedMovieSelector(self.store, self.featured_cache, partition_count)

    def load_data(self, data_path: Path = config.DATA_PATH):
        load_start = time.perf_counter()
        docs = ingest_many(load_json_file(data_path), partition_count=self.partition_count)
        self.store.load(docs)
        load_end = time.perf_counter()

        logger.info("Loaded %d documents from %s in %.3fs", len(docs), data_path, load_end - load_start)

    def _window(self, page_number: int, page_size: int):
        return normalize_page(page_number, page_size, self.default_page_size, self.max_page_size)

    async def search_movies(self, params: MovieSearchParams) -> Outcome:
        window = self._window(params.page_number, params.page_size)

        query = build_movie_query(
            q=params.q,
            genre=params.genre,
            year=params.year,
            rating=params.rating,
            top_rated=params.top_rated,
            actor_id=params.actor_id,
            offset=window.offset,
            limit=window.limit,
        )
        logger.debug("Movie query: %s", query)

        return await run_query(self.store, query, MovieDocument.model_validate, self.query_page_size)

    async def get_movie(self, movie_id: str) -> Outcome:
        return await point_lookup(
            self.store, movie_id, MovieDocument.model_validate, doc_type="Movie", partition_count=self.partition_count
        )

    async def search_actors(self, params: ActorSearchParams) -> Outcome:
        window = self._window(params.page_number, params.page_size)

        query = build_actor_query(q=params.q, offset=window.offset, limit=window.limit)
        logger.debug("Actor query: %s", query)

        return await run_query(self.store, query, ActorDocument.model_validate, self.query_page_size)

    async def get_actor(self, actor_id: str) -> Outcome:
        return await point_lookup(
            self.store, actor_id, ActorDocument.model_validate, doc_type="Actor", partition_count=self.partition_count
        )

    async def featured_movie(self) -> Outcome:
        return await self.featured.pick()

    async def list_genres(self) -> Outcome:
        return await run_query(self.store, build_genre_query(), lambda doc: doc["genre"], self.query_page_size)

    def ensure_ready(self):
        if not getattr(self.store, "is_ready", True):
            raise StoreNotReadyError()

    def health_check(self):
        return {
            "status": "ok",
            "total_documents": getattr(self.store, "total_documents", None),
            "featured_cached": len(self.featured_cache.items),
        }
