import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager

from app import config
from app.core.catalog_service import CatalogService
from app.api.routes import actors, featured, genres, health, movies
from app.api.errors import catalog_error_handler, unhandled_error_handler, validation_error_handler
from app.core.exceptions import CatalogError

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # tests may install a service with a prepared store before startup
    if getattr(app.state, "catalog_service", None) is None:
        catalog_service = CatalogService()
        catalog_service.load_data(config.DATA_PATH)
        app.state.catalog_service = catalog_service
    yield


app = FastAPI(
    title="Movie Catalog",
    lifespan=lifespan,
)

app.include_router(movies.router, prefix="/api/movies", tags=["movies"])
app.include_router(actors.router, prefix="/api/actors", tags=["actors"])
app.include_router(featured.router, prefix="/api/featured", tags=["featured"])
app.include_router(genres.router, prefix="/api/genres", tags=["genres"])
app.include_router(health.router, prefix="/healthz", tags=["health"])

app.add_exception_handler(CatalogError, catalog_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)
