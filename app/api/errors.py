import logging
from dataclasses import dataclass

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from app.models.api_response import APIError, APIResponse
from app.core.exceptions import CatalogError, InvalidQueryError
from store.executor import MalformedIdentifier, NotFound, Ok, Outcome, TransientBackendError, Unexpected

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorFamily:
    code: str
    message: str
    not_found: str


MOVIES = ErrorFamily("MOVIES_ERROR", "Unable to retrieve movies", "Movie not found")
ACTORS = ErrorFamily("ACTORS_ERROR", "Unable to retrieve actors", "Actor not found")
FEATURED = ErrorFamily("FEATURED_ERROR", "Unable to retrieve the featured movie", "No featured movie found")
GENRES = ErrorFamily("GENRES_ERROR", "Unable to retrieve genres", "No genres found")
GENERIC = ErrorFamily("CATALOG_ERROR", "Catalog request failed", "Not found")


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse(
            status="error",
            error=APIError(code=code, message=message)
        ).model_dump()
    )


def root_cause(exc: BaseException) -> BaseException:
    """
    Walk down to the exception that started it all: into the first member of
    an exception group, then along explicit `raise ... from` chains.
    """
    seen = set()
    while id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(exc, BaseExceptionGroup) and exc.exceptions:
            exc = exc.exceptions[0]
        elif exc.__cause__ is not None:
            exc = exc.__cause__
        else:
            break
    return exc


def to_response(outcome: Outcome, family: ErrorFamily, operation: str) -> JSONResponse:
    """
    Map a lookup or query outcome to the HTTP response the client sees.

    A malformed id answers exactly like a missing one. Store failures keep the
    store's status code; anything else is a 500. Clients only ever get the
    family's fixed message, the details go to the log.
    """
    if isinstance(outcome, Ok):
        return JSONResponse(status_code=200, content=jsonable_encoder(outcome.value))

    if isinstance(outcome, (NotFound, MalformedIdentifier)):
        logger.info("NotFound:%s", operation)
        return error_response(404, "NOT_FOUND", family.not_found)

    if isinstance(outcome, TransientBackendError):
        logger.error(
            "StoreError:%s:%s:%s:%s",
            operation, outcome.status_code, outcome.activity_id, outcome.message
        )
        return error_response(outcome.status_code, family.code, family.message)

    if isinstance(outcome, Unexpected):
        root = root_cause(outcome.cause)
        logger.error(
            "Exception|%s|%s|%s",
            operation, type(root).__name__, root,
            exc_info=(type(root), root, root.__traceback__)
        )
        return error_response(500, family.code, family.message)

    raise TypeError(f"Unhandled outcome {outcome!r}")


async def catalog_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, CatalogError)

    logger.error("%s|%s|%s", request.url.path, exc.code, exc.details)

    # class level message only, instance messages can carry store text
    return error_response(exc.status_code, exc.code, type(exc).message)


async def unhandled_error_handler(request: Request, exc: Exception):
    root = root_cause(exc)
    logger.error(
        "Exception|%s|%s|%s",
        request.url.path, type(root).__name__, root,
        exc_info=(type(root), root, root.__traceback__)
    )

    return error_response(500, GENERIC.code, GENERIC.message)


async def validation_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, RequestValidationError)

    # only the parameter names go to the log, never the raw values
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    logger.info("InvalidQuery|%s|%s", request.url.path, ",".join(fields))

    return error_response(InvalidQueryError.status_code, InvalidQueryError.code, InvalidQueryError.message)
