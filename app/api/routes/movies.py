import logging
from typing import List
from fastapi import APIRouter, Query, Request
from app.api import errors
from app.api.request_log import describe_request
from app.models.api_response import APIResponse
from app.models.document import MovieDocument
from app.models.search_query import MovieSearchParams

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "",
    response_model=List[MovieDocument],
    responses={500: {"model": APIResponse}},
)
async def get_movies(
    request: Request,
    q: str = Query("", description="Term searched for in the movie title (rings)"),
    genre: str = Query("", description="Movies of a genre (Action)"),
    year: int = Query(0, description="Movies released in a year (2005)"),
    rating: float = Query(0, description="Movies with a rating >= rating (8.5)"),
    top_rated: bool = Query(False, alias="topRated", description="Top rated movies only"),
    actor_id: str = Query("", alias="actorId", description="Movies by actor id (nm0000704)"),
    page_number: int = Query(1, alias="pageNumber", description="1 based page index"),
    page_size: int = Query(0, alias="pageSize", description="Page size, 0 or less means the default page size (1000 max)"),
):
    """Returns a JSON array of movies, or an empty array when nothing matches."""
    method = describe_request("GetMovies", request, {
        "q": q,
        "genre": genre,
        "year": year,
        "rating": rating,
        "topRated": "true" if top_rated else None,
        "actorId": actor_id,
        "pageNumber": page_number,
        "pageSize": page_size,
    })
    logger.info(method)

    params = MovieSearchParams(
        q=q,
        genre=genre,
        year=year,
        rating=rating,
        top_rated=top_rated,
        actor_id=actor_id,
        page_number=page_number,
        page_size=page_size,
    )

    service = request.app.state.catalog_service
    outcome = await service.search_movies(params)
    return errors.to_response(outcome, errors.MOVIES, method)

@router.get(
    "/{movie_id}",
    response_model=MovieDocument,
    responses={404: {"model": APIResponse}, 500: {"model": APIResponse}},
)
async def get_movie_by_id(request: Request, movie_id: str):
    """Returns a single movie by movieId."""
    method = f"GetMovieById:{movie_id}"
    logger.info(method)

    service = request.app.state.catalog_service
    outcome = await service.get_movie(movie_id)
    return errors.to_response(outcome, errors.MOVIES, method)
