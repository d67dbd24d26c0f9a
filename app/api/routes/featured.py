import logging
from fastapi import APIRouter, Request
from app.api import errors
from app.models.api_response import APIResponse
from app.models.document import MovieDocument

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "/movie",
    response_model=MovieDocument,
    responses={404: {"model": APIResponse}, 500: {"model": APIResponse}},
)
async def get_featured_movie(request: Request):
    """Returns a random movie from the featured movie list."""
    method = "GetFeaturedMovie"
    logger.info(method)

    service = request.app.state.catalog_service
    outcome = await service.featured_movie()
    return errors.to_response(outcome, errors.FEATURED, method)
