import logging
from typing import List
from fastapi import APIRouter, Request
from app.api import errors
from app.models.api_response import APIResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[str], responses={500: {"model": APIResponse}})
async def get_genres(request: Request):
    method = "GetGenres"
    logger.info(method)

    service = request.app.state.catalog_service
    outcome = await service.list_genres()
    return errors.to_response(outcome, errors.GENRES, method)
