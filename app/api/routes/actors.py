import logging
from typing import List
from fastapi import APIRouter, Query, Request
from app.api import errors
from app.api.request_log import describe_request
from app.models.api_response import APIResponse
from app.models.document import ActorDocument
from app.models.search_query import ActorSearchParams

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "",
    response_model=List[ActorDocument],
    responses={500: {"model": APIResponse}},
)
async def get_actors(
    request: Request,
    q: str = Query("", description="Term searched for in the actor name (nicole)"),
    page_number: int = Query(1, alias="pageNumber", description="1 based page index"),
    page_size: int = Query(0, alias="pageSize", description="Page size, 0 or less means the default page size (1000 max)"),
):
    method = describe_request("GetActors", request, {
        "q": q,
        "pageNumber": page_number,
        "pageSize": page_size,
    })
    logger.info(method)

    params = ActorSearchParams(q=q, page_number=page_number, page_size=page_size)

    service = request.app.state.catalog_service
    outcome = await service.search_actors(params)
    return errors.to_response(outcome, errors.ACTORS, method)

@router.get(
    "/{actor_id}",
    response_model=ActorDocument,
    responses={404: {"model": APIResponse}, 500: {"model": APIResponse}},
)
async def get_actor_by_id(request: Request, actor_id: str):
    method = f"GetActorById:{actor_id}"
    logger.info(method)

    service = request.app.state.catalog_service
    outcome = await service.get_actor(actor_id)
    return errors.to_response(outcome, errors.ACTORS, method)
