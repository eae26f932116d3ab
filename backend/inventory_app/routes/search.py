"""
Inventory Service — Search Route Handler
=========================================

What:  POST /search, the lookup behind SearchForm.html.
How:   Accepts the form post (id, has_photo checkbox) or an equivalent JSON
       body and returns a partial item view.

Response shape:
    has_photo falsy  → {id, name, description}
    has_photo truthy → {id, name, description, photo_url}  (photo_url may be null)
"""

import logging

from fastapi import APIRouter, Depends, Request

from inventory_app.routes.deps import get_inventory_service, read_payload
from inventory_app.schemas.inventory import ErrorResponse, SearchRequest, SearchResult
from inventory_app.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.post(
    "/search",
    response_model=SearchResult,
    response_model_exclude_unset=True,
    responses={404: {"description": "Item not found", "model": ErrorResponse}},
    summary="Look up an item by ID",
)
async def search_item(
    request: Request,
    service: InventoryService = Depends(get_inventory_service),
) -> SearchResult:
    query = SearchRequest.model_validate(await read_payload(request))
    logger.debug("Search for id=%r has_photo=%r", query.id, query.has_photo)
    return await service.search(query.id, include_photo_url=query.has_photo)
