"""
Inventory Service — Inventory Route Handlers
=============================================

What:  CRUD endpoints for inventory items and their photos.
How:   Extract request data, delegate to InventoryService, shape the response.
       Errors are raised as application exceptions and formatted by the
       global handlers in main.py.

Route Inventory:
    POST   /register               register an item (multipart, urlencoded or JSON)
    GET    /inventory              list every item
    GET    /inventory/{id}         one item
    PUT    /inventory/{id}         update name and/or description
    PUT    /inventory/{id}/photo   replace the photo (multipart)
    GET    /inventory/{id}/photo   stream the photo
    DELETE /inventory/{id}         delete an item

Item ids are taken as strings: a non-numeric id is an unknown item (404),
not a request validation failure.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import FileResponse
from pydantic import ValidationError as PydanticValidationError

from inventory_app.exceptions import ValidationError
from inventory_app.routes.deps import (
    get_inventory_service,
    is_form_request,
    read_payload,
    read_upload,
)
from inventory_app.schemas.inventory import (
    ErrorResponse,
    ItemDeletedResponse,
    ItemMutationResponse,
    ItemRecord,
    ItemUpdate,
    ItemView,
)
from inventory_app.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Inventory"])

_NOT_FOUND = {404: {"description": "Item not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid input", "model": ErrorResponse}}


@router.post(
    "/register",
    status_code=201,
    response_model=ItemMutationResponse,
    responses={**_BAD_REQUEST},
    summary="Register a new inventory item",
)
async def register_item(
    request: Request,
    inventory_name: Optional[str] = Form(default=None, description="Item name (required)"),
    description: Optional[str] = Form(default=None, description="Item description"),
    photo: Optional[UploadFile] = File(default=None, description="Optional photo"),
    service: InventoryService = Depends(get_inventory_service),
) -> ItemMutationResponse:
    """
    Register an item from RegisterForm.html, a multipart client or a JSON body.

    inventory_name is declared optional so a missing name reaches the service
    and comes back as a 400 with the usual error body instead of a 422.
    A JSON body carries the same two text fields; it cannot carry a photo.
    """
    if not is_form_request(request):
        payload = await read_payload(request)
        inventory_name = payload.get("inventory_name")
        description = payload.get("description")
        for field, value in (("inventory_name", inventory_name), ("description", description)):
            if value is not None and not isinstance(value, str):
                raise ValidationError(message=f"Field {field} must be a string.", field=field)

    upload = await read_upload(photo)
    item = await service.register(
        name=inventory_name,
        description=description,
        photo=upload,
    )
    return ItemMutationResponse(
        message="Item registered successfully",
        item=ItemRecord.model_validate(item),
    )


@router.get(
    "/inventory",
    response_model=List[ItemView],
    summary="List all inventory items",
)
async def list_items(
    service: InventoryService = Depends(get_inventory_service),
) -> List[ItemView]:
    return await service.list_items()


@router.get(
    "/inventory/{item_id}",
    response_model=ItemView,
    responses={**_NOT_FOUND},
    summary="Get a single inventory item",
)
async def get_item(
    item_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> ItemView:
    return await service.get_item(item_id)


@router.put(
    "/inventory/{item_id}",
    response_model=ItemMutationResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Update an item's name and/or description",
)
async def update_item(
    item_id: str,
    request: Request,
    service: InventoryService = Depends(get_inventory_service),
) -> ItemMutationResponse:
    """
    Partial update. Only the fields present in the body are changed.

    The body is decoded by hand rather than declared as a model parameter so
    that an unknown id is reported as 404 whatever the body looks like.
    """
    payload = await read_payload(request)
    service.require(item_id)
    try:
        changes = ItemUpdate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Fields name and description must be strings.",
            context={"errors": e.errors(include_url=False)},
        )
    item = service.update_fields(item_id, changes)
    return ItemMutationResponse(
        message="Item updated successfully",
        item=ItemRecord.model_validate(item),
    )


@router.put(
    "/inventory/{item_id}/photo",
    response_model=ItemMutationResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Replace an item's photo",
)
async def update_item_photo(
    item_id: str,
    photo: Optional[UploadFile] = File(default=None, description="New photo"),
    service: InventoryService = Depends(get_inventory_service),
) -> ItemMutationResponse:
    upload = await read_upload(photo)
    item = await service.update_photo(item_id, upload)
    return ItemMutationResponse(
        message="Photo updated successfully",
        item=ItemRecord.model_validate(item),
    )


@router.get(
    "/inventory/{item_id}/photo",
    response_class=FileResponse,
    responses={
        200: {"description": "Photo file"},
        **_NOT_FOUND,
    },
    summary="Fetch an item's photo",
)
async def get_item_photo(
    item_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> FileResponse:
    """Content type is guessed from the stored file's extension."""
    path = await service.get_photo_path(item_id)
    return FileResponse(path=str(path))


@router.delete(
    "/inventory/{item_id}",
    response_model=ItemDeletedResponse,
    responses={**_NOT_FOUND},
    summary="Delete an inventory item",
)
async def delete_item(
    item_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> ItemDeletedResponse:
    deleted = service.delete(item_id)
    return ItemDeletedResponse(
        message="Item deleted successfully",
        deleted=ItemRecord.model_validate(deleted),
    )
