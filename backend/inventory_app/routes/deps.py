"""
Inventory Service — Route Dependencies
=======================================

Helpers shared by the route modules: access to the per-app service and
body decoding for the endpoints that accept either JSON or form fields.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Request, UploadFile

from inventory_app.exceptions import ValidationError
from inventory_app.services.inventory_service import InventoryService
from inventory_app.services.photo_service import PhotoUpload

logger = logging.getLogger(__name__)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _content_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def is_form_request(request: Request) -> bool:
    """True for urlencoded and multipart bodies."""
    return _content_type(request) in _FORM_TYPES


def get_inventory_service(request: Request) -> InventoryService:
    """FastAPI dependency: the InventoryService owned by this application."""
    return request.app.state.inventory_service


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Decode a JSON or form body into a dict.

    An empty body decodes to {}. Unknown content types are ignored the same
    way, leaving the handler to treat every field as absent.

    Raises:
        ValidationError: malformed JSON or a JSON body that is not an object
    """
    if is_form_request(request):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    content_type = _content_type(request)
    body = await request.body()
    if not body.strip():
        return {}
    if content_type and content_type != "application/json" and not content_type.endswith("+json"):
        logger.debug("Ignoring body with content type %s", content_type)
        return {}

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise ValidationError(message="Malformed JSON body.", context={"error": str(e)})
    if not isinstance(payload, dict):
        raise ValidationError(message="Request body must be a JSON object.")
    return payload


async def read_upload(upload: Optional[UploadFile]) -> Optional[PhotoUpload]:
    """
    Read an uploaded file into memory.

    Browsers submit an empty, nameless part when no file was chosen; that
    counts as no upload.
    """
    if upload is None or not upload.filename:
        return None
    try:
        content = await upload.read()
    finally:
        await upload.close()
    return PhotoUpload(filename=upload.filename, content=content)
