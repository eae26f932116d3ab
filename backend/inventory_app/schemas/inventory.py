"""
Inventory Service — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract of the inventory endpoints.
Why:   Input validation, serialization and OpenAPI docs from one definition.

Design Decision:
    Schemas are separate from the in-memory InventoryItem because the API
    exposes a computed field (photo_url) whose value depends on the state of
    the cache directory, not only on the record.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ItemRecord(BaseModel):
    """
    What:  The stored record, exactly as kept by the service.
    Who:   Embedded in register, update and delete responses.
    """
    id: int = Field(description="Sequential item identifier (starts at 1, never reused)")
    name: str = Field(description="Item name")
    description: str = Field(default="", description="Free-form description")
    photo: Optional[str] = Field(
        default=None,
        description="Generated filename of the stored photo (null if none)",
    )

    model_config = {"from_attributes": True}


class ItemView(ItemRecord):
    """
    What:  Client-facing projection of a record with a computed photo link.
    Who:   Returned by GET /inventory and GET /inventory/{id}.

    photo_url is null when no photo was attached or the stored file can no
    longer be found in the cache directory.
    """
    photo_url: Optional[str] = Field(
        default=None,
        description="Path to fetch the photo from, e.g. /inventory/1/photo",
    )


class ItemMutationResponse(BaseModel):
    """Returned by POST /register, PUT /inventory/{id} and PUT /inventory/{id}/photo."""
    message: str = Field(description="Human-readable success message")
    item: ItemRecord


class ItemDeletedResponse(BaseModel):
    """Returned by DELETE /inventory/{id}."""
    message: str = Field(description="Human-readable success message")
    deleted: ItemRecord


class SearchResult(BaseModel):
    """
    What:  Partial item view returned by POST /search.

    photo_url is only part of the payload when the caller asked for it; the
    route serializes with exclude_unset so an unrequested link never appears
    while a requested-but-missing one is an explicit null.
    """
    id: int
    name: str
    description: str
    photo_url: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ItemUpdate(BaseModel):
    """
    What:  Partial update for PUT /inventory/{id}.
    How:   `model_fields_set` tells which keys the client actually sent, so an
           absent field is left untouched while a present one (even "") wins.
    """
    name: Optional[str] = None
    description: Optional[str] = None

    model_config = {"extra": "ignore"}


class SearchRequest(BaseModel):
    """
    What:  Body of POST /search (JSON or SearchForm.html form fields).

    id and has_photo stay loosely typed: the form posts strings ("3", "on"),
    JSON clients post numbers and booleans. The service normalizes both.
    """
    id: Any = None
    has_photo: Any = False

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every failure.

    Example:
        {
            "error": "Item with ID '7' was not found",
            "code": "not_found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
