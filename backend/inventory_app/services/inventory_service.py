"""
Inventory Service — Item Lifecycle (Business Logic)
====================================================

What:  Owns the in-memory item collection and every operation on it.
Why:   Keeps record lifecycle rules out of the HTTP layer so they can be
       tested without a server.
How:   One instance per application (see create_app); nothing is global,
       so each test gets an isolated collection.

Operations:
    register       → new record, sequential id
    list_items     → every record as an ItemView, insertion order
    get_item       → one ItemView
    update_fields  → partial update of name/description
    update_photo   → replace the stored photo
    get_photo_path → path of a photo that exists on disk
    delete         → remove and return the record
    search         → partial view, photo link on request

Concurrency:
    Handlers run on a single event loop. Each lookup-then-mutate sequence
    below runs without an `await` between lookup and mutation, and the lock
    covers id assignment and structural changes for callers on other threads.
    File I/O is awaited outside the lock.
"""

import copy
import logging
import threading
from pathlib import Path
from typing import Any, List, Optional

from inventory_app.exceptions import NotFoundError, ValidationError
from inventory_app.models.item import InventoryItem
from inventory_app.schemas.inventory import ItemUpdate, ItemView, SearchResult
from inventory_app.services.photo_service import PhotoService, PhotoUpload

logger = logging.getLogger(__name__)

_TRUTHY_STRINGS = {"true", "on", "1", "yes"}


def coerce_item_id(raw: Any) -> int:
    """
    Normalize an id from a path parameter or request field.

    Anything that is not a non-negative integer (or a string of ASCII digits) can
    never match a record, so it is reported as an unknown item. Only ASCII
    digits count.
    """
    if isinstance(raw, bool):
        raise NotFoundError(resource="item", resource_id=str(raw))
    if isinstance(raw, int):
        return raw
    text = str(raw).strip() if raw is not None else ""
    # ASCII only: isdigit() also accepts "²" and friends, which int() rejects
    if not (text.isascii() and text.isdigit()):
        raise NotFoundError(resource="item", resource_id=text or None)
    return int(text)


def is_truthy(value: Any) -> bool:
    """Interpret a has_photo flag sent as JSON boolean/number or form string."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    return bool(value)


class InventoryService:
    """
    Business logic layer for inventory items.

    Error Handling Strategy:
        Unknown ids raise NotFoundError, bad input raises ValidationError.
        Photo storage errors (FileStorageError) propagate from PhotoService.
    """

    def __init__(self, photo_service: PhotoService):
        self.photos = photo_service
        self._items: List[InventoryItem] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    # ── Lookup helpers ────────────────────────────────────────────────────

    def _find(self, item_id: int) -> Optional[InventoryItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def require(self, raw_id: Any) -> InventoryItem:
        """The live record for `raw_id`; NotFoundError if there is none."""
        item_id = coerce_item_id(raw_id)
        item = self._find(item_id)
        if item is None:
            raise NotFoundError(resource="item", resource_id=str(item_id))
        return item

    async def _photo_url(self, item: InventoryItem) -> Optional[str]:
        if item.photo and await self.photos.exists(item.photo):
            return item.photo_url
        return None

    async def _view(self, item: InventoryItem) -> ItemView:
        # Snapshot first: the record may change while the existence check awaits
        snapshot = copy.copy(item)
        return ItemView(
            id=snapshot.id,
            name=snapshot.name,
            description=snapshot.description,
            photo=snapshot.photo,
            photo_url=await self._photo_url(snapshot),
        )

    # ── Operations ────────────────────────────────────────────────────────

    async def register(
        self,
        name: Optional[str],
        description: Optional[str] = None,
        photo: Optional[PhotoUpload] = None,
    ) -> InventoryItem:
        """
        Create a new item.

        Raises:
            ValidationError: name missing or blank (collection unchanged)
            FileStorageError: the photo could not be written
        """
        if name is None or not name.strip():
            raise ValidationError(
                message="Field inventory_name is required.",
                field="inventory_name",
            )

        filename = await self.photos.store(photo) if photo is not None else None

        with self._lock:
            item = InventoryItem(
                id=self._next_id,
                name=name,
                description=description or "",
                photo=filename,
            )
            self._next_id += 1
            self._items.append(item)

        logger.info("Item %d registered (photo=%s)", item.id, filename)
        return item

    async def list_items(self) -> List[ItemView]:
        """Every item, in insertion order."""
        return [await self._view(item) for item in list(self._items)]

    async def get_item(self, raw_id: Any) -> ItemView:
        """
        Raises:
            NotFoundError: unknown id
        """
        return await self._view(self.require(raw_id))

    def update_fields(self, raw_id: Any, changes: ItemUpdate) -> InventoryItem:
        """
        Overwrite name and/or description with whatever the client sent.

        Fields absent from the request are left alone. A present name is not
        re-validated for blankness, unlike registration. An explicit null is
        treated like an absent field.
        """
        item = self.require(raw_id)
        sent = changes.model_fields_set
        if "name" in sent and changes.name is not None:
            item.name = changes.name
        if "description" in sent and changes.description is not None:
            item.description = changes.description
        logger.info("Item %d updated (fields=%s)", item.id, sorted(sent))
        return item

    async def update_photo(self, raw_id: Any, photo: Optional[PhotoUpload]) -> InventoryItem:
        """
        Replace an item's photo. The previous file stays in the cache directory.

        Raises:
            NotFoundError: unknown id (checked before the upload)
            ValidationError: no file uploaded
        """
        self.require(raw_id)
        if photo is None:
            raise ValidationError(message="No photo uploaded.", field="photo")

        filename = await self.photos.store(photo)

        # Looked up again: the item may have been deleted during the write
        item = self.require(raw_id)
        previous, item.photo = item.photo, filename
        logger.info("Item %d photo replaced: %s -> %s", item.id, previous, filename)
        return item

    async def get_photo_path(self, raw_id: Any) -> Path:
        """
        Resolve the stored photo of an item.

        Raises:
            NotFoundError: unknown id, no photo attached, or file gone from disk
        """
        item = self.require(raw_id)
        filename = item.photo
        if not filename:
            raise NotFoundError(
                resource="photo",
                message="This item has no photo.",
                context={"item_id": item.id},
            )
        if not await self.photos.exists(filename):
            logger.warning("Photo file missing for item %d: %s", item.id, filename)
            raise NotFoundError(
                resource="photo",
                message="Photo file not found.",
                context={"item_id": item.id, "photo": filename},
            )
        return self.photos.path_for(filename)

    def delete(self, raw_id: Any) -> InventoryItem:
        """
        Remove an item and return a copy of it. Its photo file is kept.

        Raises:
            NotFoundError: unknown or already deleted id
        """
        item = self.require(raw_id)
        with self._lock:
            self._items.remove(item)
        logger.info("Item %d deleted", item.id)
        return copy.copy(item)

    async def search(self, raw_id: Any, include_photo_url: Any = False) -> SearchResult:
        """
        Partial view of one item; photo_url only when asked for.

        Raises:
            NotFoundError: unknown id
        """
        item = copy.copy(self.require(raw_id))
        result = SearchResult(id=item.id, name=item.name, description=item.description)
        if is_truthy(include_photo_url):
            result.photo_url = await self._photo_url(item)
        return result
