"""
Inventory Service — Item Lifecycle Unit Tests
==============================================

What:  Tests for InventoryService business logic without HTTP.
How:   Each test gets its own service and temporary cache directory.

What we test:
    ✅ Registration validation and sequential, never-reused ids
    ✅ Partial updates (absent vs present fields)
    ✅ Photo replacement, lookup and the three photo-not-found cases
    ✅ Delete semantics and search projection
"""

import pytest

from inventory_app.exceptions import NotFoundError, ValidationError
from inventory_app.schemas.inventory import ItemUpdate
from inventory_app.services.inventory_service import coerce_item_id, is_truthy
from inventory_app.services.photo_service import PhotoUpload


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_defaults(self, inventory_service):
        item = await inventory_service.register("Hammer")
        assert item.id == 1
        assert item.name == "Hammer"
        assert item.description == ""
        assert item.photo is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, "", "   ", "\t\n"])
    async def test_blank_name_rejected(self, inventory_service, name):
        with pytest.raises(ValidationError, match="inventory_name"):
            await inventory_service.register(name, "desc")
        assert len(inventory_service) == 0

    @pytest.mark.asyncio
    async def test_blank_name_writes_no_photo(self, inventory_service, cache_dir):
        with pytest.raises(ValidationError):
            await inventory_service.register(" ", photo=PhotoUpload("a.jpg", b"data"))
        assert list(cache_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_ids_sequential(self, inventory_service):
        ids = [(await inventory_service.register(f"item {i}")).id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, inventory_service):
        await inventory_service.register("a")
        second = await inventory_service.register("b")
        inventory_service.delete(second.id)
        third = await inventory_service.register("c")
        assert third.id == 3

    @pytest.mark.asyncio
    async def test_register_with_photo(self, inventory_service, photo_service, sample_image_bytes):
        item = await inventory_service.register(
            "Camera", "Old one", PhotoUpload("camera.jpg", sample_image_bytes)
        )
        assert item.photo.endswith(".jpg")
        assert photo_service.path_for(item.photo).read_bytes() == sample_image_bytes


class TestListAndGet:

    @pytest.mark.asyncio
    async def test_list_empty(self, inventory_service):
        assert await inventory_service.list_items() == []

    @pytest.mark.asyncio
    async def test_list_insertion_order(self, inventory_service):
        for name in ("c", "a", "b"):
            await inventory_service.register(name)
        views = await inventory_service.list_items()
        assert [v.name for v in views] == ["c", "a", "b"]
        assert all(v.photo_url is None for v in views)

    @pytest.mark.asyncio
    async def test_get_with_photo(self, inventory_service):
        item = await inventory_service.register("Lamp", photo=PhotoUpload("lamp.png", b"png"))
        view = await inventory_service.get_item(item.id)
        assert view.photo == item.photo
        assert view.photo_url == f"/inventory/{item.id}/photo"

    @pytest.mark.asyncio
    async def test_get_photo_url_null_when_file_missing(self, inventory_service, photo_service):
        item = await inventory_service.register("Lamp", photo=PhotoUpload("lamp.png", b"png"))
        photo_service.path_for(item.photo).unlink()
        view = await inventory_service.get_item(item.id)
        assert view.photo == item.photo
        assert view.photo_url is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", [42, "42", "abc", "1.5", "-1", "²", "١", None, True])
    async def test_get_unknown(self, inventory_service, raw_id):
        await inventory_service.register("only")
        with pytest.raises(NotFoundError):
            await inventory_service.get_item(raw_id)

    @pytest.mark.asyncio
    async def test_get_accepts_string_id(self, inventory_service):
        await inventory_service.register("only")
        view = await inventory_service.get_item(" 1 ")
        assert view.id == 1


class TestUpdateFields:

    @pytest.mark.asyncio
    async def test_description_only(self, inventory_service):
        item = await inventory_service.register("Saw", "old")
        inventory_service.update_fields(item.id, ItemUpdate.model_validate({"description": "new"}))
        assert item.name == "Saw"
        assert item.description == "new"

    @pytest.mark.asyncio
    async def test_name_only(self, inventory_service):
        item = await inventory_service.register("Saw", "old")
        inventory_service.update_fields(item.id, ItemUpdate.model_validate({"name": "Big saw"}))
        assert item.name == "Big saw"
        assert item.description == "old"

    @pytest.mark.asyncio
    async def test_present_but_empty_applied(self, inventory_service):
        item = await inventory_service.register("Saw", "old")
        inventory_service.update_fields(item.id, ItemUpdate.model_validate({"description": ""}))
        assert item.description == ""

    @pytest.mark.asyncio
    async def test_blank_name_allowed_on_update(self, inventory_service):
        """Registration rejects blank names; updates do not re-check."""
        item = await inventory_service.register("Saw")
        inventory_service.update_fields(item.id, ItemUpdate.model_validate({"name": ""}))
        assert item.name == ""

    @pytest.mark.asyncio
    async def test_null_fields_left_alone(self, inventory_service):
        """An explicit null counts as absent; the stored values never become None."""
        item = await inventory_service.register("Saw", "old")
        changes = ItemUpdate.model_validate({"name": None, "description": None})
        assert changes.model_fields_set == {"name", "description"}

        inventory_service.update_fields(item.id, changes)

        assert item.name == "Saw"
        assert item.description == "old"

    def test_unknown_id(self, inventory_service):
        with pytest.raises(NotFoundError):
            inventory_service.update_fields(999, ItemUpdate())


class TestPhotos:

    @pytest.mark.asyncio
    async def test_update_photo_keeps_old_file(self, inventory_service, photo_service):
        item = await inventory_service.register("Vase", photo=PhotoUpload("v1.jpg", b"one"))
        old = item.photo

        updated = await inventory_service.update_photo(item.id, PhotoUpload("v2.png", b"two"))

        assert updated.photo != old
        assert updated.photo.endswith(".png")
        assert photo_service.path_for(old).exists()
        assert photo_service.path_for(updated.photo).read_bytes() == b"two"

    @pytest.mark.asyncio
    async def test_update_photo_unknown_id_checked_first(self, inventory_service):
        with pytest.raises(NotFoundError):
            await inventory_service.update_photo(5, None)

    @pytest.mark.asyncio
    async def test_update_photo_requires_file(self, inventory_service):
        item = await inventory_service.register("Vase")
        with pytest.raises(ValidationError, match="No photo"):
            await inventory_service.update_photo(item.id, None)

    @pytest.mark.asyncio
    async def test_photo_path(self, inventory_service, photo_service):
        item = await inventory_service.register("Vase", photo=PhotoUpload("v.jpg", b"x"))
        path = await inventory_service.get_photo_path(item.id)
        assert path == photo_service.path_for(item.photo)

    @pytest.mark.asyncio
    async def test_photo_path_not_found_cases(self, inventory_service, photo_service):
        with pytest.raises(NotFoundError):
            await inventory_service.get_photo_path(1)

        bare = await inventory_service.register("No photo")
        with pytest.raises(NotFoundError, match="no photo"):
            await inventory_service.get_photo_path(bare.id)

        gone = await inventory_service.register("Gone", photo=PhotoUpload("g.jpg", b"x"))
        photo_service.path_for(gone.photo).unlink()
        with pytest.raises(NotFoundError, match="not found"):
            await inventory_service.get_photo_path(gone.id)


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_returns_copy(self, inventory_service):
        item = await inventory_service.register("Drill", "cordless")
        deleted = inventory_service.delete(item.id)
        assert deleted == item
        assert deleted is not item
        assert len(inventory_service) == 0

    @pytest.mark.asyncio
    async def test_delete_twice(self, inventory_service):
        item = await inventory_service.register("Drill")
        inventory_service.delete(item.id)
        with pytest.raises(NotFoundError):
            inventory_service.delete(item.id)
        with pytest.raises(NotFoundError):
            await inventory_service.get_item(item.id)

    @pytest.mark.asyncio
    async def test_delete_keeps_photo_file(self, inventory_service, photo_service):
        item = await inventory_service.register("Drill", photo=PhotoUpload("d.jpg", b"x"))
        inventory_service.delete(item.id)
        assert photo_service.path_for(item.photo).exists()


class TestSearch:

    @pytest.mark.asyncio
    async def test_without_photo_flag(self, inventory_service):
        await inventory_service.register("Rope", "10m", photo=PhotoUpload("r.jpg", b"x"))
        result = await inventory_service.search("1", include_photo_url=False)
        assert result.model_dump(exclude_unset=True) == {
            "id": 1,
            "name": "Rope",
            "description": "10m",
        }

    @pytest.mark.asyncio
    async def test_with_photo_flag_and_photo(self, inventory_service):
        await inventory_service.register("Rope", photo=PhotoUpload("r.jpg", b"x"))
        result = await inventory_service.search(1, include_photo_url=True)
        assert result.model_dump(exclude_unset=True)["photo_url"] == "/inventory/1/photo"

    @pytest.mark.asyncio
    async def test_with_photo_flag_no_photo(self, inventory_service):
        await inventory_service.register("Rope")
        result = await inventory_service.search(1, include_photo_url="on")
        dumped = result.model_dump(exclude_unset=True)
        assert "photo_url" in dumped
        assert dumped["photo_url"] is None

    @pytest.mark.asyncio
    async def test_unknown(self, inventory_service):
        with pytest.raises(NotFoundError):
            await inventory_service.search(3, include_photo_url=True)


class TestHelpers:

    @pytest.mark.parametrize("value, expected", [
        (True, True), (False, False), (1, True), (0, False), (None, False),
        ("on", True), ("true", True), ("TRUE", True), ("1", True), ("yes", True),
        ("false", False), ("off", False), ("", False), ("0", False),
    ])
    def test_is_truthy(self, value, expected):
        assert is_truthy(value) is expected

    def test_coerce_item_id(self):
        assert coerce_item_id(7) == 7
        assert coerce_item_id("007") == 7
        with pytest.raises(NotFoundError):
            coerce_item_id("7a")
