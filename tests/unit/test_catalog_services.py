"""Unit tests for the category and subcategory services."""

import pytest

from admin_dashboard.application.services import CategoryService, SubCategoryService
from admin_dashboard.domain.entities import Attachment, FormMode
from admin_dashboard.domain.exceptions import (
    ConfirmationRequiredError,
    EntityNotFoundError,
    ValidationFailedError,
)


@pytest.mark.asyncio
async def test_subcategories_carry_category_name(backend, api):
    backend.collections["/subcategories"] = {"data": [
        {"id": 5, "subcategory_name": "Granite", "category_id": 2, "image": "/uploads/g.png"},
        {"id": 6, "subcategory_name": "Orphan", "category_id": 77},
    ]}
    backend.collections["/categories"] = {"categories": [{"id": 2, "category_name": "Stone"}]}
    service = SubCategoryService(api)

    granite, orphan = await service.list_subcategories()

    assert granite["category_name"] == "Stone"
    assert granite["image_url"] == "http://marketplace.test/uploads/g.png"
    assert orphan["category_name"] == "N/A"


@pytest.mark.asyncio
async def test_subcategory_requires_name_and_category(backend, api):
    form = SubCategoryService.new_form()
    form.set_field("subcategory_name", "  ")

    with pytest.raises(ValidationFailedError) as info:
        await SubCategoryService(api).create_subcategory(form)

    assert set(info.value.errors) == {"subcategory_name", "category_id"}
    assert backend.requests == []


@pytest.mark.asyncio
async def test_subcategory_create_accepts_numeric_category(backend, api):
    backend.collections["/subcategories"] = []
    backend.on("POST", "/subcategory", json={"message": "created"})
    form = SubCategoryService.new_form()
    form.set_fields({"subcategory_name": "Marble", "category_id": 2})

    await SubCategoryService(api).create_subcategory(form)

    sent = backend.calls("POST", "/subcategory")[0]
    assert sent.fields == {"subcategory_name": "Marble", "category_id": "2"}
    assert sent.files == {}


@pytest.mark.asyncio
async def test_subcategory_edit_form(backend, api):
    backend.on("GET", "/subcategory/5", json={"subcategory": {
        "id": 5, "subcategory_name": "Granite", "category_id": 2, "image": "g.png",
    }})

    form = await SubCategoryService(api).edit_form(5)

    assert form.mode is FormMode.EDIT
    assert form.draft.fields == {"subcategory_name": "Granite", "category_id": 2}
    assert form.draft.previews == {"image": "http://marketplace.test/uploads/g.png"}


@pytest.mark.asyncio
async def test_missing_subcategory(api):
    with pytest.raises(EntityNotFoundError, match="Subcategory"):
        await SubCategoryService(api).get_subcategory(404)


@pytest.mark.asyncio
async def test_category_image_required_only_on_create(backend, api):
    service = CategoryService(api)
    create = service.new_form()
    create.set_field("category_name", "Tiles")

    with pytest.raises(ValidationFailedError) as info:
        await service.create_category(create)
    assert info.value.errors == {"image": "Please select an image."}

    backend.collections["/categories"] = []
    backend.on("PATCH", "/category/2", json={"message": "updated"})
    edit = service.new_form(FormMode.EDIT)
    edit.set_field("category_name", "  Tiles ")

    await service.update_category(2, edit)

    assert backend.calls("PATCH", "/category/2")[0].fields == {"category_name": "Tiles"}


@pytest.mark.asyncio
async def test_category_create_uploads_image(backend, api):
    backend.collections["/categories"] = [{"id": 1, "category_name": "Tiles", "image": "t.png"}]
    backend.on("POST", "/category", json={"message": "Category created"})
    service = CategoryService(api)
    form = service.new_form()
    form.set_field("category_name", "Tiles")
    form.set_file("image", Attachment("t.png", b"png"))

    await service.create_category(form)

    assert backend.calls("POST", "/category")[0].files == {"image": ("t.png", b"png")}
    assert service.store.records[0]["category_name"] == "Tiles"


@pytest.mark.asyncio
async def test_category_delete_needs_confirmation(backend, api):
    with pytest.raises(ConfirmationRequiredError):
        await CategoryService(api).delete_category(1, confirmed=False)
    assert backend.requests == []
