"""Unit tests for form validation and draft handling."""

import pytest

from admin_dashboard.application.services.form_controller import (
    FormController,
    is_valid_email,
    is_valid_mobile,
)
from admin_dashboard.domain.entities import Attachment, FormMode


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ("9876543210", True),
        ("98765-43210", True),
        ("(987) 654 3210", True),
        ("987654321", False),
        ("98765432101", False),
        ("", False),
        ("   ", False),
        (None, False),
    ],
)
def test_is_valid_mobile(value, valid):
    assert is_valid_mobile(value) is valid


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ("a@b.co", True),
        ("  buyer@example.com  ", True),
        ("no-at-sign.com", False),
        ("two@@example.com", False),
        ("missing@tld", False),
        ("spaces in@example.com", False),
        ("", False),
    ],
)
def test_is_valid_email(value, valid):
    assert is_valid_email(value) is valid


def _buyer_form(mode=FormMode.CREATE, **fields) -> FormController:
    form = FormController(
        mode,
        entity="buyer",
        required=("name", "mobile", "email"),
        password_field="password",
    )
    form.set_fields(fields)
    return form


def test_create_requires_password():
    form = _buyer_form(name="Asha", mobile="9876543210", email="asha@example.com", password="")
    result = form.validate()
    assert not result.valid
    assert result.errors == {"password": "Password is required for new buyers"}


def test_edit_allows_empty_password():
    form = _buyer_form(
        FormMode.EDIT, name="Asha", mobile="9876543210", email="asha@example.com", password=""
    )
    assert form.validate().valid


def test_required_messages():
    result = _buyer_form(name="  ", mobile="", email="", password="x").validate()
    assert result.errors == {
        "name": "Name is required",
        "mobile": "Mobile number is required",
        "email": "Email is required",
    }


def test_format_messages():
    result = _buyer_form(name="A", mobile="12345", email="bad", password="x").validate()
    assert result.errors["mobile"] == "Please enter a valid 10-digit mobile number"
    assert result.errors["email"] == "Please enter a valid email address"


def test_errors_are_stored_on_the_draft():
    form = _buyer_form(name="", mobile="9876543210", email="a@b.co", password="x")
    form.validate()
    assert form.errors == {"name": "Name is required"}


def test_required_file_only_on_create():
    create = FormController(entity="slider", required_files_on_create=("banner_image",))
    assert create.validate().errors == {"banner_image": "Please select a banner image."}

    edit = FormController(FormMode.EDIT, entity="slider", required_files_on_create=("banner_image",))
    assert edit.validate().valid


def test_numeric_required_value_counts_as_filled():
    form = FormController(required=("category_id",), initial={"category_id": 3})
    assert form.validate().valid


def test_set_file_computes_preview_and_empty_file_clears_it():
    form = FormController()
    form.set_file("image", Attachment("a.png", b"abc"))
    assert form.draft.previews["image"].startswith("data:image/png;base64,")
    assert form.draft.has_file("image")

    form.set_file("image", Attachment("a.png", b""))
    assert not form.draft.has_file("image")
    assert "image" not in form.draft.previews


def test_reset_discards_everything():
    form = FormController(initial={"name": "x"})
    form.set_file("image", Attachment("a.png", b"abc"))
    form.validate()
    form.reset()
    assert form.draft.fields == {}
    assert form.draft.files == {}
    assert form.draft.errors == {}
