"""Form controller — owns a FormDraft and validates it before any network dispatch."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from admin_dashboard.domain.entities import Attachment, FormDraft, FormMode, digits_only

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MOBILE_PATTERN = re.compile(r"^\d{10}$")

_REQUIRED_MESSAGES = {
    "name": "Name is required",
    "mobile": "Mobile number is required",
    "email": "Email is required",
}


def is_valid_mobile(value: Any) -> bool:
    """Exactly ten digits once every non-digit is stripped."""
    if not isinstance(value, str) or not value.strip():
        return False
    return bool(_MOBILE_PATTERN.match(digits_only(value)))


def is_valid_email(value: Any) -> bool:
    """Simple ``local@domain.tld`` shape check, not full RFC 5322."""
    if not isinstance(value, str) or not value.strip():
        return False
    return bool(_EMAIL_PATTERN.match(value.strip()))


def _label(name: str) -> str:
    return name.replace("_", " ").strip().capitalize()


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: dict[str, str] = field(default_factory=dict)


class FormController:
    """Staging area for one create/edit modal.

    ``required`` fields must be non-empty after trimming. When ``mobile`` or
    ``email`` are present in the draft they are format-checked too.
    ``password`` is mandatory only in create mode; in edit mode an empty
    password means "leave unchanged".
    """

    def __init__(
        self,
        mode: FormMode = FormMode.CREATE,
        *,
        entity: str = "record",
        required: Iterable[str] = (),
        required_files_on_create: Iterable[str] = (),
        password_field: str | None = None,
        initial: dict[str, Any] | None = None,
        original: dict[str, Any] | None = None,
        previews: dict[str, str] | None = None,
    ):
        self._entity = entity
        self._required = tuple(required)
        self._required_files = tuple(required_files_on_create)
        self._password_field = password_field
        self.draft = FormDraft(
            mode=mode,
            fields=dict(initial or {}),
            original=dict(original or {}),
            previews=dict(previews or {}),
        )

    @property
    def mode(self) -> FormMode:
        return self.draft.mode

    @property
    def errors(self) -> dict[str, str]:
        return self.draft.errors

    def set_field(self, name: str, value: Any) -> None:
        self.draft.fields[name] = value

    def set_fields(self, values: dict[str, Any]) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def set_file(self, name: str, attachment: Attachment | None) -> None:
        """Stage a chosen file and compute its local preview; ``None`` or empty clears it."""
        if attachment is None or attachment.is_empty:
            self.clear_file(name)
            return
        self.draft.files[name] = attachment
        self.draft.previews[name] = attachment.data_url()

    def clear_file(self, name: str) -> None:
        self.draft.files.pop(name, None)
        self.draft.previews.pop(name, None)

    def validate(self) -> ValidationResult:
        draft = self.draft
        errors: dict[str, str] = {}

        for name in self._required:
            if not draft.text(name) and not _is_filled_scalar(draft.fields.get(name)):
                errors[name] = _REQUIRED_MESSAGES.get(name, f"{_label(name)} is required")

        if "mobile" not in errors and ("mobile" in self._required or draft.text("mobile")):
            if not is_valid_mobile(draft.fields.get("mobile")):
                errors["mobile"] = "Please enter a valid 10-digit mobile number"

        if "email" not in errors and ("email" in self._required or draft.text("email")):
            if not is_valid_email(draft.fields.get("email")):
                errors["email"] = "Please enter a valid email address"

        if self._password_field and not draft.is_edit and not draft.text(self._password_field):
            errors[self._password_field] = f"Password is required for new {self._entity}s"

        if not draft.is_edit:
            for name in self._required_files:
                if not draft.has_file(name):
                    label = _label(name).lower()
                    article = "an" if label[0] in "aeiou" else "a"
                    errors[name] = f"Please select {article} {label}."

        draft.errors = errors
        return ValidationResult(valid=not errors, errors=dict(errors))

    def reset(self) -> None:
        """Discard the draft, its files, previews and errors."""
        self.draft = FormDraft(mode=self.draft.mode)


def _is_filled_scalar(value: Any) -> bool:
    # ids and numbers arrive as ints from JSON-bound callers
    return isinstance(value, (int, float)) and not isinstance(value, bool)
