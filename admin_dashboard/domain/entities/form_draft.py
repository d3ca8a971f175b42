"""Domain entity for an in-progress create/edit form."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .attachment import Attachment


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass
class FormDraft:
    """Record-shaped staging area for a create/edit modal.

    ``files`` holds only attachments chosen in this session; stored files are
    never re-sent. ``original`` is the record snapshot an edit started from.
    """

    mode: FormMode = FormMode.CREATE
    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Attachment] = field(default_factory=dict)
    previews: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    original: dict[str, Any] = field(default_factory=dict)

    @property
    def is_edit(self) -> bool:
        return self.mode is FormMode.EDIT

    def value(self, name: str, default: Any = "") -> Any:
        value = self.fields.get(name)
        return default if value is None else value

    def text(self, name: str) -> str:
        """Field value as a stripped string ('' for missing or non-string values)."""
        value = self.fields.get(name)
        return value.strip() if isinstance(value, str) else ""

    def has_file(self, name: str) -> bool:
        return name in self.files
