"""Pydantic schemas shared by every screen's endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class RecordListResponse(BaseModel):
    """A screen's table rows plus its error banner (``None`` when the fetch succeeded)."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None
    count: int = 0


class RecordResponse(BaseModel):
    """One detail record, passed through as the backend returned it."""

    item: dict[str, Any]


class FormPrefillResponse(BaseModel):
    """Initial field values and stored-file preview URLs for an edit modal."""

    fields: dict[str, Any] = Field(default_factory=dict)
    previews: dict[str, str] = Field(default_factory=dict)


class MutationResponse(BaseModel):
    """Outcome of a create/update/delete, echoing the backend's message when it sent one."""

    message: str
    result: Any = None


class ToggleResponse(BaseModel):
    """New value of a scalar field after a successful toggle."""

    id: str
    field: str
    value: str
