"""Read multipart form submissions into a FormController."""

from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

from admin_dashboard.application.services import FormController
from admin_dashboard.domain.entities import Attachment


async def fill_form(form: FormController, request: Request) -> FormController:
    """Copy every text field and every non-empty upload of the request into ``form``."""
    submitted = await request.form()
    for name, value in submitted.multi_items():
        if isinstance(value, UploadFile):
            content = await value.read()
            if content:
                form.set_file(
                    name,
                    Attachment(
                        filename=value.filename or name,
                        content=content,
                        content_type=value.content_type or "",
                    ),
                )
        else:
            form.set_field(name, value)
    return form


def backend_message(result: Any, default: str) -> str:
    """The backend's own success message when it sent one."""
    if isinstance(result, dict) and isinstance(result.get("message"), str):
        return result["message"]
    return default
