"""Domain entity for a binary upload attached to a form field."""

import base64
import mimetypes
from dataclasses import dataclass


@dataclass(frozen=True)
class Attachment:
    """A chosen file (image or KYC document) waiting to be uploaded.

    Attachments only exist client-side until the write that carries them
    succeeds; after that the server refers to the stored file by path.
    """

    filename: str
    content: bytes
    content_type: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.filename or not self.content

    @property
    def media_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"

    def data_url(self) -> str:
        """Inline preview of the file, computed locally without any I/O."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"

    def as_upload(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.media_type)
