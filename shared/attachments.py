"""
Uploaded images (cart screenshots, payment proofs) and the checks they
must pass before anything is written to storage.
"""
import base64
from dataclasses import dataclass

from fastapi import UploadFile

from shared.config import settings
from shared.errors import ValidationError

MAX_ATTACHMENT_BYTES = settings.MAX_ATTACHMENT_MB * 1024 * 1024


@dataclass(frozen=True)
class Attachment:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


def validate_attachment(attachment: Attachment, label: str = "file") -> Attachment:
    if attachment is None or attachment.size == 0:
        raise ValidationError(f"Please upload a {label}.")
    if attachment.size > MAX_ATTACHMENT_BYTES:
        raise ValidationError(f"File size cannot exceed {settings.MAX_ATTACHMENT_MB}MB.")
    if attachment.content_type not in settings.ALLOWED_ATTACHMENT_TYPES:
        raise ValidationError("Invalid file type. Please upload a PNG, JPEG, or WEBP image.")
    return attachment


async def attachment_from_upload(upload: UploadFile) -> Attachment:
    data = await upload.read()
    return Attachment(
        filename=upload.filename or "upload",
        content_type=upload.content_type or "application/octet-stream",
        data=data,
    )
