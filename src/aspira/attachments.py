"""Encoding uploaded files as embeddable data URIs."""

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from .errors import AttachmentError
from .store.models import Attachment


@dataclass(frozen=True)
class Upload:
    """A raw uploaded file.

    Attributes:
        name: File name as given by the submitter.
        type: MIME type string.
        size: Size in bytes.
        content: The file bytes.
    """

    name: str
    type: str
    size: int
    content: bytes


def read_upload(path: Path) -> Upload:
    """Build an Upload from a file on disk, guessing its MIME type.

    Raises:
        AttachmentError: If the file cannot be read.
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise AttachmentError(f"Cannot read file {path}: {e}") from e

    mime_type, _ = mimetypes.guess_type(path.name)
    return Upload(
        name=path.name,
        type=mime_type or "application/octet-stream",
        size=len(content),
        content=content,
    )


def encode_attachment(upload: Upload) -> Attachment:
    """Encode an upload as ``{name, type, size, data}`` with a base64 data URI."""
    if not isinstance(upload.content, (bytes, bytearray)):
        raise AttachmentError(f"Attachment content must be bytes, got {type(upload.content).__name__}")

    encoded = base64.b64encode(upload.content).decode("ascii")
    mime_type = upload.type or "application/octet-stream"
    return Attachment(
        name=upload.name,
        type=upload.type,
        size=upload.size,
        data=f"data:{mime_type};base64,{encoded}",
    )


def decode_attachment(attachment: Attachment) -> bytes:
    """Recover the file bytes from an attachment's data URI."""
    header, sep, payload = attachment.data.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise AttachmentError("Attachment data is not a base64 data URI")
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise AttachmentError(f"Attachment data is not valid base64: {e}") from e
