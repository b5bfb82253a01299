"""Input validation and sanitization for submissions.

Each check returns ``(valid, reason)``. ``first_failure`` runs them in form
order and reports the first one that fails.
"""

import html
import re
from dataclasses import dataclass
from typing import Any

from .attachments import Upload
from .config import ALLOWED_FILE_TYPES, MAX_FILE_SIZE
from .errors import ValidationError

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"[0-9+\-\s()]{10,15}")
MIN_MESSAGE_LENGTH = 10


@dataclass(frozen=True)
class Submission:
    """Raw form input as collected from the submitter."""

    email: str
    department: str
    category: str
    message: str
    name: str = ""
    phone: str = ""
    anonim: bool = False
    upload: Upload | None = None


def sanitize(value: Any) -> Any:
    """Escape HTML special characters in a string; other values pass through."""
    if not isinstance(value, str):
        return value
    return html.escape(value, quote=True)


def validate_name(name: str, anonim: bool) -> tuple[bool, str | None]:
    if not name.strip() and not anonim:
        return False, "Harap isi nama lengkap atau centang anonim."
    return True, None


def validate_email(email: str) -> tuple[bool, str | None]:
    if not EMAIL_RE.fullmatch(email):
        return False, "Email tidak valid."
    return True, None


def validate_phone(phone: str) -> tuple[bool, str | None]:
    """Phone is optional; when given it must look like a phone number."""
    if not phone:
        return True, None
    if not PHONE_RE.fullmatch(phone):
        return False, "Nomor telepon tidak valid."
    return True, None


def validate_department(department: str) -> tuple[bool, str | None]:
    if not department.strip():
        return False, "Harap pilih departemen tujuan."
    return True, None


def validate_category(category: str) -> tuple[bool, str | None]:
    if not category.strip():
        return False, "Harap pilih kategori."
    return True, None


def validate_message(message: str) -> tuple[bool, str | None]:
    if len(message.strip()) < MIN_MESSAGE_LENGTH:
        return False, f"Isi aspirasi minimal {MIN_MESSAGE_LENGTH} karakter."
    return True, None


def validate_file(
    upload: Upload,
    max_size: int = MAX_FILE_SIZE,
    allowed_types: tuple[str, ...] = ALLOWED_FILE_TYPES,
) -> tuple[bool, str | None]:
    """Check attachment size and MIME type."""
    if upload.size > max_size:
        return False, f"Ukuran file terlalu besar. Maksimal {max_size // (1024 * 1024)}MB."
    if upload.type not in allowed_types:
        return False, "Format file tidak didukung. Gunakan PDF, JPG, PNG, atau DOC."
    return True, None


def first_failure(
    submission: Submission,
    max_size: int = MAX_FILE_SIZE,
    allowed_types: tuple[str, ...] = ALLOWED_FILE_TYPES,
) -> ValidationError | None:
    """Run every check in form order and return the first failure, if any.

    Order: name/anonymity, email, phone, department, category, message, file.
    """
    checks = [
        ("name", lambda: validate_name(submission.name, submission.anonim)),
        ("email", lambda: validate_email(submission.email)),
        ("phone", lambda: validate_phone(submission.phone)),
        ("department", lambda: validate_department(submission.department)),
        ("category", lambda: validate_category(submission.category)),
        ("message", lambda: validate_message(submission.message)),
    ]
    if submission.upload is not None:
        upload = submission.upload
        checks.append(("attachment", lambda: validate_file(upload, max_size, allowed_types)))

    for field_name, check in checks:
        valid, reason = check()
        if not valid:
            return ValidationError(field_name, reason or "Invalid value")
    return None
