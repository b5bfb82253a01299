"""Data models for the aspiration store.

Records are persisted with camelCase keys so the JSON blobs stay readable by
the companion web front end; the dataclasses use Python names.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

ANONYMOUS_NAME = "Anonim"
ALL_CATEGORIES = "all"
SCHEMA_VERSION = 1

MONTHS_LONG = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)
MONTHS_SHORT = (
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
)


class Status(str, Enum):
    """Processing status of an aspiration."""

    PENDING = "pending"
    PROCESS = "process"
    DONE = "done"


STATUS_LABELS = {
    Status.PENDING.value: "Menunggu",
    Status.PROCESS.value: "Diproses",
    Status.DONE.value: "Selesai",
}


def status_label(status: str) -> str:
    """Display label for a status, or the raw value if unknown."""
    return STATUS_LABELS.get(status, status)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_date(value: str, long: bool = True) -> str:
    """Format an ISO timestamp as an Indonesian date, e.g. ``18 Oktober 2026``."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    months = MONTHS_LONG if long else MONTHS_SHORT
    return f"{parsed.day} {months[parsed.month - 1]} {parsed.year}"


@dataclass(frozen=True)
class Attachment:
    """An uploaded file embedded in a record.

    Attributes:
        name: Original file name.
        type: MIME type.
        size: Size in bytes.
        data: ``data:`` URI with the base64 encoded content.
    """

    name: str
    type: str
    size: int
    data: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "size": self.size, "data": self.data}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attachment":
        return cls(
            name=data.get("name", ""),
            type=data.get("type", ""),
            size=int(data.get("size", 0)),
            data=data.get("data", ""),
        )


@dataclass(frozen=True)
class NewAspiration:
    """Validated, sanitized input for ``AspirationStore.create``."""

    name: str
    email: str
    department: str
    category: str
    message: str
    phone: str = ""
    anonim: bool = False
    attachment: Attachment | None = None
    user_agent: str = ""


@dataclass
class AspirationRecord:
    """A stored aspiration."""

    id: int
    tracking_code: str
    name: str
    email: str
    phone: str
    department: str
    category: str
    message: str
    status: str
    created_at: str
    updated_at: str
    attachment: Attachment | None = None
    ip_address: str = "unknown"
    user_agent: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted camelCase layout."""
        return {
            "id": self.id,
            "trackingCode": self.tracking_code,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "department": self.department,
            "category": self.category,
            "message": self.message,
            "attachment": self.attachment.to_dict() if self.attachment else None,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "ipAddress": self.ip_address,
            "userAgent": self.user_agent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AspirationRecord":
        """Create from the persisted layout."""
        attachment = data.get("attachment")
        created_at = data.get("createdAt", "")
        return cls(
            id=int(data["id"]),
            tracking_code=data.get("trackingCode", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone") or "",
            department=data.get("department", ""),
            category=data.get("category", ""),
            message=data.get("message", ""),
            status=data.get("status", Status.PENDING.value),
            created_at=created_at,
            updated_at=data.get("updatedAt", created_at),
            attachment=Attachment.from_dict(attachment) if attachment else None,
            ip_address=data.get("ipAddress", "unknown"),
            user_agent=data.get("userAgent", ""),
        )


@dataclass(frozen=True)
class TrackingEntry:
    """Denormalized index entry for a tracking code."""

    code: str
    email: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "email": self.email, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrackingEntry":
        return cls(
            code=data.get("code", ""),
            email=data.get("email", ""),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class StoreContainer:
    """The main persisted blob: records newest first plus the id counter."""

    aspirations: list[AspirationRecord] = field(default_factory=list)
    next_id: int = 1
    last_updated: str = field(default_factory=utc_now_iso)
    schema_version: int = SCHEMA_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "aspirations": [record.to_dict() for record in self.aspirations],
            "nextId": self.next_id,
            "lastUpdated": self.last_updated,
            "schemaVersion": self.schema_version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreContainer":
        records = [AspirationRecord.from_dict(item) for item in data.get("aspirations", [])]
        next_id = int(data.get("nextId", 1))
        # Never issue an id that is already taken, even if nextId was hand-edited.
        if records:
            next_id = max(next_id, max(record.id for record in records) + 1)
        return cls(
            aspirations=records,
            next_id=next_id,
            last_updated=data.get("lastUpdated") or utc_now_iso(),
            schema_version=int(data.get("schemaVersion", SCHEMA_VERSION)),
        )


@dataclass(frozen=True)
class Page:
    """One page of a filtered listing."""

    data: list[AspirationRecord]
    total: int
    page: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [record.to_dict() for record in self.data],
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a successful ``create``."""

    tracking_code: str
    record: AspirationRecord
