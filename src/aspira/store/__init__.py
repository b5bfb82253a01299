"""Local submission store."""

from .models import (
    ALL_CATEGORIES,
    ANONYMOUS_NAME,
    AspirationRecord,
    Attachment,
    CreateResult,
    NewAspiration,
    Page,
    Status,
    StoreContainer,
    TrackingEntry,
    format_date,
    status_label,
)
from .storage import JsonFileStorage, MemoryStorage, Storage
from .store import ASPIRATIONS_KEY, TRACKING_KEY, AspirationStore
from .tracking import generate_tracking_code, is_tracking_code

__all__ = [
    "ALL_CATEGORIES",
    "ANONYMOUS_NAME",
    "ASPIRATIONS_KEY",
    "AspirationRecord",
    "AspirationStore",
    "Attachment",
    "CreateResult",
    "JsonFileStorage",
    "MemoryStorage",
    "NewAspiration",
    "Page",
    "Status",
    "Storage",
    "StoreContainer",
    "TRACKING_KEY",
    "TrackingEntry",
    "format_date",
    "generate_tracking_code",
    "is_tracking_code",
    "status_label",
]
