"""Exceptions raised by the aspiration store and its collaborators."""


class AspirationError(Exception):
    """Base class for all aspira errors."""


class ValidationError(AspirationError):
    """A submitted field failed validation.

    Attributes:
        field: Name of the offending field.
        reason: Human-readable reason shown to the submitter.
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(reason)
        self.field = field
        self.reason = reason


class AttachmentError(AspirationError):
    """An uploaded file could not be read or encoded."""


class StoreWriteError(AspirationError):
    """Persisting the store failed; nothing was committed."""


class RecordNotFound(AspirationError):
    """No aspiration exists with the requested id."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Aspiration not found: {record_id}")
        self.record_id = record_id


class ExternalServiceFailure(AspirationError):
    """An external lookup failed. Always recovered locally."""


class StoreReadError(AspirationError):
    """A persisted blob exists but cannot be read or decoded."""
