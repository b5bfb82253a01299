"""The aspiration store: records container plus tracking-code index."""

from __future__ import annotations

import asyncio
import math
import random
import time
from dataclasses import replace

from ..errors import RecordNotFound, StoreReadError, StoreWriteError
from ..logging import JSONLLogger, get_logger
from ..net import IPLookup, NullIPLookup
from .models import (
    ALL_CATEGORIES,
    ANONYMOUS_NAME,
    AspirationRecord,
    CreateResult,
    NewAspiration,
    Page,
    Status,
    StoreContainer,
    TrackingEntry,
    utc_now_iso,
)
from .storage import Storage
from .tracking import generate_tracking_code

ASPIRATIONS_KEY = "dewap_aspirations"
TRACKING_KEY = "dewap_tracking"

DEFAULT_PAGE_SIZE = 6
MAX_CODE_ATTEMPTS = 10

_WRITE_ERRORS = (OSError, TypeError, ValueError)


class AspirationStore:
    """Owns the persisted aspiration collection and its tracking index.

    Both blobs are cached after the first load. Every mutation builds new
    state, commits both blobs, and only then swaps the cache, so a failed
    write leaves the store exactly as it was. Mutations are serialized by
    an asyncio lock.
    """

    def __init__(
        self,
        storage: Storage,
        ip_lookup: IPLookup | NullIPLookup | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        rng: random.Random | None = None,
        logger: JSONLLogger | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Backend holding the two JSON blobs.
            ip_lookup: Resolves the submitter IP. Defaults to no lookup.
            page_size: Records per page for ``list``.
            rng: Random source for tracking codes.
            logger: Event logger. Defaults to the global logger.
        """
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.storage = storage
        self.ip_lookup = ip_lookup or NullIPLookup()
        self.page_size = page_size
        self._rng = rng
        self._logger = logger
        self._container: StoreContainer | None = None
        self._index: dict[str, TrackingEntry] | None = None
        self._lock = asyncio.Lock()

    @property
    def logger(self) -> JSONLLogger:
        return self._logger or get_logger()

    # -------- Lifecycle --------

    def initialize(self) -> None:
        """Create missing blobs and load both into the cache.

        Safe to call on every start; existing data is never overwritten.
        """
        container_data = self._read(ASPIRATIONS_KEY)
        if container_data is None:
            container = StoreContainer()
            self._write(ASPIRATIONS_KEY, container.to_dict(), "initialize")
        else:
            container = StoreContainer.from_dict(container_data)

        index_data = self._read(TRACKING_KEY)
        if index_data is None:
            # Records written before the index existed still get an entry
            index: dict[str, TrackingEntry] = {
                record.tracking_code: TrackingEntry(
                    code=record.tracking_code,
                    email=record.email,
                    created_at=record.created_at,
                )
                for record in container.aspirations
            }
            self._write(
                TRACKING_KEY,
                {code: entry.to_dict() for code, entry in index.items()},
                "initialize",
            )
        else:
            index = {
                code: TrackingEntry.from_dict(entry) for code, entry in index_data.items()
            }

        self._container = container
        self._index = index
        self.logger.log(
            "store_initialized",
            records=len(container.aspirations),
            next_id=container.next_id,
        )

    def reload(self) -> None:
        """Drop the cache and re-read both blobs from storage."""
        self._container = None
        self._index = None
        self.initialize()

    def flush(self) -> None:
        """Persist the cached state. Raises StoreWriteError on failure."""
        container, index = self._state()
        self._commit(container, index, "flush")

    # -------- Reads --------

    def lookup_by_code(self, code: str) -> AspirationRecord | None:
        """Find a record by exact, case-sensitive tracking code."""
        container, _ = self._state()
        return next(
            (record for record in container.aspirations if record.tracking_code == code),
            None,
        )

    def get_tracking_info(self, code: str) -> TrackingEntry | None:
        """Return the tracking index entry for a code, if it was issued."""
        _, index = self._state()
        return index.get(code)

    def list(self, filter: str = ALL_CATEGORIES, page: int = 1) -> Page:
        """Return one page of records, newest first.

        Args:
            filter: ``"all"`` or an exact category name.
            page: 1-indexed page number. Pages past the end are empty.

        Returns:
            The page with totals computed over the filtered records.
        """
        if page < 1:
            raise ValueError("page must be at least 1")

        container, _ = self._state()
        records = container.aspirations
        if filter != ALL_CATEGORIES:
            records = [record for record in records if record.category == filter]

        start = (page - 1) * self.page_size
        total = len(records)
        return Page(
            data=list(records[start:start + self.page_size]),
            total=total,
            page=page,
            total_pages=math.ceil(total / self.page_size),
        )

    def count(self) -> int:
        """Number of stored records."""
        container, _ = self._state()
        return len(container.aspirations)

    # -------- Writes --------

    async def create(self, data: NewAspiration) -> CreateResult:
        """Store a new aspiration and index its tracking code.

        Args:
            data: Validated and sanitized submission fields.

        Returns:
            The tracking code and the stored record.

        Raises:
            StoreWriteError: If either blob could not be written.
        """
        start = time.perf_counter()
        ip_address = await self.ip_lookup.get_ip()

        async with self._lock:
            container, index = self._state()
            code = self._new_tracking_code(container, index)
            timestamp = utc_now_iso()

            record = AspirationRecord(
                id=container.next_id,
                tracking_code=code,
                name=ANONYMOUS_NAME if data.anonim else data.name,
                email=data.email,
                phone=data.phone or "",
                department=data.department,
                category=data.category,
                message=data.message,
                status=Status.PENDING.value,
                created_at=timestamp,
                updated_at=timestamp,
                attachment=data.attachment,
                ip_address=ip_address,
                user_agent=data.user_agent or "",
            )

            new_container = replace(
                container,
                aspirations=[record, *container.aspirations],
                next_id=container.next_id + 1,
                last_updated=timestamp,
            )
            new_index = dict(index)
            new_index[code] = TrackingEntry(code=code, email=data.email, created_at=timestamp)

            self._commit(new_container, new_index, "create", previous=container)
            self._container = new_container
            self._index = new_index

        self.logger.log_created(
            code,
            record.id,
            category=record.category,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return CreateResult(tracking_code=code, record=record)

    async def update_status(self, record_id: int, status: str | Status) -> AspirationRecord:
        """Change the status of a record and bump its ``updatedAt``.

        Raises:
            ValueError: If status is not pending, process or done.
            RecordNotFound: If no record has this id.
            StoreWriteError: If the container could not be written.
        """
        status = Status(status).value

        async with self._lock:
            container, index = self._state()
            position = next(
                (i for i, record in enumerate(container.aspirations) if record.id == record_id),
                None,
            )
            if position is None:
                raise RecordNotFound(record_id)

            timestamp = utc_now_iso()
            previous_status = container.aspirations[position].status
            updated = replace(container.aspirations[position], status=status, updated_at=timestamp)
            records = list(container.aspirations)
            records[position] = updated
            new_container = replace(container, aspirations=records, last_updated=timestamp)

            self._commit(new_container, index, "update_status", previous=container)
            self._container = new_container

        self.logger.log(
            "status_updated",
            tracking_code=updated.tracking_code,
            record_id=record_id,
            previous=previous_status,
            status=status,
        )
        return updated

    # -------- Internals --------

    def _state(self) -> tuple[StoreContainer, dict[str, TrackingEntry]]:
        if self._container is None or self._index is None:
            self.initialize()
        assert self._container is not None and self._index is not None
        return self._container, self._index

    def _new_tracking_code(
        self, container: StoreContainer, index: dict[str, TrackingEntry]
    ) -> str:
        taken = set(index) | {record.tracking_code for record in container.aspirations}
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_tracking_code(self._rng)
            if code not in taken:
                return code
        raise StoreWriteError(
            f"Could not generate a unique tracking code after {MAX_CODE_ATTEMPTS} attempts"
        )

    def _read(self, key: str) -> dict | None:
        try:
            data = self.storage.get(key)
        except (OSError, ValueError) as e:
            raise StoreReadError(f"Cannot read '{key}': {e}") from e
        if data is not None and not isinstance(data, dict):
            raise StoreReadError(f"Cannot read '{key}': expected an object")
        return data

    def _write(self, key: str, data: dict, operation: str) -> None:
        try:
            self.storage.set(key, data)
        except _WRITE_ERRORS as e:
            self.logger.log_write_failed(operation, str(e))
            raise StoreWriteError(f"Failed to write '{key}': {e}") from e

    def _commit(
        self,
        container: StoreContainer,
        index: dict[str, TrackingEntry],
        operation: str,
        previous: StoreContainer | None = None,
    ) -> None:
        """Write the container, then the index; undo the first if the second fails."""
        container_data = container.to_dict()
        index_data = {code: entry.to_dict() for code, entry in index.items()}

        self._write(ASPIRATIONS_KEY, container_data, operation)
        try:
            self._write(TRACKING_KEY, index_data, operation)
        except StoreWriteError:
            if previous is not None:
                try:
                    self.storage.set(ASPIRATIONS_KEY, previous.to_dict())
                except _WRITE_ERRORS as e:
                    self.logger.log_write_failed(f"{operation}_rollback", str(e))
            raise
