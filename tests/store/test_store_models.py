"""Tests for store data models."""

import pytest

from aspira.store import (
    AspirationRecord,
    Attachment,
    Page,
    Status,
    StoreContainer,
    TrackingEntry,
    format_date,
    status_label,
)
from aspira.store.models import utc_now_iso


def make_record(**overrides) -> AspirationRecord:
    fields = {
        "id": 1,
        "tracking_code": "DAGM-AB12CD34",
        "name": "Budi",
        "email": "budi@example.com",
        "phone": "",
        "department": "IT",
        "category": "Saran",
        "message": "Tolong perbaiki wifi kantor",
        "status": "pending",
        "created_at": "2026-10-18T09:30:00.000Z",
        "updated_at": "2026-10-18T09:30:00.000Z",
    }
    fields.update(overrides)
    return AspirationRecord(**fields)


class TestAspirationRecord:
    def test_to_dict_uses_camel_case(self):
        data = make_record().to_dict()
        assert data["trackingCode"] == "DAGM-AB12CD34"
        assert data["createdAt"] == "2026-10-18T09:30:00.000Z"
        assert data["ipAddress"] == "unknown"
        assert data["attachment"] is None
        assert "tracking_code" not in data

    def test_round_trip_with_attachment(self):
        attachment = Attachment(
            name="foto.png", type="image/png", size=3, data="data:image/png;base64,AAEC"
        )
        record = make_record(attachment=attachment, ip_address="203.0.113.9")
        restored = AspirationRecord.from_dict(record.to_dict())
        assert restored == record

    def test_from_dict_defaults(self):
        record = AspirationRecord.from_dict({
            "id": "4",
            "trackingCode": "DAGM-AB12CD34",
            "createdAt": "2026-10-18T09:30:00.000Z",
            "phone": None,
        })
        assert record.id == 4
        assert record.phone == ""
        assert record.status == "pending"
        assert record.updated_at == record.created_at
        assert record.ip_address == "unknown"


class TestStoreContainer:
    def test_defaults(self):
        container = StoreContainer()
        assert container.aspirations == []
        assert container.next_id == 1
        assert container.schema_version == 1

    def test_missing_schema_version_reads_as_one(self):
        container = StoreContainer.from_dict({"aspirations": [], "nextId": 5, "lastUpdated": "x"})
        assert container.schema_version == 1
        assert container.next_id == 5

    def test_round_trip(self):
        container = StoreContainer(aspirations=[make_record()], next_id=2, last_updated="t")
        restored = StoreContainer.from_dict(container.to_dict())
        assert restored == container


class TestTrackingEntry:
    def test_round_trip(self):
        entry = TrackingEntry(code="DAGM-AB12CD34", email="a@b.co", created_at="t")
        assert entry.to_dict() == {"code": "DAGM-AB12CD34", "email": "a@b.co", "createdAt": "t"}
        assert TrackingEntry.from_dict(entry.to_dict()) == entry


class TestPage:
    def test_to_dict(self):
        page = Page(data=[make_record()], total=1, page=1, total_pages=1)
        data = page.to_dict()
        assert data["totalPages"] == 1
        assert data["data"][0]["trackingCode"] == "DAGM-AB12CD34"


class TestStatus:
    @pytest.mark.parametrize(
        "status,label",
        [("pending", "Menunggu"), ("process", "Diproses"), ("done", "Selesai")],
    )
    def test_labels(self, status, label):
        assert status_label(status) == label

    def test_unknown_status_shows_raw(self):
        assert status_label("archived") == "archived"

    def test_enum_values(self):
        assert [s.value for s in Status] == ["pending", "process", "done"]


class TestFormatting:
    def test_format_date_long(self):
        assert format_date("2026-10-18T09:30:00.000Z") == "18 Oktober 2026"

    def test_format_date_short(self):
        assert format_date("2026-08-03T09:30:00.000Z", long=False) == "3 Agu 2026"

    def test_utc_now_iso_shape(self):
        value = utc_now_iso()
        assert value.endswith("Z")
        assert len(value) == len("2026-10-18T09:30:00.000Z")
