"""Tests for JSONL event logging."""

import json
import tempfile
from pathlib import Path

import pytest

from aspira.logging import JSONLLogger, LogEntry, configure_logger, get_logger


@pytest.fixture
def temp_log_dir():
    """Create a temporary directory for logs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def logger(temp_log_dir: Path) -> JSONLLogger:
    return JSONLLogger(log_dir=temp_log_dir)


def test_log_entry_to_dict():
    """Test LogEntry excludes None values."""
    entry = LogEntry(timestamp="2024-01-01T00:00:00Z", event="test")
    data = entry.to_dict()

    assert "timestamp" in data
    assert "event" in data
    assert "tracking_code" not in data  # None excluded
    assert "extra" not in data  # Empty dict excluded


def test_log_creates_file(logger: JSONLLogger):
    """Test that logging creates the log file."""
    logger.log("test_event")

    assert logger.log_path.exists()


def test_log_writes_jsonl(logger: JSONLLogger):
    """Test that logs are written in JSONL format."""
    logger.log("event1", tracking_code="DAGM-AAAAAAAA")
    logger.log("event2", record_id=2)

    with open(logger.log_path) as f:
        lines = f.readlines()

    assert len(lines) == 2

    entry1 = json.loads(lines[0])
    assert entry1["event"] == "event1"
    assert entry1["tracking_code"] == "DAGM-AAAAAAAA"

    entry2 = json.loads(lines[1])
    assert entry2["event"] == "event2"
    assert entry2["record_id"] == 2


def test_log_created(logger: JSONLLogger):
    """Test logging a stored aspiration."""
    logger.log_created("DAGM-AB12CD34", 7, category="Saran", duration_ms=12.5)

    with open(logger.log_path) as f:
        entry = json.loads(f.readline())

    assert entry["event"] == "aspiration_created"
    assert entry["tracking_code"] == "DAGM-AB12CD34"
    assert entry["record_id"] == 7
    assert entry["duration_ms"] == 12.5
    assert entry["extra"]["category"] == "Saran"


def test_log_write_failed(logger: JSONLLogger):
    """Test logging a persistence failure."""
    logger.log_write_failed("create", "No space left on device")

    with open(logger.log_path) as f:
        entry = json.loads(f.readline())

    assert entry["event"] == "store_write_failed"
    assert entry["error"] == "No space left on device"
    assert entry["extra"]["operation"] == "create"


def test_log_rejected(logger: JSONLLogger):
    logger.log_rejected("email", "Email tidak valid.")

    with open(logger.log_path) as f:
        entry = json.loads(f.readline())

    assert entry["event"] == "submission_rejected"
    assert entry["extra"]["field"] == "email"


def test_rotation(temp_log_dir: Path):
    """Test log rotation when max size is exceeded."""
    logger = JSONLLogger(log_dir=temp_log_dir, max_size_mb=0.001)  # ~1KB

    # Write enough to trigger rotation
    for i in range(100):
        logger.log(f"event_{i}", data="x" * 100)

    # Should have rotated files
    log_files = list(temp_log_dir.glob("aspira*.jsonl"))
    assert len(log_files) >= 2


def test_extra_fields(logger: JSONLLogger):
    """Test that extra fields are included."""
    logger.log("custom", custom_field="value", another=123)

    with open(logger.log_path) as f:
        entry = json.loads(f.readline())

    assert entry["extra"]["custom_field"] == "value"
    assert entry["extra"]["another"] == 123


def test_configure_logger_replaces_global(temp_log_dir: Path):
    configured = configure_logger(temp_log_dir)
    assert get_logger() is configured
    assert configured.log_dir == temp_log_dir
