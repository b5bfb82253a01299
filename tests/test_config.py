"""Tests for configuration loading."""

from pathlib import Path

import pytest

from aspira.config import ALLOWED_FILE_TYPES, IP_LOOKUP_URL, MAX_FILE_SIZE, AspiraConfig, config_from_env


def test_defaults():
    config = AspiraConfig()
    assert config.data_dir == Path.home() / ".aspira" / "data"
    assert config.log_dir == Path.home() / ".aspira" / "logs"
    assert config.page_size == 6
    assert config.max_file_size == MAX_FILE_SIZE == 5 * 1024 * 1024
    assert config.allowed_file_types == ALLOWED_FILE_TYPES
    assert config.ip_lookup_url == IP_LOOKUP_URL
    assert config.user_agent.startswith("aspira/")


def test_invalid_page_size():
    with pytest.raises(ValueError):
        AspiraConfig(page_size=0)


def test_from_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("ASPIRA_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ASPIRA_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("ASPIRA_PAGE_SIZE", "10")
    monkeypatch.setenv("ASPIRA_IP_LOOKUP_URL", "https://ip.test/")
    monkeypatch.setenv("ASPIRA_IP_LOOKUP_TIMEOUT", "1.5")
    monkeypatch.setenv("ASPIRA_IP_LOOKUP", "false")

    config = config_from_env()

    assert config.data_dir == tmp_path / "data"
    assert config.log_dir == tmp_path / "logs"
    assert config.page_size == 10
    assert config.ip_lookup_url == "https://ip.test/"
    assert config.ip_lookup_timeout == 1.5
    assert config.ip_lookup_enabled is False


def test_from_env_defaults(monkeypatch):
    for name in (
        "ASPIRA_DATA_DIR",
        "ASPIRA_LOG_DIR",
        "ASPIRA_PAGE_SIZE",
        "ASPIRA_IP_LOOKUP_URL",
        "ASPIRA_IP_LOOKUP_TIMEOUT",
        "ASPIRA_IP_LOOKUP",
    ):
        monkeypatch.delenv(name, raising=False)

    config = config_from_env()

    assert config.page_size == 6
    assert config.ip_lookup_enabled is True
    assert config.ip_lookup_timeout == 3.0
