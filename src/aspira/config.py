"""Runtime configuration for aspira.

Values come from the dataclass defaults, optionally overridden by
environment variables (a ``.env`` file is loaded by the entry point).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from . import __version__

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB

ALLOWED_FILE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)

IP_LOOKUP_URL = "https://api.ipify.org?format=json"


@dataclass
class AspiraConfig:
    """Configuration for the store, service and CLI.

    Attributes:
        data_dir: Directory holding the persisted JSON blobs.
        log_dir: Directory for the JSONL event log.
        page_size: Records per page in list views.
        max_file_size: Largest accepted attachment, in bytes.
        allowed_file_types: Accepted attachment MIME types.
        ip_lookup_url: Endpoint returning ``{"ip": ...}``.
        ip_lookup_timeout: Seconds before the lookup gives up.
        ip_lookup_enabled: If False, every record gets ``"unknown"``.
        user_agent: Client descriptor stored on records created here.
    """

    data_dir: Path | None = None
    log_dir: Path | None = None
    page_size: int = 6
    max_file_size: int = MAX_FILE_SIZE
    allowed_file_types: tuple[str, ...] = ALLOWED_FILE_TYPES
    ip_lookup_url: str = IP_LOOKUP_URL
    ip_lookup_timeout: float = 3.0
    ip_lookup_enabled: bool = True
    user_agent: str = field(default=f"aspira/{__version__}")

    def __post_init__(self) -> None:
        if self.data_dir is None:
            self.data_dir = Path.home() / ".aspira" / "data"
        if self.log_dir is None:
            self.log_dir = Path.home() / ".aspira" / "logs"
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def config_from_env() -> AspiraConfig:
    """Load configuration from environment variables."""
    data_dir = os.getenv("ASPIRA_DATA_DIR")
    log_dir = os.getenv("ASPIRA_LOG_DIR")

    return AspiraConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else None,
        log_dir=Path(log_dir).expanduser() if log_dir else None,
        page_size=int(os.getenv("ASPIRA_PAGE_SIZE", "6")),
        ip_lookup_url=os.getenv("ASPIRA_IP_LOOKUP_URL", IP_LOOKUP_URL),
        ip_lookup_timeout=float(os.getenv("ASPIRA_IP_LOOKUP_TIMEOUT", "3")),
        ip_lookup_enabled=_env_flag(os.getenv("ASPIRA_IP_LOOKUP", "1")),
    )
