"""Command-line interface for aspira.

Provides subcommands for submitting aspirations, tracking them by code,
listing them by category, and changing their status.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from .attachments import decode_attachment, read_upload
from .config import AspiraConfig, config_from_env
from .errors import AspirationError, RecordNotFound, StoreReadError, StoreWriteError
from .logging import configure_logger
from .net import IPLookup, NullIPLookup
from .service import SubmissionService
from .store import (
    ALL_CATEGORIES,
    AspirationRecord,
    AspirationStore,
    JsonFileStorage,
    Status,
    format_date,
    status_label,
)
from .validation import Submission

TRACK_PREVIEW_CHARS = 100
LIST_PREVIEW_CHARS = 150


def _get_store(config: AspiraConfig) -> AspirationStore:
    """Create an initialized store for the configured data directory."""
    assert config.data_dir is not None
    if config.ip_lookup_enabled:
        ip_lookup: IPLookup | NullIPLookup = IPLookup(
            url=config.ip_lookup_url, timeout=config.ip_lookup_timeout
        )
    else:
        ip_lookup = NullIPLookup()

    store = AspirationStore(
        JsonFileStorage(config.data_dir),
        ip_lookup=ip_lookup,
        page_size=config.page_size,
    )
    store.initialize()
    return store


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_tracking(record: AspirationRecord) -> str:
    """Format a record as the tracking result block."""
    lines = [
        f"Status Aspirasi: {status_label(record.status)}",
        f"Departemen: {record.department}",
        f"Kategori: {record.category}",
        f"Tanggal: {format_date(record.created_at)}",
        f"Pesan: {_truncate(record.message, TRACK_PREVIEW_CHARS)}",
    ]
    return "\n".join(lines)


def format_list_item(record: AspirationRecord) -> str:
    """Format a record as a single list entry."""
    date = format_date(record.created_at, long=False)
    header = (
        f"[{record.category}] {record.department} - {record.name} - {date} "
        f"({status_label(record.status)})"
    )
    return f"{header}\n  {_truncate(record.message, LIST_PREVIEW_CHARS)}"


def cmd_submit(args: argparse.Namespace, config: AspiraConfig) -> int:
    """Submit a new aspiration."""
    upload = None
    if args.file:
        try:
            upload = read_upload(Path(args.file))
        except AspirationError as e:
            print(f"Error: {e}")
            return 1

    submission = Submission(
        name=args.name or "",
        email=args.email,
        phone=args.phone or "",
        department=args.department,
        category=args.category,
        message=args.message,
        anonim=args.anonim,
        upload=upload,
    )

    service = SubmissionService(_get_store(config), config=config)
    result = asyncio.run(service.submit(submission))

    if not result.success:
        print(f"Error: {result.message}")
        return 1

    print(f"✓ {result.message} Kode Tracking: {result.tracking_code}")
    print("Simpan kode ini untuk melacak status.")
    return 0


def cmd_track(args: argparse.Namespace, config: AspiraConfig) -> int:
    """Show the status of an aspiration by tracking code."""
    code = args.code.strip().upper()
    if not code:
        print("Error: Harap masukkan kode tracking.")
        return 1

    record = _get_store(config).lookup_by_code(code)
    if record is None:
        print("Error: Kode tracking tidak ditemukan.")
        return 1

    print(format_tracking(record))
    return 0


def cmd_info(args: argparse.Namespace, config: AspiraConfig) -> int:
    """Show the tracking index entry for a code."""
    code = args.code.strip().upper()
    entry = _get_store(config).get_tracking_info(code)
    if entry is None:
        print("Error: Kode tracking tidak ditemukan.")
        return 1

    print(f"Kode: {entry.code}")
    print(f"Email: {entry.email}")
    print(f"Dibuat: {entry.created_at}")
    return 0


def cmd_list(args: argparse.Namespace, config: AspiraConfig) -> int:
    """List aspirations, newest first."""
    if args.page < 1:
        print("Error: page must be at least 1")
        return 1

    page = _get_store(config).list(args.category, args.page)

    if not page.data:
        print("Belum ada aspirasi yang ditampilkan.")
        return 0

    for record in page.data:
        print(format_list_item(record))

    print(f"\nHalaman {page.page} dari {page.total_pages} ({page.total} aspirasi)")
    return 0


def cmd_status(args: argparse.Namespace, config: AspiraConfig) -> int:
    """Change the status of an aspiration."""
    store = _get_store(config)
    try:
        record = asyncio.run(store.update_status(args.id, args.status))
    except (RecordNotFound, StoreWriteError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Aspirasi #{record.id} ({record.tracking_code}): {status_label(record.status)}")
    return 0


def cmd_attachment(args: argparse.Namespace, config: AspiraConfig) -> int:
    """Write an aspiration's attachment to disk."""
    record = _get_store(config).lookup_by_code(args.code.strip().upper())
    if record is None:
        print("Error: Kode tracking tidak ditemukan.")
        return 1
    if record.attachment is None:
        print("Error: Aspirasi ini tidak memiliki lampiran.")
        return 1

    target = Path(args.output) if args.output else Path.cwd() / Path(record.attachment.name).name
    try:
        target.write_bytes(decode_attachment(record.attachment))
    except (AspirationError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Saved {record.attachment.name} to {target}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="aspira",
        description="Submit and track aspirations",
    )

    subparsers = parser.add_subparsers(dest="command", help="Sub-command help")

    # submit command
    submit_parser = subparsers.add_parser("submit", help="Submit a new aspiration")
    submit_parser.add_argument("--name", help="Full name of the submitter")
    submit_parser.add_argument("--email", required=True, help="Contact email")
    submit_parser.add_argument("--phone", help="Contact phone number")
    submit_parser.add_argument("--department", required=True, help="Target department")
    submit_parser.add_argument("--category", required=True, help="Aspiration category")
    submit_parser.add_argument("--message", required=True, help="Aspiration text")
    submit_parser.add_argument(
        "--anonim",
        action="store_true",
        help="Submit anonymously",
    )
    submit_parser.add_argument("--file", help="Attachment (PDF, JPG, PNG, DOC, DOCX; max 5MB)")

    # track command
    track_parser = subparsers.add_parser("track", help="Show status by tracking code")
    track_parser.add_argument("code", help="Tracking code, e.g. DAGM-AB12CD34")

    # info command
    info_parser = subparsers.add_parser("info", help="Show tracking index entry")
    info_parser.add_argument("code", help="Tracking code")

    # list command
    list_parser = subparsers.add_parser("list", help="List aspirations")
    list_parser.add_argument(
        "-c", "--category",
        default=ALL_CATEGORIES,
        help="Only show this category (default: all)",
    )
    list_parser.add_argument("-p", "--page", type=int, default=1, help="Page number")

    # status command
    status_parser = subparsers.add_parser("status", help="Change an aspiration's status")
    status_parser.add_argument("id", type=int, help="Aspiration id")
    status_parser.add_argument(
        "status",
        choices=[status.value for status in Status],
        help="New status",
    )

    # attachment command
    attachment_parser = subparsers.add_parser("attachment", help="Save an attachment to disk")
    attachment_parser.add_argument("code", help="Tracking code")
    attachment_parser.add_argument("-o", "--output", help="Output path")

    return parser


def run_cli(argv: list[str] | None = None, config: AspiraConfig | None = None) -> int:
    """Run the CLI with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.
        config: Configuration. Loaded from the environment if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = config or config_from_env()
    configure_logger(config.log_dir)

    commands = {
        "submit": cmd_submit,
        "track": cmd_track,
        "info": cmd_info,
        "list": cmd_list,
        "status": cmd_status,
        "attachment": cmd_attachment,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, config)
    except StoreReadError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(run_cli())
