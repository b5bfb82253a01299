"""Submission service: the entry point used by the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass

from .attachments import encode_attachment
from .config import AspiraConfig
from .errors import AttachmentError, StoreWriteError
from .logging import JSONLLogger, get_logger
from .store import AspirationStore, NewAspiration
from .validation import Submission, first_failure, sanitize

SUCCESS_MESSAGE = "Aspirasi berhasil dikirim!"
WRITE_FAILED_MESSAGE = "Terjadi kesalahan saat menyimpan data."


@dataclass
class SubmitResult:
    """Result of a submission attempt."""

    success: bool
    message: str
    tracking_code: str | None = None
    field: str | None = None


class SubmissionService:
    """Validates, encodes and sanitizes a submission, then stores it.

    Rejected submissions never reach the store.
    """

    def __init__(
        self,
        store: AspirationStore,
        config: AspiraConfig | None = None,
        logger: JSONLLogger | None = None,
    ) -> None:
        self.store = store
        self.config = config or AspiraConfig()
        self._logger = logger

    @property
    def logger(self) -> JSONLLogger:
        return self._logger or get_logger()

    def _normalize(self, submission: Submission) -> Submission:
        """Trim the free-text fields the way the form does."""
        return Submission(
            name=submission.name.strip(),
            email=submission.email.strip(),
            phone=submission.phone.strip(),
            department=submission.department,
            category=submission.category,
            message=submission.message.strip(),
            anonim=submission.anonim,
            upload=submission.upload,
        )

    async def submit(self, submission: Submission, user_agent: str | None = None) -> SubmitResult:
        """Validate and store a submission.

        Args:
            submission: Raw form input.
            user_agent: Client descriptor. Defaults to the configured one.

        Returns:
            SubmitResult with the tracking code on success, or the reason
            for rejection.
        """
        submission = self._normalize(submission)

        error = first_failure(
            submission,
            max_size=self.config.max_file_size,
            allowed_types=self.config.allowed_file_types,
        )
        if error is not None:
            self.logger.log_rejected(error.field, error.reason)
            return SubmitResult(success=False, message=error.reason, field=error.field)

        try:
            attachment = encode_attachment(submission.upload) if submission.upload else None
        except AttachmentError as e:
            self.logger.log_rejected("attachment", str(e))
            return SubmitResult(success=False, message=str(e), field="attachment")

        data = NewAspiration(
            name=sanitize(submission.name),
            email=sanitize(submission.email),
            phone=sanitize(submission.phone),
            department=sanitize(submission.department),
            category=sanitize(submission.category),
            message=sanitize(submission.message),
            anonim=submission.anonim,
            attachment=attachment,
            user_agent=user_agent if user_agent is not None else self.config.user_agent,
        )

        try:
            result = await self.store.create(data)
        except StoreWriteError:
            return SubmitResult(success=False, message=WRITE_FAILED_MESSAGE)

        return SubmitResult(
            success=True,
            message=SUCCESS_MESSAGE,
            tracking_code=result.tracking_code,
        )
