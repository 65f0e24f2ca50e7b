"""Image attachment checks and blob naming."""

from __future__ import annotations

import time
from typing import Optional

from publicgoods.domain.common.errors import ServiceError
from publicgoods.settings import settings

PURPOSE_PROFILE = "profile"
PURPOSE_BANNER = "banner"
PURPOSES = frozenset({PURPOSE_PROFILE, PURPOSE_BANNER})

MAX_UPLOAD_BYTES = 1024 * 1024


class SubmissionError(ServiceError):
	"""Raised when a submission form or attachment is rejected."""


class UploadTooLarge(SubmissionError):
	def __init__(self, size: int, limit: int) -> None:
		super().__init__("File is too large. Maximum allowed size is 1MB.", status_code=413)
		self.size = size
		self.limit = limit


class InvalidPurpose(SubmissionError):
	def __init__(self, purpose: str) -> None:
		super().__init__(f"invalid_purpose:{purpose}", status_code=400)


def upload_limit() -> int:
	return settings.max_upload_bytes or MAX_UPLOAD_BYTES


def validate_upload(size: int, *, limit: Optional[int] = None) -> None:
	"""Reject attachments over the limit; must run before any storage call."""
	limit = upload_limit() if limit is None else limit
	if size > limit:
		raise UploadTooLarge(size, limit)


def file_extension(filename: str) -> str:
	"""The last dot-suffix of ``filename``, or the whole name when it has no dot."""
	return filename.rsplit(".", 1)[-1] if filename else ""


def build_blob_path(purpose: str, filename: str, now_ns: Optional[int] = None) -> str:
	"""``{purpose}/{purpose}-{timestamp}.{ext}`` with a millisecond timestamp."""
	if purpose not in PURPOSES:
		raise InvalidPurpose(purpose)
	stamp = (now_ns if now_ns is not None else time.time_ns()) // 1_000_000
	return f"{purpose}/{purpose}-{stamp}.{file_extension(filename)}"
