"""Blob storage for uploaded images.

Blobs live under ``<upload_root>/<bucket>/<path>`` and are served back from
``<upload_base_url>/<bucket>/<path>``. Only the public URL is ever stored on
a record.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol

from publicgoods.settings import settings

logger = logging.getLogger(__name__)

PROJECT_IMAGES_BUCKET = "project-images"
PROFILE_IMAGES_BUCKET = "profile-images"
BUCKETS = frozenset({PROJECT_IMAGES_BUCKET, PROFILE_IMAGES_BUCKET})


class StorageError(Exception):
	"""Raised when a blob cannot be written or addressed."""

	def __init__(self, reason: str, *, status_code: int = 500) -> None:
		super().__init__(reason)
		self.reason = reason
		self.status_code = status_code


class BlobStorage(Protocol):
	async def upload(self, bucket: str, path: str, data: bytes, *, upsert: bool = True) -> None:
		...

	def public_url(self, bucket: str, path: str) -> str:
		...


class LocalBlobStorage:
	"""Filesystem-backed storage used in development and tests."""

	def __init__(self, root: str | Path, base_url: str) -> None:
		self.root = Path(root).resolve()
		self.base_url = base_url.rstrip("/")

	def _target(self, bucket: str, path: str) -> Path:
		if bucket not in BUCKETS:
			raise StorageError("unknown_bucket", status_code=400)
		bucket_root = (self.root / bucket).resolve()
		target = (bucket_root / path).resolve()
		# Prevent path traversal
		if not str(target).startswith(str(bucket_root) + "/"):
			raise StorageError("invalid_path", status_code=400)
		return target

	async def upload(self, bucket: str, path: str, data: bytes, *, upsert: bool = True) -> None:
		target = self._target(bucket, path)
		if target.exists() and not upsert:
			raise StorageError("already_exists", status_code=409)
		await asyncio.to_thread(self._write, target, data)
		logger.info("storage.upload bucket=%s path=%s bytes=%d", bucket, path, len(data))

	@staticmethod
	def _write(target: Path, data: bytes) -> None:
		target.parent.mkdir(parents=True, exist_ok=True)
		target.write_bytes(data)

	def public_url(self, bucket: str, path: str) -> str:
		self._target(bucket, path)
		return f"{self.base_url}/{bucket}/{path}"


_storage: Optional[BlobStorage] = None


def get_storage() -> BlobStorage:
	global _storage
	if _storage is None:
		_storage = LocalBlobStorage(settings.upload_root, settings.upload_base_url)
	return _storage


def set_storage(storage: Optional[BlobStorage]) -> None:
	global _storage
	_storage = storage
