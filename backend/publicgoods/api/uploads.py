"""Image upload endpoint backed by blob storage."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from publicgoods.api.errors import as_http_error
from publicgoods.domain.submissions.uploads import SubmissionError, build_blob_path, upload_limit, validate_upload
from publicgoods.infra.storage import BUCKETS, BlobStorage, StorageError, get_storage
from publicgoods.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


class UploadOut(BaseModel):
    path: str
    url: str


@router.post("/uploads/{bucket}/{purpose}", response_model=UploadOut)
async def upload_image(
    bucket: str,
    purpose: str,
    file: UploadFile = File(...),
    storage: BlobStorage = Depends(get_storage),
) -> UploadOut:
    if bucket not in BUCKETS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unknown_bucket")
    limit = upload_limit()
    try:
        if file.size is not None:
            validate_upload(file.size, limit=limit)
        # Read one byte past the limit so oversized bodies are caught without buffering them whole
        data = await file.read(limit + 1)
        validate_upload(len(data), limit=limit)
        path = build_blob_path(purpose, file.filename or "", time.time_ns())
    except SubmissionError as exc:
        obs_metrics.inc_upload(bucket, "rejected")
        raise as_http_error(exc) from None
    finally:
        await file.close()

    try:
        await storage.upload(bucket, path, data, upsert=True)
        url = storage.public_url(bucket, path)
    except StorageError as exc:
        obs_metrics.inc_upload(bucket, "error")
        logger.exception("uploads.store failed bucket=%s", bucket)
        raise as_http_error(exc) from None
    obs_metrics.inc_upload(bucket, "accepted")
    return UploadOut(path=path, url=url)
