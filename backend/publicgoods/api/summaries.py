"""AI summary generation endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from publicgoods.api.errors import as_http_error
from publicgoods.domain.common.errors import ServiceError
from publicgoods.domain.summaries import schemas, service
from publicgoods.domain.summaries.provider import SummaryProvider, get_provider

router = APIRouter(prefix="/api", tags=["summaries"])


@router.post("/generate-summary", response_model=schemas.SummaryOut)
async def generate_summary(
	payload: schemas.SummaryRequest,
	provider: SummaryProvider = Depends(get_provider),
) -> schemas.SummaryOut:
	try:
		return await service.generate_summary(payload, provider=provider)
	except ServiceError as exc:
		raise as_http_error(exc) from None
