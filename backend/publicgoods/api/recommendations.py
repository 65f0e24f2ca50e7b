"""Interest-based project recommendations."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from publicgoods.api.errors import as_http_error
from publicgoods.domain.common.errors import ServiceError
from publicgoods.domain.recommendations.service import Recommendation, recommend

router = APIRouter(prefix="/api", tags=["recommendations"])


@router.get("/recommendations", response_model=list[Recommendation])
async def recommendations(
	user_id: Optional[str] = None,
	limit: int = Query(default=10, ge=1, le=50),
) -> list[Recommendation]:
	try:
		return await recommend(user_id, limit=limit)
	except ServiceError as exc:
		raise as_http_error(exc) from None
