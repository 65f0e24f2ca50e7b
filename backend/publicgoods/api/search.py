"""REST endpoints resolving project and profile searches."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from publicgoods.api.errors import as_http_error
from publicgoods.domain.common.errors import ServiceError
from publicgoods.domain.profiles.schemas import ProfileOut
from publicgoods.domain.projects.schemas import ProjectOut
from publicgoods.domain.search.params import QUERY_KEY, SearchParams
from publicgoods.domain.search.service import SearchService
from publicgoods.infra.rate_limit import RateLimitExceeded

router = APIRouter(prefix="/api", tags=["search"])

_service = SearchService()


def get_search_service() -> SearchService:
	return _service


def client_key(request: Request) -> str:
	client = request.client
	return client.host if client else "unknown"


def _as_http_error(exc: Exception) -> HTTPException:
	if isinstance(exc, RateLimitExceeded):
		return HTTPException(
			status_code=status.HTTP_429_TOO_MANY_REQUESTS,
			detail=exc.reason,
			headers={"Retry-After": str(exc.retry_after)},
		)
	return as_http_error(exc)


@router.get("/search-projects", response_model=list[ProjectOut])
async def search_projects_endpoint(
	request: Request,
	query: Optional[str] = Query(default=None, alias=QUERY_KEY),
	category: Optional[str] = None,
	funding_platform: Optional[str] = None,
	governance_model: Optional[str] = None,
	project_status: Optional[str] = Query(default=None, alias="status"),
	service: SearchService = Depends(get_search_service),
) -> list[ProjectOut]:
	# Declared parameters document the contract; parsing goes through the shared keys
	params = SearchParams.parse(request.query_params)
	try:
		return await service.search_projects(params, client_id=client_key(request))
	except (ServiceError, RateLimitExceeded) as exc:
		raise _as_http_error(exc) from None


@router.get("/search-profiles", response_model=list[ProfileOut])
async def search_profiles_endpoint(
	request: Request,
	query: Optional[str] = Query(default=None, alias=QUERY_KEY),
	service: SearchService = Depends(get_search_service),
) -> list[ProfileOut]:
	try:
		return await service.search_profiles(query, client_id=client_key(request))
	except (ServiceError, RateLimitExceeded) as exc:
		raise _as_http_error(exc) from None
