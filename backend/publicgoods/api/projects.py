"""Project submission, detail, listing and filter-option endpoints."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from publicgoods.api.errors import as_http_error
from publicgoods.domain.common.errors import ServiceError
from publicgoods.domain.projects import schemas, service
from publicgoods.domain.search.params import SearchParams
from publicgoods.infra.auth import Session, get_session

router = APIRouter(prefix="/api", tags=["projects"])


@router.post("/projects/add", response_model=schemas.ProjectCreated)
async def add_project(
	payload: schemas.ProjectCreate,
	session: Session = Depends(get_session),
) -> schemas.ProjectCreated:
	try:
		return await service.create_project(payload, session=session)
	except ServiceError as exc:
		raise as_http_error(exc) from None


@router.get("/projects/listing", response_model=schemas.ListingPageOut)
async def project_listing(
	request: Request,
	seed: Optional[int] = None,
	page: int = Query(default=0, ge=0, le=1000),
) -> schemas.ListingPageOut:
	params = SearchParams.parse(request.query_params)
	try:
		return await service.listing_page(params, page=page, seed=seed)
	except ServiceError as exc:
		raise as_http_error(exc) from None


@router.get("/projects/{project_id:uuid}", response_model=schemas.ProjectOut)
async def project_detail(project_id: UUID) -> schemas.ProjectOut:
	try:
		return await service.get_project(project_id)
	except ServiceError as exc:
		raise as_http_error(exc) from None


@router.get("/filters", response_model=schemas.FilterOptions)
async def filter_options() -> schemas.FilterOptions:
	return service.filter_options()
