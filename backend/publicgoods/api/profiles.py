"""Profile endpoints: the caller's own profile and public profile pages."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from publicgoods.api.errors import as_http_error
from publicgoods.domain.common.errors import ServiceError
from publicgoods.domain.profiles import schemas, service
from publicgoods.infra.auth import Authenticated, get_current_user

router = APIRouter(prefix="/api", tags=["profiles"])


# /profiles/me must be declared before /profiles/{user_id}
@router.get("/profiles/me", response_model=schemas.ProfileOut)
async def get_my_profile(user: Authenticated = Depends(get_current_user)) -> schemas.ProfileOut:
	try:
		return await service.get_own_profile(user)
	except ServiceError as exc:
		raise as_http_error(exc) from None


@router.post("/profiles/me", response_model=schemas.ProfileOut)
async def save_my_profile(
	payload: schemas.ProfileUpsert,
	user: Authenticated = Depends(get_current_user),
) -> schemas.ProfileOut:
	try:
		return await service.save_own_profile(user, payload)
	except ServiceError as exc:
		raise as_http_error(exc) from None


@router.get("/profiles/{user_id}", response_model=schemas.ProfileOut)
async def get_profile(user_id: str) -> schemas.ProfileOut:
	try:
		return await service.get_profile(user_id)
	except ServiceError as exc:
		raise as_http_error(exc) from None
