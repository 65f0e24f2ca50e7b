"""Donation recording endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from publicgoods.api.errors import as_http_error
from publicgoods.domain.common.errors import ServiceError
from publicgoods.domain.donations import schemas, service
from publicgoods.infra.auth import Session, get_session

router = APIRouter(prefix="/api", tags=["donations"])


@router.post("/donate", response_model=list[schemas.DonationOut])
async def donate(
	payload: schemas.DonationCreate,
	session: Session = Depends(get_session),
) -> list[schemas.DonationOut]:
	try:
		return await service.donate(payload, session=session)
	except ServiceError as exc:
		raise as_http_error(exc) from None
