"""Session-aware navigation menu."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from publicgoods.domain.identity.navigation import build_menu
from publicgoods.domain.identity.schemas import MenuItemOut
from publicgoods.infra.auth import Session, get_session

router = APIRouter(prefix="/api", tags=["navigation"])


@router.get("/nav", response_model=list[MenuItemOut])
async def navigation(session: Session = Depends(get_session)) -> list[MenuItemOut]:
	return [MenuItemOut(label=item.label, href=item.href, action=item.action) for item in build_menu(session)]
