"""Header menu derived from the caller's session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from publicgoods.infra.auth import Authenticated, Session


@dataclass(frozen=True, slots=True)
class MenuItem:
	label: str
	href: str
	action: Optional[str] = None


BASE_ITEMS: tuple[MenuItem, ...] = (
	MenuItem("Projects", "/projects"),
	MenuItem("Add Project", "/projects/add"),
)
SIGNED_IN_ITEMS: tuple[MenuItem, ...] = (
	MenuItem("My Profile", "/profile"),
	MenuItem("Log Out", "/api/auth/logout", action="logout"),
)
SIGNED_OUT_ITEMS: tuple[MenuItem, ...] = (MenuItem("Log In / Register", "/auth"),)


def build_menu(session: Session) -> list[MenuItem]:
	if isinstance(session, Authenticated):
		return [*BASE_ITEMS, *SIGNED_IN_ITEMS]
	return [*BASE_ITEMS, *SIGNED_OUT_ITEMS]
