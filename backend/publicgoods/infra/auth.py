"""Authentication helpers for FastAPI endpoints.

Every request resolves to exactly one ``Session`` value:

- ``Anonymous`` when no credentials were presented;
- ``Authenticated`` when a valid, non-revoked bearer JWT was presented.

Session liveness is tracked in Redis (``session:<sid>``) so sign-out takes
effect immediately even though access tokens are stateless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import InvalidTokenError

from publicgoods.infra import jwt as jwt_helper
from publicgoods.infra.redis import session_owner
from publicgoods.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Anonymous:
	status: Literal["anonymous"] = "anonymous"

	@property
	def user_id(self) -> None:
		return None


@dataclass(frozen=True, slots=True)
class Authenticated:
	user_id: str
	session_id: Optional[str] = None
	email: Optional[str] = None
	status: Literal["authenticated"] = "authenticated"


Session = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()

_bearer_scheme = HTTPBearer(auto_error=False)


def _invalid_token() -> HTTPException:
	return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid_token")


async def verify_access_jwt(token: str) -> Authenticated:
	"""Check the token signature, then that its session is still open for the same user."""
	try:
		claims = jwt_helper.read_session_token(token)
	except InvalidTokenError:
		raise _invalid_token() from None
	if await session_owner(claims.session_id) != claims.user_id:
		raise _invalid_token()
	return Authenticated(user_id=claims.user_id, session_id=claims.session_id, email=claims.email)


async def get_session(
	request: Request,
	x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Session:
	"""Resolve the caller's session; absent credentials mean an anonymous session.

	A token that fails verification (expired, signed out, forged) also yields
	an anonymous session; routes that need a user reject it in
	``get_current_user``. When the app carries a session cache (``app.state.session_state``) verified
	tokens are served from it. In development a bare ``X-User-Id`` header is
	accepted for local tools.
	"""
	if credentials and credentials.scheme.lower() == "bearer":
		cache = getattr(request.app.state, "session_state", None)
		try:
			if cache is not None:
				return await cache.resolve(credentials.credentials, verify_access_jwt)
			return await verify_access_jwt(credentials.credentials)
		except HTTPException:
			# An expired or signed-out token reads as no session at all
			logger.info("auth.stale_token path=%s", request.url.path)
			return ANONYMOUS
	if settings.is_dev() and x_user_id:
		return Authenticated(user_id=x_user_id.strip())
	return ANONYMOUS


async def get_current_user(session: Session = Depends(get_session)) -> Authenticated:
	if isinstance(session, Authenticated):
		return session
	raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="not_authenticated")
