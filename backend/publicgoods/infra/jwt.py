"""Signed session tokens.

A token names the user (``sub``) and the server-side session it belongs to
(``sid``). The signature proves who issued it; whether the session is still
open is a separate Redis lookup done by ``infra.auth``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import jwt
from jwt import InvalidTokenError

from publicgoods.settings import settings

ALGORITHM = "HS256"
ISSUER = "publicgoods-api"
AUDIENCE = "publicgoods-web"
LEEWAY_SECONDS = 5


@dataclass(frozen=True, slots=True)
class SessionClaims:
	user_id: str
	session_id: str
	expires_at: int
	email: Optional[str] = None


def issue_session_token(
	user_id: str,
	session_id: str,
	*,
	email: Optional[str] = None,
	ttl_seconds: Optional[int] = None,
	now: Optional[int] = None,
) -> str:
	issued_at = int(now if now is not None else time.time())
	ttl = ttl_seconds if ttl_seconds is not None else settings.access_ttl_minutes * 60
	body: dict[str, object] = {
		"iss": ISSUER,
		"aud": AUDIENCE,
		"iat": issued_at,
		"exp": issued_at + ttl,
		"sub": user_id,
		"sid": session_id,
	}
	if email:
		body["email"] = email
	return jwt.encode(body, settings.secret_key, algorithm=ALGORITHM)


def read_session_token(token: str) -> SessionClaims:
	"""Verify ``token`` and return its claims.

	Raises ``jwt.InvalidTokenError`` (or a subclass) for a bad signature, an
	expired token, a foreign issuer or audience, or a missing subject/session.
	"""
	payload = jwt.decode(
		token,
		settings.secret_key,
		algorithms=[ALGORITHM],
		audience=AUDIENCE,
		issuer=ISSUER,
		leeway=LEEWAY_SECONDS,
		options={"require": ["exp", "iat", "iss", "aud", "sub"]},
	)
	user_id = str(payload.get("sub") or "").strip()
	session_id = str(payload.get("sid") or "").strip()
	if not user_id or not session_id:
		raise InvalidTokenError("missing_session_claims")
	email = payload.get("email")
	return SessionClaims(
		user_id=user_id,
		session_id=session_id,
		expires_at=int(payload["exp"]),
		email=str(email) if email else None,
	)
