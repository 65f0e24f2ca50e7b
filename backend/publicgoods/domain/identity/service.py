"""Service layer for sign up, sign in and sign out.

Sessions are opaque ids held in Redis (``session:<sid>``) for the lifetime
of the access token; the token carries the id in its ``sid`` claim.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from publicgoods.domain.identity import models, repo, schemas
from publicgoods.domain.identity.session_state import (
	SIGNED_IN,
	SIGNED_OUT,
	AuthStateChange,
	auth_events,
)
from publicgoods.infra import jwt as jwt_helper
from publicgoods.infra import redis as session_store
from publicgoods.infra.auth import Authenticated
from publicgoods.infra.password import hash_password, password_problem, verify_password
from publicgoods.obs import metrics as obs_metrics
from publicgoods.settings import settings

logger = logging.getLogger(__name__)


class IdentityServiceError(Exception):
	"""Raised for service-level issues with optional HTTP status mapping."""

	def __init__(self, reason: str, *, status_code: int = 400):
		super().__init__(reason)
		self.reason = reason
		self.status_code = status_code


class LoginFailed(IdentityServiceError):
	def __init__(self, reason: str = "invalid_credentials") -> None:
		super().__init__(reason, status_code=401)


class EmailTaken(IdentityServiceError):
	def __init__(self) -> None:
		super().__init__("email_taken", status_code=400)


class PasswordTooWeak(IdentityServiceError):
	def __init__(self, reason: str = "password_too_short") -> None:
		super().__init__(reason, status_code=400)


def normalise_email(email: str) -> str:
	return email.strip().lower()


def _access_ttl_seconds() -> int:
	return settings.access_ttl_minutes * 60


async def _open_session(user: models.User) -> schemas.SessionOut:
	session_id = uuid4()
	ttl = _access_ttl_seconds()
	await session_store.open_session(str(session_id), str(user.id), ttl_seconds=ttl)
	token = jwt_helper.issue_session_token(str(user.id), str(session_id), email=user.email, ttl_seconds=ttl)
	await auth_events.publish(AuthStateChange(event=SIGNED_IN, user_id=str(user.id), session_id=str(session_id)))
	return schemas.SessionOut(access_token=token, session_id=session_id, expires_in=ttl)


def _user_out(user: models.User) -> schemas.UserOut:
	return schemas.UserOut(id=user.id, email=user.email, wallet_address=user.wallet_address)


async def signup(payload: schemas.SignupRequest) -> schemas.AuthResponse:
	problem = password_problem(payload.password)
	if problem:
		obs_metrics.inc_auth_event("signup", "rejected")
		raise PasswordTooWeak(problem)
	user = models.User(
		id=uuid4(),
		email=normalise_email(payload.email),
		password_hash=hash_password(payload.password),
		wallet_address=(payload.wallet_address or "").strip() or None,
	)
	created = await repo.insert(user)
	if created is None:
		obs_metrics.inc_auth_event("signup", "rejected")
		raise EmailTaken()
	session = await _open_session(created)
	obs_metrics.inc_auth_event("signup", "ok")
	logger.info("identity.signup user_id=%s", created.id)
	return schemas.AuthResponse(user=_user_out(created), session=session)


async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
	email = normalise_email(payload.email)
	user = await repo.get_by_email(email)
	if user is None or not user.password_hash:
		# Same error for unknown email and wrong password
		obs_metrics.inc_auth_event("login", "rejected")
		raise LoginFailed()
	if not verify_password(user.password_hash, payload.password):
		obs_metrics.inc_auth_event("login", "rejected")
		raise LoginFailed()
	session = await _open_session(user)
	obs_metrics.inc_auth_event("login", "ok")
	return schemas.AuthResponse(user=_user_out(user), session=session)


async def logout(user: Authenticated) -> None:
	"""Revoke the caller's session; later requests with the same token are rejected."""
	session_id: Optional[str] = user.session_id
	if session_id:
		await session_store.close_session(session_id)
	await auth_events.publish(AuthStateChange(event=SIGNED_OUT, user_id=user.user_id, session_id=session_id))
	obs_metrics.inc_auth_event("logout", "ok")
