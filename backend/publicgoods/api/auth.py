"""Sign up, sign in, sign out and session status endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from publicgoods.api.request_id import get_request_id
from publicgoods.domain.identity import schemas, service
from publicgoods.infra import rate_limit
from publicgoods.infra.auth import Authenticated, Session, get_current_user, get_session
from publicgoods.settings import settings

router = APIRouter(prefix="/api", tags=["identity"])


def _client_ip(request: Request) -> str:
	client = request.client
	return client.host if client else "unknown"


def _http_error(request: Request, detail: str, status_code: int) -> HTTPException:
	"""An HTTP error with the request id header attached."""
	return HTTPException(status_code=status_code, detail=detail, headers={"X-Request-Id": get_request_id(request)})


@router.post("/auth", response_model=schemas.AuthResponse)
async def signup(payload: schemas.SignupRequest, request: Request, response: Response) -> schemas.AuthResponse:
	ip = _client_ip(request)
	limit_ip = 500 if settings.is_dev() else 5
	if not await rate_limit.allow("signup:ip", ip, limit=limit_ip, window_seconds=60):
		raise _http_error(request, "rate_limit", status.HTTP_429_TOO_MANY_REQUESTS)
	try:
		result = await service.signup(payload)
	except service.IdentityServiceError as exc:
		raise _http_error(request, exc.reason, exc.status_code) from None
	response.headers["X-Request-Id"] = get_request_id(request)
	return result


@router.post("/auth/login", response_model=schemas.AuthResponse)
async def login(payload: schemas.LoginRequest, request: Request) -> schemas.AuthResponse:
	ip = _client_ip(request)
	limit_ip = 1000 if settings.is_dev() else 10
	if not await rate_limit.allow("login:ip", ip, limit=limit_ip, window_seconds=60):
		raise _http_error(request, "rate_limit", status.HTTP_429_TOO_MANY_REQUESTS)
	limit_id = 500 if settings.is_dev() else 5
	if not await rate_limit.allow("login:id", service.normalise_email(payload.email), limit=limit_id, window_seconds=60):
		raise _http_error(request, "rate_limit", status.HTTP_429_TOO_MANY_REQUESTS)
	try:
		return await service.login(payload)
	except service.IdentityServiceError as exc:
		raise _http_error(request, exc.reason, exc.status_code) from None


@router.post("/auth/logout", response_model=schemas.LogoutResponse)
async def logout(user: Authenticated = Depends(get_current_user)) -> schemas.LogoutResponse:
	await service.logout(user)
	return schemas.LogoutResponse(ok=True)


@router.get("/auth/session", response_model=schemas.SessionStatus)
async def session_status(session: Session = Depends(get_session)) -> schemas.SessionStatus:
	return schemas.SessionStatus(status=session.status, user_id=session.user_id)
