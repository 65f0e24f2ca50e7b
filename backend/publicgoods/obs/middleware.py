"""Request metrics and access logging."""

from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from publicgoods.obs import logging as obs_logging
from publicgoods.obs import metrics
from publicgoods.settings import settings

# Scraping and probes would drown out real traffic in the request metrics
_UNMETERED_PATHS = frozenset({"/metrics", "/health/live", "/health/ready"})


def route_template(request: Request) -> str:
	"""The matched route pattern, so ``/api/projects/<uuid>`` stays one label."""
	route = request.scope.get("route")
	path = getattr(route, "path", None)
	return path if path else "unmatched"


class ObservabilityMiddleware(BaseHTTPMiddleware):
	def __init__(self, app) -> None:
		super().__init__(app)
		self._logger = obs_logging.get_logger("publicgoods.http")

	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		if request.url.path in _UNMETERED_PATHS:
			return await call_next(request)
		# The X-User-Id header is only trusted (and only logged) in development
		user_id = request.headers.get("X-User-Id") if settings.is_dev() else None
		token = obs_logging.bind_context(route=request.url.path, user_id=user_id)
		started = time.perf_counter()
		status_code = 500
		try:
			response = await call_next(request)
			status_code = response.status_code
			return response
		finally:
			elapsed = time.perf_counter() - started
			metrics.observe_request(route_template(request), request.method, status_code, elapsed)
			level = "warning" if status_code >= 500 else "info"
			getattr(self._logger, level)(
				"http_request",
				extra={"method": request.method, "status": status_code, "latency_ms": round(elapsed * 1000, 3)},
			)
			obs_logging.reset_context(token)


def install(app) -> None:
	app.add_middleware(ObservabilityMiddleware)
