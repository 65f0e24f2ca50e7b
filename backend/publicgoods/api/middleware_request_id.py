"""Assign every request an id and echo it back as ``X-Request-Id``.

A client-supplied id is reused when it is short and printable, so callers
can correlate their own logs; anything else is replaced by a fresh UUID.
The id is also bound into the log context for the life of the request.
"""

from __future__ import annotations

import re
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from publicgoods.api.request_id import REQUEST_ID_ATTR, REQUEST_ID_HEADER
from publicgoods.obs import logging as obs_logging

_ACCEPTABLE_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def choose_request_id(incoming: str | None) -> str:
    if incoming and _ACCEPTABLE_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        rid = choose_request_id(request.headers.get(REQUEST_ID_HEADER))
        setattr(request.state, REQUEST_ID_ATTR, rid)
        token = obs_logging.bind_context(request_id=rid)
        try:
            response = await call_next(request)
        finally:
            obs_logging.reset_context(token)
        response.headers.setdefault(REQUEST_ID_HEADER, rid)
        return response
