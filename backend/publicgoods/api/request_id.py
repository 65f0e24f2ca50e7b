"""Request id lookup for routes and error handlers."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from publicgoods.obs import logging as obs_logging

REQUEST_ID_ATTR = "request_id"
REQUEST_ID_HEADER = "X-Request-Id"


def get_request_id(request: Optional[Request] = None, default: str = "unknown") -> str:
    """The id the middleware assigned, else the one in the log context."""
    rid: Optional[str] = None
    if request is not None:
        rid = getattr(request.state, REQUEST_ID_ATTR, None)
    return rid or obs_logging.current_request_id() or default
