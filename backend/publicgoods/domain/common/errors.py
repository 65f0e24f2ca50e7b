"""Service-level errors shared by the domain packages."""

from __future__ import annotations


class ServiceError(Exception):
	"""Raised for service-level issues with optional HTTP status mapping."""

	def __init__(self, reason: str, *, status_code: int = 400):
		super().__init__(reason)
		self.reason = reason
		self.status_code = status_code


class ValidationFailed(ServiceError):
	"""Caller input is incomplete or malformed; the message is shown verbatim."""

	def __init__(self, reason: str) -> None:
		super().__init__(reason, status_code=400)


class NotFound(ServiceError):
	def __init__(self, reason: str = "not_found") -> None:
		super().__init__(reason, status_code=404)


class StoreUnavailable(ServiceError):
	"""The store or an upstream provider failed; ``reason`` is safe to return."""

	def __init__(self, reason: str = "Internal server error") -> None:
		super().__init__(reason, status_code=500)
