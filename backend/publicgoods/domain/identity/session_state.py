"""Auth-state events and the process-scoped session cache that listens to them.

The identity service publishes an ``AuthStateChange`` whenever a session is
opened or closed, or a user's profile changes. ``SessionState`` caches
verified bearer tokens for a short time and drops the affected entries on
every event, so a sign-out is visible on the very next request.
"""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from publicgoods.infra.auth import Authenticated

logger = logging.getLogger(__name__)

SIGNED_IN = "signed_in"
SIGNED_OUT = "signed_out"
USER_UPDATED = "user_updated"

CACHE_TTL_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class AuthStateChange:
	event: str
	user_id: Optional[str] = None
	session_id: Optional[str] = None


Listener = Callable[[AuthStateChange], Union[Awaitable[None], None]]
Verifier = Callable[[str], Awaitable[Authenticated]]


class AuthEvents:
	"""In-process publish/subscribe for auth-state changes."""

	def __init__(self) -> None:
		self._listeners: list[Listener] = []

	def subscribe(self, listener: Listener) -> Callable[[], None]:
		self._listeners.append(listener)

		def _unsubscribe() -> None:
			if listener in self._listeners:
				self._listeners.remove(listener)

		return _unsubscribe

	async def publish(self, change: AuthStateChange) -> None:
		for listener in list(self._listeners):
			result = listener(change)
			if inspect.isawaitable(result):
				await result


auth_events = AuthEvents()


@dataclass(slots=True)
class _Entry:
	session: Authenticated
	expires_at: float


class SessionState:
	"""Short-lived cache of verified sessions, keyed by bearer token."""

	def __init__(
		self,
		events: AuthEvents = auth_events,
		*,
		ttl_seconds: float = CACHE_TTL_SECONDS,
		clock: Callable[[], float] = time.monotonic,
	) -> None:
		self._events = events
		self._ttl = ttl_seconds
		self._clock = clock
		self._entries: dict[str, _Entry] = {}
		self._unsubscribe: Optional[Callable[[], None]] = events.subscribe(self._on_change)

	def __len__(self) -> int:
		return len(self._entries)

	@property
	def closed(self) -> bool:
		return self._unsubscribe is None

	async def resolve(self, token: str, verifier: Verifier) -> Authenticated:
		now = self._clock()
		entry = self._entries.get(token)
		if entry is not None and entry.expires_at > now:
			return entry.session
		session = await verifier(token)
		if not self.closed:
			self._entries[token] = _Entry(session=session, expires_at=now + self._ttl)
		return session

	def invalidate(self, *, user_id: Optional[str] = None, session_id: Optional[str] = None) -> int:
		"""Drop entries for a user or session; with neither given, drop everything."""
		if user_id is None and session_id is None:
			dropped = len(self._entries)
			self._entries.clear()
			return dropped
		stale = [
			token
			for token, entry in self._entries.items()
			if (user_id is not None and entry.session.user_id == user_id)
			or (session_id is not None and entry.session.session_id == session_id)
		]
		for token in stale:
			del self._entries[token]
		return len(stale)

	def _on_change(self, change: AuthStateChange) -> None:
		dropped = self.invalidate(user_id=change.user_id, session_id=change.session_id)
		logger.debug("session_state.invalidate event=%s dropped=%d", change.event, dropped)

	def close(self) -> None:
		if self._unsubscribe is not None:
			self._unsubscribe()
			self._unsubscribe = None
		self._entries.clear()
