"""Redis client plus the session-liveness keys kept in it.

``redis_client`` is a proxy so modules can import it once while tests swap
the underlying client for fakeredis. The real client is only built on first
use, which keeps imports free of network setup.
"""

from __future__ import annotations

from typing import Optional

import redis.asyncio as redis

from publicgoods.settings import settings

SESSION_PREFIX = "session:"


class RedisProxy:
	def __init__(self, client: Optional[redis.Redis] = None) -> None:
		self._client = client

	def set_client(self, client: Optional[redis.Redis]) -> None:
		self._client = client

	@property
	def client(self) -> redis.Redis:
		if self._client is None:
			self._client = redis.from_url(settings.redis_url, decode_responses=True)
		return self._client

	@property
	def connected(self) -> bool:
		return self._client is not None

	def __getattr__(self, item):
		return getattr(self.client, item)


redis_client: RedisProxy = RedisProxy()


def set_redis_client(client: Optional[redis.Redis]) -> None:
	redis_client.set_client(client)


async def close_redis() -> None:
	if redis_client.connected:
		await redis_client.client.aclose()
		redis_client.set_client(None)


def session_key(session_id: str) -> str:
	return f"{SESSION_PREFIX}{session_id}"


async def open_session(session_id: str, user_id: str, *, ttl_seconds: int) -> None:
	await redis_client.set(session_key(session_id), user_id, ex=ttl_seconds)


async def session_owner(session_id: str) -> Optional[str]:
	"""The user id a live session belongs to, or None once it expired or was revoked."""
	value = await redis_client.get(session_key(session_id))
	return str(value) if value is not None else None


async def close_session(session_id: str) -> None:
	await redis_client.delete(session_key(session_id))
