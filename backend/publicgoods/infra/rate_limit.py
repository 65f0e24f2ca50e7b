"""Fixed-window request budgets counted in Redis.

Each (kind, actor) pair gets one counter per window. The counter expires
with its window, so there is nothing to clean up.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from publicgoods.infra.redis import redis_client


@dataclass(frozen=True, slots=True)
class WindowUsage:
	count: int
	limit: int
	resets_in: int

	@property
	def allowed(self) -> bool:
		return self.count <= self.limit


async def hit(
	kind: str,
	actor_id: str,
	*,
	limit: int,
	window_seconds: int = 60,
	now: Optional[float] = None,
) -> WindowUsage:
	"""Count one request against the actor's current window."""
	window = max(1, int(window_seconds))
	now = now if now is not None else time.time()
	slot = int(now // window)
	resets_in = max(1, (slot + 1) * window - int(now))
	if limit <= 0:
		return WindowUsage(count=1, limit=limit, resets_in=resets_in)
	key = f"rl:{kind}:{actor_id}:{slot}:{window}"
	async with redis_client.pipeline(transaction=True) as pipe:
		pipe.incr(key)
		pipe.expire(key, window)
		count, _ = await pipe.execute()
	return WindowUsage(count=int(count), limit=limit, resets_in=resets_in)


async def allow(kind: str, actor_id: str, *, limit: int, window_seconds: int = 60) -> bool:
	usage = await hit(kind, actor_id, limit=limit, window_seconds=window_seconds)
	return usage.allowed


class RateLimitExceeded(Exception):
	"""The caller spent its budget for the current window."""

	reason = "rate_limit"
	status_code = 429

	def __init__(self, kind: str, retry_after: int) -> None:
		super().__init__(f"rate_limit:{kind}")
		self.kind = kind
		self.retry_after = retry_after


async def enforce(kind: str, actor_id: str, *, limit: int, window_seconds: int = 60) -> None:
	usage = await hit(kind, actor_id, limit=limit, window_seconds=window_seconds)
	if not usage.allowed:
		raise RateLimitExceeded(kind, usage.resets_in)
