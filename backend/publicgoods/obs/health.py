"""Liveness and readiness probes."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any

from publicgoods.infra import postgres
from publicgoods.infra.redis import redis_client
from publicgoods.obs import metrics

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS = 0.5


async def _probe(name: str, check) -> dict[str, Any]:
	started = perf_counter()
	try:
		await asyncio.wait_for(check(), timeout=PROBE_TIMEOUT_SECONDS)
	except Exception as exc:
		metrics.mark_dependency(name, False)
		logger.warning("health.%s unavailable", name, exc_info=True)
		return {"ok": False, "error": type(exc).__name__}
	metrics.mark_dependency(name, True)
	return {"ok": True, "latency_ms": round((perf_counter() - started) * 1000, 2)}


async def _ping_postgres() -> None:
	pool = await postgres.pool_or_none()
	if pool is None:
		return
	async with pool.acquire() as conn:
		await conn.execute("SELECT 1")


async def _ping_redis() -> None:
	await redis_client.ping()


async def readiness() -> tuple[int, dict[str, Any]]:
	"""503 unless both the store and Redis answer."""
	checks = {
		"postgres": await _probe("postgres", _ping_postgres),
		"redis": await _probe("redis", _ping_redis),
	}
	ok = all(check["ok"] for check in checks.values())
	return (200 if ok else 503), {"status": "ok" if ok else "degraded", "checks": checks}
