"""Shared asyncpg pool.

Repositories call ``pool_or_none()``. It returns ``None`` only when
``STORE_BACKEND=memory``; otherwise it opens the pool on first use if startup
has not already done so, and a connection failure propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

import asyncpg

from publicgoods.settings import settings

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.pool.Pool] = None


def _dsn() -> str:
	# asyncpg resolves "localhost" to ::1 first on some hosts
	return settings.postgres_url.replace("@localhost", "@127.0.0.1")


async def init_pool() -> asyncpg.pool.Pool:
	global _pool
	if _pool is None:
		_pool = await asyncpg.create_pool(
			dsn=_dsn(),
			min_size=settings.postgres_min_pool_size,
			max_size=settings.postgres_max_pool_size,
			ssl="require" if settings.postgres_ssl else "disable",
		)
		logger.info(
			"postgres.pool_open min=%d max=%d",
			settings.postgres_min_pool_size,
			settings.postgres_max_pool_size,
		)
	return _pool


def set_pool(pool: Optional[asyncpg.pool.Pool]) -> None:
	global _pool
	_pool = pool


async def close_pool() -> None:
	global _pool
	if _pool is not None:
		await _pool.close()
		_pool = None


async def pool_or_none() -> Optional[asyncpg.pool.Pool]:
	if settings.store_backend == "memory":
		return None
	if _pool is None:
		await init_pool()
	return _pool
