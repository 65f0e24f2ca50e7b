"""Persistence for identity rows."""

from __future__ import annotations

import asyncio
from typing import Optional

from publicgoods.domain.identity import models
from publicgoods.infra.postgres import pool_or_none

_COLUMNS = "id, email, password_hash, wallet_address, created_at"


class _MemoryUserStore:
	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		self.users: dict[str, models.User] = {}

	async def reset(self) -> None:
		async with self._lock:
			self.users.clear()

	async def insert(self, user: models.User) -> Optional[models.User]:
		async with self._lock:
			if user.email in self.users:
				return None
			self.users[user.email] = user
			return user

	async def get_by_email(self, email: str) -> Optional[models.User]:
		async with self._lock:
			return self.users.get(email)


_MEMORY = _MemoryUserStore()


async def reset_memory_state() -> None:
	await _MEMORY.reset()


async def insert(user: models.User) -> Optional[models.User]:
	"""Insert a user; returns None when the email is already registered."""
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.insert(user)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(
			f"""
			INSERT INTO users (id, email, password_hash, wallet_address, created_at)
			VALUES ($1, $2, $3, $4, $5)
			ON CONFLICT (email) DO NOTHING
			RETURNING {_COLUMNS}
			""",
			user.id,
			user.email,
			user.password_hash,
			user.wallet_address,
			user.created_at,
		)
	return models.User.from_record(record) if record else None


async def get_by_email(email: str) -> Optional[models.User]:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.get_by_email(email)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(f"SELECT {_COLUMNS} FROM users WHERE email = $1", email)
	return models.User.from_record(record) if record else None
