"""Persistence for donations."""

from __future__ import annotations

import asyncio

from publicgoods.domain.donations import models
from publicgoods.infra.postgres import pool_or_none

_COLUMNS = "id, project_id, user_id, amount, payment_method, created_at"


class _MemoryDonationStore:
	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		self.donations: list[models.Donation] = []

	async def reset(self) -> None:
		async with self._lock:
			self.donations.clear()

	async def insert(self, donation: models.Donation) -> models.Donation:
		async with self._lock:
			self.donations.append(donation)
			return donation


_MEMORY = _MemoryDonationStore()


async def memory_rows() -> list[models.Donation]:
	return list(_MEMORY.donations)


async def reset_memory_state() -> None:
	await _MEMORY.reset()


async def insert(donation: models.Donation) -> models.Donation:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.insert(donation)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(
			f"""
			INSERT INTO donations (id, project_id, user_id, amount, payment_method, created_at)
			VALUES ($1, $2, $3, $4, $5, $6)
			RETURNING {_COLUMNS}
			""",
			donation.id,
			donation.project_id,
			donation.user_id,
			donation.amount,
			donation.payment_method,
			donation.created_at,
		)
	return models.Donation.from_record(record)

