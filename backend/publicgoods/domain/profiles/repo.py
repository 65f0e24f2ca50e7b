"""Persistence for user profiles keyed by owner."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Iterable, Optional

from publicgoods.domain.common.records import contains_ci, like_pattern, now_utc
from publicgoods.domain.profiles import models
from publicgoods.infra.postgres import pool_or_none

_COLUMNS = "user_id, username, bio, profile_photo, profile_banner_image, interests, social_links, updated_at"


class _MemoryProfileStore:
	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		# Insertion order stands in for the table's natural order
		self.profiles: dict[str, models.UserProfile] = {}

	async def reset(self) -> None:
		async with self._lock:
			self.profiles.clear()

	async def seed(self, profiles: Iterable[models.UserProfile]) -> None:
		async with self._lock:
			self.profiles = {profile.user_id: profile for profile in profiles}

	async def upsert(self, profile: models.UserProfile) -> models.UserProfile:
		async with self._lock:
			self.profiles[profile.user_id] = profile
			return profile

	async def get(self, user_id: str) -> Optional[models.UserProfile]:
		async with self._lock:
			return self.profiles.get(user_id)

	async def search(self, query: Optional[str]) -> list[models.UserProfile]:
		async with self._lock:
			return [
				profile
				for profile in self.profiles.values()
				if not query or contains_ci(query, profile.username, profile.bio)
			]


_MEMORY = _MemoryProfileStore()


async def seed_memory_store(profiles: Iterable[models.UserProfile]) -> None:
	await _MEMORY.seed(profiles)


async def reset_memory_state() -> None:
	await _MEMORY.reset()


async def upsert(profile: models.UserProfile) -> models.UserProfile:
	profile = dataclasses.replace(profile, updated_at=now_utc())
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.upsert(profile)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(
			f"""
			INSERT INTO user_profiles (
				user_id, username, bio, profile_photo, profile_banner_image, interests, social_links, updated_at
			)
			VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
			ON CONFLICT (user_id) DO UPDATE SET
				username = EXCLUDED.username,
				bio = EXCLUDED.bio,
				profile_photo = EXCLUDED.profile_photo,
				profile_banner_image = EXCLUDED.profile_banner_image,
				interests = EXCLUDED.interests,
				social_links = EXCLUDED.social_links,
				updated_at = EXCLUDED.updated_at
			RETURNING {_COLUMNS}
			""",
			profile.user_id,
			profile.username,
			profile.bio,
			profile.profile_photo,
			profile.profile_banner_image,
			list(profile.interests),
			list(profile.social_links),
			profile.updated_at,
		)
	return models.UserProfile.from_record(record)


async def get(user_id: str) -> Optional[models.UserProfile]:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.get(user_id)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(f"SELECT {_COLUMNS} FROM user_profiles WHERE user_id = $1", user_id)
	return models.UserProfile.from_record(record) if record else None


async def search(query: Optional[str]) -> list[models.UserProfile]:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.search(query)
	async with pool.acquire() as conn:
		if query:
			rows = await conn.fetch(
				f"""
				SELECT {_COLUMNS} FROM user_profiles
				WHERE username ILIKE $1 ESCAPE '\\' OR bio ILIKE $1 ESCAPE '\\'
				ORDER BY created_at, user_id
				""",
				like_pattern(query),
			)
		else:
			rows = await conn.fetch(f"SELECT {_COLUMNS} FROM user_profiles ORDER BY created_at, user_id")
	return [models.UserProfile.from_record(row) for row in rows]
