"""Persistence for projects: asyncpg queries plus an in-memory store for tests and local runs."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Iterable, Optional
from uuid import UUID

from publicgoods.domain.common.records import contains_ci, like_pattern
from publicgoods.domain.projects import models
from publicgoods.domain.search.params import FILTER_KEYS, SearchParams
from publicgoods.infra.postgres import pool_or_none

_COLUMNS = (
	"id, name, description, category, impact_areas, funding_platform, governance_model, "
	"website_url, contact_email, project_profile_image, project_banner_image, status, "
	"ai_summary, submitted_by, created_at"
)


class _MemoryProjectStore:
	def __init__(self) -> None:
		self._lock = asyncio.Lock()
		self.projects: dict[UUID, models.Project] = {}

	async def reset(self) -> None:
		async with self._lock:
			self.projects.clear()

	async def seed(self, projects: Iterable[models.Project]) -> None:
		async with self._lock:
			self.projects = {project.id: project for project in projects}

	async def insert(self, project: models.Project) -> models.Project:
		async with self._lock:
			self.projects[project.id] = project
			return project

	async def get(self, project_id: UUID) -> Optional[models.Project]:
		async with self._lock:
			return self.projects.get(project_id)

	async def search(self, params: SearchParams) -> list[models.Project]:
		filters = params.filters.active()
		async with self._lock:
			results: list[models.Project] = []
			for project in self.projects.values():
				if params.query and not contains_ci(params.query, project.name, project.description):
					continue
				if any(getattr(project, key) != value for key, value in filters.items()):
					continue
				results.append(project)
			return results

	async def set_summary(self, project_id: UUID, summary: str) -> bool:
		async with self._lock:
			project = self.projects.get(project_id)
			if project is None:
				return False
			self.projects[project_id] = dataclasses.replace(project, ai_summary=summary)
			return True

	async def count(self) -> int:
		async with self._lock:
			return len(self.projects)


_MEMORY = _MemoryProjectStore()


async def seed_memory_store(projects: Iterable[models.Project]) -> None:
	await _MEMORY.seed(projects)


async def reset_memory_state() -> None:
	await _MEMORY.reset()


async def memory_count() -> int:
	return await _MEMORY.count()


def _search_sql(params: SearchParams) -> tuple[str, list[object]]:
	clauses: list[str] = []
	args: list[object] = []
	if params.query:
		args.append(like_pattern(params.query))
		idx = len(args)
		clauses.append(f"(name ILIKE ${idx} ESCAPE '\\' OR description ILIKE ${idx} ESCAPE '\\')")
	for key, value in params.filters.active().items():
		# Column names come from FILTER_KEYS, never from user input
		assert key in FILTER_KEYS
		args.append(value)
		clauses.append(f"{key} = ${len(args)}")
	where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
	return f"SELECT {_COLUMNS} FROM projects{where} ORDER BY created_at, id", args


async def insert(project: models.Project) -> models.Project:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.insert(project)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(
			f"""
			INSERT INTO projects (
				id, name, description, category, impact_areas, funding_platform, governance_model,
				website_url, contact_email, project_profile_image, project_banner_image, status,
				ai_summary, submitted_by, created_at
			)
			VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15)
			RETURNING {_COLUMNS}
			""",
			project.id,
			project.name,
			project.description,
			project.category,
			list(project.impact_areas),
			project.funding_platform,
			project.governance_model,
			project.website_url,
			project.contact_email,
			project.project_profile_image,
			project.project_banner_image,
			project.status,
			project.ai_summary,
			project.submitted_by,
			project.created_at,
		)
	return models.Project.from_record(record)


async def get(project_id: UUID) -> Optional[models.Project]:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.get(project_id)
	async with pool.acquire() as conn:
		record = await conn.fetchrow(f"SELECT {_COLUMNS} FROM projects WHERE id = $1", project_id)
	return models.Project.from_record(record) if record else None


async def search(params: SearchParams) -> list[models.Project]:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.search(params)
	sql, args = _search_sql(params)
	async with pool.acquire() as conn:
		rows = await conn.fetch(sql, *args)
	return [models.Project.from_record(row) for row in rows]


async def set_summary(project_id: UUID, summary: str) -> bool:
	pool = await pool_or_none()
	if pool is None:
		return await _MEMORY.set_summary(project_id, summary)
	async with pool.acquire() as conn:
		result = await conn.execute("UPDATE projects SET ai_summary = $2 WHERE id = $1", project_id, summary)
	return result == "UPDATE 1"
