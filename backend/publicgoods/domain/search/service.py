"""Search resolution for projects and profiles."""

from __future__ import annotations

import logging
import time
from typing import Optional

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from publicgoods.domain.common.errors import StoreUnavailable
from publicgoods.domain.profiles import repo as profiles_repo
from publicgoods.domain.profiles import schemas as profile_schemas
from publicgoods.domain.projects import repo as projects_repo
from publicgoods.domain.projects import schemas as project_schemas
from publicgoods.domain.search.params import SearchParams
from publicgoods.infra import rate_limit
from publicgoods.obs import metrics as obs_metrics
from publicgoods.settings import settings

logger = logging.getLogger(__name__)

SEARCH_ERROR = "Internal server error"


class SearchService:
	"""Resolve filter sets against the store.

	Results come back in store natural order; an empty result is not an error.
	"""

	def __init__(self, *, per_minute: Optional[int] = None) -> None:
		self._per_minute = per_minute

	@property
	def per_minute(self) -> int:
		return self._per_minute if self._per_minute is not None else settings.search_per_minute

	async def _enforce(self, client_id: str) -> None:
		try:
			await rate_limit.enforce("search", client_id, limit=self.per_minute, window_seconds=60)
		except (RedisConnectionError, RedisTimeoutError, OSError) as exc:
			# Search stays up when the limiter cannot reach Redis
			logger.warning("search.rate_limit_unavailable client=%s error=%s", client_id, exc)

	async def search_projects(self, params: SearchParams, *, client_id: str) -> list[project_schemas.ProjectOut]:
		await self._enforce(client_id)
		started = time.perf_counter()
		try:
			results = await projects_repo.search(params)
		except Exception as exc:
			obs_metrics.inc_search_error("projects")
			logger.exception("search.projects failed query=%s filters=%s", params.query, params.filters.active())
			raise StoreUnavailable(SEARCH_ERROR) from exc
		obs_metrics.observe_search_latency("projects", time.perf_counter() - started)
		obs_metrics.inc_search_query("projects", filtered=params.is_filtered)
		return [project_schemas.ProjectOut.from_model(project) for project in results]

	async def search_profiles(self, query: Optional[str], *, client_id: str) -> list[profile_schemas.ProfileOut]:
		await self._enforce(client_id)
		text = (query or "").strip() or None
		started = time.perf_counter()
		try:
			results = await profiles_repo.search(text)
		except Exception as exc:
			obs_metrics.inc_search_error("profiles")
			logger.exception("search.profiles failed query=%s", text)
			raise StoreUnavailable(SEARCH_ERROR) from exc
		obs_metrics.observe_search_latency("profiles", time.perf_counter() - started)
		obs_metrics.inc_search_query("profiles", filtered=text is not None)
		return [profile_schemas.ProfileOut.from_model(profile) for profile in results]
