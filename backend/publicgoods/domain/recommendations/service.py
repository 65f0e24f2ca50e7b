"""Project recommendations from a profile's declared interests."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from pydantic import BaseModel

from publicgoods.domain.common.errors import StoreUnavailable, ValidationFailed
from publicgoods.domain.profiles import repo as profiles_repo
from publicgoods.domain.projects import models as project_models
from publicgoods.domain.projects import repo as projects_repo
from publicgoods.domain.search.params import SearchParams

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class Recommendation(BaseModel):
	project_id: UUID
	name: str
	match_score: float


def _normalise_terms(values: Optional[Sequence[str]]) -> List[str]:
	if not values:
		return []
	normed: List[str] = []
	for value in values:
		norm = (value or "").strip().lower()
		if norm:
			normed.append(norm)
	return list(dict.fromkeys(normed))


def score_project(interests: Sequence[str], project: project_models.Project) -> float:
	"""Share of the interests covered by the project's impact areas or category."""
	terms = _normalise_terms(interests)
	if not terms:
		return 0.0
	tags = set(_normalise_terms([*project.impact_areas, project.category]))
	hits = sum(1 for term in terms if term in tags)
	return round(hits / len(terms), 2)


def rank_projects(
	interests: Sequence[str],
	projects: Sequence[project_models.Project],
	*,
	limit: int = DEFAULT_LIMIT,
) -> list[Recommendation]:
	scored: List[Tuple[float, project_models.Project]] = []
	for project in projects:
		score = score_project(interests, project)
		if score > 0:
			scored.append((score, project))
	scored.sort(key=lambda item: (-item[0], item[1].name.lower()))
	return [
		Recommendation(project_id=project.id, name=project.name, match_score=score)
		for score, project in scored[:limit]
	]


async def recommend(user_id: Optional[str], *, limit: int = DEFAULT_LIMIT) -> list[Recommendation]:
	user_key = (user_id or "").strip()
	if not user_key:
		raise ValidationFailed("Missing or invalid user_id")
	try:
		profile = await profiles_repo.get(user_key)
		if profile is None or not profile.interests:
			return []
		projects = await projects_repo.search(SearchParams())
	except Exception as exc:
		logger.exception("recommendations failed")
		raise StoreUnavailable() from exc
	return rank_projects(profile.interests, projects, limit=limit)
