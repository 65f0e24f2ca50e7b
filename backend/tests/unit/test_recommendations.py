from uuid import uuid4

import pytest

from publicgoods.domain.common.errors import ValidationFailed
from publicgoods.domain.profiles import repo as profiles_repo
from publicgoods.domain.profiles.models import UserProfile
from publicgoods.domain.projects import repo as projects_repo
from publicgoods.domain.projects.models import Project
from publicgoods.domain.recommendations.service import rank_projects, recommend, score_project


def _project(name, category, impact_areas):
	return Project(
		id=uuid4(),
		name=name,
		description=name,
		category=category,
		impact_areas=impact_areas,
		funding_platform="Gitcoin",
		governance_model="DAO",
	)


def test_score_counts_interest_coverage():
	project = _project("SolarDAO", "Climate", ["Energy", "climate"])
	assert score_project(["climate", "energy"], project) == 1.0
	assert score_project(["climate", "education", "art"], project) == 0.33
	assert score_project([], project) == 0.0
	assert score_project(["  ", ""], project) == 0.0


def test_rank_drops_misses_and_sorts_by_score():
	solar = _project("SolarDAO", "Climate", ["energy"])
	school = _project("Open Education Grants", "Education", ["education", "climate"])
	chain = _project("Chain Tools", "Infrastructure", [])
	ranked = rank_projects(["climate", "energy"], [chain, school, solar])
	assert [item.name for item in ranked] == ["SolarDAO", "Open Education Grants"]
	assert ranked[0].match_score == 1.0
	assert ranked[1].match_score == 0.5


@pytest.mark.asyncio
async def test_recommend_requires_user_id():
	with pytest.raises(ValidationFailed) as excinfo:
		await recommend("  ")
	assert excinfo.value.reason == "Missing or invalid user_id"


@pytest.mark.asyncio
async def test_recommend_uses_stored_profile():
	await projects_repo.seed_memory_store([_project("SolarDAO", "Climate", ["energy"])])
	await profiles_repo.seed_memory_store([UserProfile(user_id="u1", interests=["Energy"])])
	ranked = await recommend("u1")
	assert [item.name for item in ranked] == ["SolarDAO"]
	assert await recommend("unknown") == []
