from uuid import uuid4

import pytest

from publicgoods.domain.common.errors import NotFound, StoreUnavailable, ValidationFailed
from publicgoods.domain.projects import models, repo, schemas, service
from publicgoods.domain.search.params import SearchFilters, SearchParams
from publicgoods.infra.auth import ANONYMOUS, Authenticated


def _payload(**overrides):
	data = {
		"name": "SolarDAO",
		"description": "Community solar funding",
		"category": "Climate",
		"impact_areas": ["energy", "climate", "energy"],
		"funding_platform": "Gitcoin",
		"governance_model": "DAO",
	}
	data.update(overrides)
	return schemas.ProjectCreate(**data)


def test_missing_fields_reports_absent_and_blank():
	payload = _payload(category=None, name="   ")
	assert service.missing_fields(payload) == ["name", "category"]


def test_empty_impact_areas_counts_as_present():
	assert service.missing_fields(_payload(impact_areas=[])) == []


@pytest.mark.asyncio
async def test_create_without_category_writes_nothing():
	with pytest.raises(ValidationFailed) as excinfo:
		await service.create_project(_payload(category=None), session=ANONYMOUS)
	assert excinfo.value.status_code == 400
	assert "category" in excinfo.value.reason
	assert await repo.memory_count() == 0


@pytest.mark.asyncio
async def test_impact_areas_order_round_trips():
	created = await service.create_project(_payload(), session=ANONYMOUS)
	project = await service.get_project(created.id)
	assert project.impact_areas == ["energy", "climate", "energy"]
	assert project.status == models.STATUS_ACTIVE
	assert project.fallback.initial == "S"


@pytest.mark.asyncio
async def test_session_user_overrides_submitted_by():
	session = Authenticated(user_id="user-7", session_id="sid")
	created = await service.create_project(_payload(submitted_by="spoofed"), session=session)
	project = await service.get_project(created.id)
	assert project.submitted_by == "user-7"

	anon = await service.create_project(_payload(submitted_by="  guest "), session=ANONYMOUS)
	assert (await service.get_project(anon.id)).submitted_by == "guest"


@pytest.mark.asyncio
async def test_store_failure_maps_to_generic_error(monkeypatch):
	async def _boom(project):
		raise ConnectionError("db down")

	monkeypatch.setattr(repo, "insert", _boom)
	with pytest.raises(StoreUnavailable) as excinfo:
		await service.create_project(_payload(), session=ANONYMOUS)
	assert excinfo.value.status_code == 500
	assert excinfo.value.reason == "Failed to add project."


@pytest.mark.asyncio
async def test_get_unknown_project_raises_not_found():
	with pytest.raises(NotFound):
		await service.get_project(uuid4())


@pytest.mark.asyncio
async def test_listing_page_is_stable_for_a_seed():
	await repo.seed_memory_store(
		[
			models.Project(
				id=uuid4(),
				name=f"Project {idx}",
				description="d",
				category="Other",
				impact_areas=[],
				funding_platform="Other",
				governance_model="None",
			)
			for idx in range(12)
		]
	)
	first = await service.listing_page(SearchParams(), seed=3)
	again = await service.listing_page(SearchParams(), seed=3)
	assert [item.id for item in first.items] == [item.id for item in again.items]
	assert first.shown == 9
	assert first.has_more
	assert first.state == "populated"

	more = await service.listing_page(SearchParams(), seed=3, page=1)
	assert more.shown == 12
	assert not more.has_more
	assert [item.id for item in more.items[:9]] == [item.id for item in first.items]


@pytest.mark.asyncio
async def test_listing_page_empty_and_error(monkeypatch):
	empty = await service.listing_page(SearchParams(filters=SearchFilters(category="DeFi")))
	assert empty.state == "empty"
	assert empty.items == []

	async def _boom(params):
		raise OSError("unreachable")

	monkeypatch.setattr(repo, "search", _boom)
	with pytest.raises(StoreUnavailable) as excinfo:
		await service.listing_page(SearchParams())
	assert excinfo.value.reason == "Failed to load projects."


def test_filter_options_lists_enumerations():
	options = service.filter_options()
	assert "Needs Support" in options.statuses
	assert options.categories[0] == "Climate"
