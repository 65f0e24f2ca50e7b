from uuid import uuid4

import pytest

from publicgoods.domain.projects import repo as projects_repo


def _payload(**overrides):
	payload = {
		"name": "SolarDAO",
		"description": "Community solar funding",
		"category": "Climate",
		"impact_areas": ["energy", "climate", "local"],
		"funding_platform": "Gitcoin",
		"governance_model": "DAO",
	}
	payload.update(overrides)
	return payload


@pytest.mark.asyncio
async def test_missing_category_is_rejected_without_a_row(api_client):
	payload = _payload()
	del payload["category"]
	resp = await api_client.post("/api/projects/add", json=payload)
	assert resp.status_code == 400
	assert resp.json()["error"] == "Missing required fields: category."
	assert await projects_repo.memory_count() == 0


@pytest.mark.asyncio
async def test_blank_fields_are_listed_in_order(api_client):
	resp = await api_client.post("/api/projects/add", json=_payload(name="  ", governance_model=""))
	assert resp.status_code == 400
	assert resp.json()["error"] == "Missing required fields: name, governance_model."


@pytest.mark.asyncio
async def test_add_then_fetch_detail(api_client):
	resp = await api_client.post("/api/projects/add", json=_payload(), headers={"X-User-Id": "user-7"})
	assert resp.status_code == 200
	project_id = resp.json()["id"]

	detail = await api_client.get(f"/api/projects/{project_id}")
	assert detail.status_code == 200
	body = detail.json()
	assert body["impact_areas"] == ["energy", "climate", "local"]
	assert body["status"] == "Active"
	assert body["submitted_by"] == "user-7"
	assert body["fallback"]["initial"] == "S"


@pytest.mark.asyncio
async def test_empty_impact_areas_are_accepted(api_client):
	resp = await api_client.post("/api/projects/add", json=_payload(impact_areas=[]))
	assert resp.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/projects/add", "/api/donate", "/api/auth", "/api/generate-summary"])
async def test_get_on_post_only_route_is_method_not_allowed(api_client, path):
	resp = await api_client.get(path)
	assert resp.status_code == 405
	assert resp.headers["allow"] == "POST"
	assert resp.json()["error"] == "Method not allowed"


@pytest.mark.asyncio
async def test_unknown_project_is_404(api_client):
	resp = await api_client.get(f"/api/projects/{uuid4()}")
	assert resp.status_code == 404
	assert resp.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_listing_reveals_in_steps(api_client):
	for idx in range(12):
		resp = await api_client.post("/api/projects/add", json=_payload(name=f"Project {idx}"))
		assert resp.status_code == 200

	first = (await api_client.get("/api/projects/listing", params={"seed": 42})).json()
	assert first["total"] == 12
	assert first["shown"] == 9
	assert first["has_more"] is True
	assert first["state"] == "populated"

	again = (await api_client.get("/api/projects/listing", params={"seed": 42})).json()
	assert [item["id"] for item in again["items"]] == [item["id"] for item in first["items"]]

	second = (await api_client.get("/api/projects/listing", params={"seed": 42, "page": 1})).json()
	assert second["shown"] == 12
	assert second["has_more"] is False


@pytest.mark.asyncio
async def test_filtered_listing_keeps_natural_order(api_client):
	for idx in range(11):
		await api_client.post("/api/projects/add", json=_payload(name=f"Project {idx}"))
	body = (await api_client.get("/api/projects/listing", params={"category": "Climate"})).json()
	assert [item["name"] for item in body["items"]] == [f"Project {idx}" for idx in range(9)]
	assert body["total"] == 11
	assert body["has_more"] is True


@pytest.mark.asyncio
async def test_filter_options(api_client):
	body = (await api_client.get("/api/filters")).json()
	assert "Climate" in body["categories"]
	assert body["statuses"] == ["Active", "Needs Support", "Closed"]
