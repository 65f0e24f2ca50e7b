import pytest

from publicgoods.domain.profiles import repo as profiles_repo
from publicgoods.domain.profiles.models import UserProfile

ME = {"X-User-Id": "user-1"}


@pytest.mark.asyncio
async def test_own_profile_requires_auth(api_client):
	resp = await api_client.get("/api/profiles/me")
	assert resp.status_code == 401
	resp = await api_client.post("/api/profiles/me", json={"username": "ada"})
	assert resp.status_code == 401


@pytest.mark.asyncio
async def test_own_profile_starts_empty(api_client):
	body = (await api_client.get("/api/profiles/me", headers=ME)).json()
	assert body["user_id"] == "user-1"
	assert body["username"] == ""
	assert body["social_links"] == []


@pytest.mark.asyncio
async def test_upsert_replaces_profile(api_client):
	first = {"username": "ada", "bio": "hi", "interests": ["climate"], "social_links": ["https://a.example"]}
	resp = await api_client.post("/api/profiles/me", json=first, headers=ME)
	assert resp.status_code == 200

	second = {"username": "ada l.", "interests": ["education"], "social_links": []}
	resp = await api_client.post("/api/profiles/me", json=second, headers=ME)
	assert resp.status_code == 200

	body = (await api_client.get("/api/profiles/user-1")).json()
	assert body["username"] == "ada l."
	assert body["interests"] == ["education"]
	assert body["social_links"] == []
	assert body["fallback"]["initial"] == "A"


@pytest.mark.asyncio
async def test_more_than_five_links_is_rejected(api_client):
	links = [f"https://site{idx}.example" for idx in range(6)]
	resp = await api_client.post("/api/profiles/me", json={"username": "ada", "social_links": links}, headers=ME)
	assert resp.status_code == 400
	assert await profiles_repo.get("user-1") is None


@pytest.mark.asyncio
async def test_stored_rows_over_the_cap_still_load(api_client):
	links = [f"https://site{idx}.example" for idx in range(7)]
	await profiles_repo.seed_memory_store([UserProfile(user_id="legacy", username="old", social_links=links)])
	body = (await api_client.get("/api/profiles/legacy")).json()
	assert len(body["social_links"]) == 7


@pytest.mark.asyncio
async def test_unknown_profile_is_404(api_client):
	resp = await api_client.get("/api/profiles/nobody")
	assert resp.status_code == 404


@pytest.mark.asyncio
async def test_profile_search(api_client):
	await api_client.post("/api/profiles/me", json={"username": "solar_sam", "bio": "energy"}, headers=ME)
	await api_client.post("/api/profiles/me", json={"username": "bookworm"}, headers={"X-User-Id": "user-2"})
	resp = await api_client.get("/api/search-profiles", params={"query": "SOLAR"})
	assert [item["user_id"] for item in resp.json()] == ["user-1"]
