import pytest


@pytest.mark.asyncio
async def test_oversized_file_is_rejected_before_storage(api_client, blob_storage):
	files = {"file": ("big.png", b"\0" * (2 * 1024 * 1024), "image/png")}
	resp = await api_client.post("/api/uploads/project-images/banner", files=files)
	assert resp.status_code == 413
	assert resp.json()["error"] == "File is too large. Maximum allowed size is 1MB."
	assert not any(blob_storage.root.rglob("*.png"))


@pytest.mark.asyncio
async def test_upload_returns_public_url(api_client, blob_storage):
	files = {"file": ("avatar.jpeg", b"jpeg-bytes", "image/jpeg")}
	resp = await api_client.post("/api/uploads/profile-images/profile", files=files)
	assert resp.status_code == 200
	body = resp.json()
	assert body["path"].startswith("profile/profile-")
	assert body["path"].endswith(".jpeg")
	assert body["url"] == f"http://testserver/uploads/profile-images/{body['path']}"
	assert (blob_storage.root / "profile-images" / body["path"]).read_bytes() == b"jpeg-bytes"


@pytest.mark.asyncio
async def test_unknown_bucket_and_purpose(api_client, blob_storage):
	files = {"file": ("a.png", b"x", "image/png")}
	resp = await api_client.post("/api/uploads/secrets/profile", files=files)
	assert resp.status_code == 400
	assert resp.json()["error"] == "unknown_bucket"

	resp = await api_client.post("/api/uploads/project-images/cover", files=files)
	assert resp.status_code == 400
	assert resp.json()["error"] == "invalid_purpose:cover"
