import sys
from pathlib import Path

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from publicgoods.domain.donations import repo as donations_repo
from publicgoods.domain.identity import repo as identity_repo
from publicgoods.domain.identity.session_state import SessionState, auth_events
from publicgoods.domain.profiles import repo as profiles_repo
from publicgoods.domain.projects import repo as projects_repo
from publicgoods.domain.summaries import provider as summary_provider
from publicgoods.infra import postgres, storage
from publicgoods.infra.redis import set_redis_client
from publicgoods.main import app
from publicgoods.settings import settings


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(None)
		await client.flushall()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)
	postgres.set_pool(None)


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Dev mode enables the X-User-Id header; search limits are raised out of the way."""
	original_env = settings.environment
	original_search = settings.search_per_minute
	settings.environment = "dev"
	settings.search_per_minute = 10_000
	try:
		yield
	finally:
		settings.environment = original_env
		settings.search_per_minute = original_search


@pytest_asyncio.fixture(autouse=True)
async def reset_memory_stores():
	await projects_repo.reset_memory_state()
	await profiles_repo.reset_memory_state()
	await donations_repo.reset_memory_state()
	await identity_repo.reset_memory_state()
	yield
	summary_provider.set_provider(None)


@pytest.fixture
def blob_storage(tmp_path):
	local = storage.LocalBlobStorage(tmp_path / "uploads", "http://testserver/uploads")
	storage.set_storage(local)
	try:
		yield local
	finally:
		storage.set_storage(None)


@pytest.fixture
def session_state():
	"""Install the process-wide session cache the lifespan would normally create."""
	state = SessionState(auth_events)
	app.state.session_state = state
	try:
		yield state
	finally:
		state.close()
		app.state.session_state = None


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
