"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from publicgoods.api import (
	auth,
	donate,
	navigation,
	ops,
	profiles,
	projects,
	recommendations,
	search,
	summaries,
	uploads,
)
from publicgoods.api.errors import install_error_handlers
from publicgoods.api.middleware_request_id import RequestIdMiddleware
from publicgoods.domain.identity.session_state import SessionState, auth_events
from publicgoods.domain.summaries import provider as summary_provider
from publicgoods.infra import postgres
from publicgoods.infra.redis import close_redis
from publicgoods.obs import init as obs_init
from publicgoods.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
	if settings.store_backend != "memory":
		await postgres.init_pool()
	session_state = SessionState(auth_events)
	app.state.session_state = session_state
	try:
		yield
	finally:
		session_state.close()
		app.state.session_state = None
		await summary_provider.close_provider()
		await postgres.close_pool()
		await close_redis()


app = FastAPI(title="Find Public Goods API", lifespan=lifespan)
install_error_handlers(app)

DEV_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

# Credentialed CORS cannot use "*"; fall back to the local web client in dev
allow_origins = [origin for origin in settings.cors_allow_origins if origin != "*"]
if not allow_origins and settings.is_dev():
	allow_origins = DEV_ORIGINS

app.add_middleware(
	CORSMiddleware,
	allow_origins=allow_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

# Static serving for uploaded files in dev
if settings.is_dev():
	upload_root = Path(settings.upload_root).resolve()
	upload_root.mkdir(parents=True, exist_ok=True)
	app.mount("/uploads", StaticFiles(directory=str(upload_root), check_dir=True), name="uploads")

obs_init(app)

# Ensure every request carries an X-Request-Id and make it available on request.state
app.add_middleware(RequestIdMiddleware)

app.include_router(search.router)
app.include_router(projects.router)
app.include_router(donate.router)
app.include_router(auth.router)
app.include_router(navigation.router)
app.include_router(profiles.router)
app.include_router(uploads.router)
app.include_router(summaries.router)
app.include_router(recommendations.router)
app.include_router(ops.router)
