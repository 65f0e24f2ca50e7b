"""Operations endpoints: probes and Prometheus metrics."""

from __future__ import annotations

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from publicgoods.obs import health
from publicgoods.settings import settings

router = APIRouter(prefix="", tags=["ops"])


@router.get("/health/live")
async def live() -> dict[str, str]:
	return {"status": "ok", "service": settings.service_name}


@router.get("/health/ready")
async def ready() -> JSONResponse:
	status_code, body = await health.readiness()
	return JSONResponse(status_code=status_code, content=body)


@router.get("/metrics")
async def metrics() -> Response:
	return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
