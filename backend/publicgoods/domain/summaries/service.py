"""Generate an AI summary for a project and store it on the project row."""

from __future__ import annotations

import logging

from publicgoods.domain.common.errors import StoreUnavailable, ValidationFailed
from publicgoods.domain.projects import repo as projects_repo
from publicgoods.domain.summaries import schemas
from publicgoods.domain.summaries.provider import SummaryProvider
from publicgoods.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

SUMMARY_ERROR = "Failed to generate summary"


async def generate_summary(payload: schemas.SummaryRequest, *, provider: SummaryProvider) -> schemas.SummaryOut:
	description = (payload.description or "").strip()
	if payload.project_id is None or not description:
		obs_metrics.inc_summary("invalid")
		raise ValidationFailed("Missing project_id or description")
	try:
		summary = await provider.summarize(description)
	except Exception as exc:
		obs_metrics.inc_summary("error")
		logger.exception("summaries.generate failed project_id=%s", payload.project_id)
		raise StoreUnavailable(SUMMARY_ERROR) from exc
	try:
		persisted = await projects_repo.set_summary(payload.project_id, summary)
	except Exception as exc:
		obs_metrics.inc_summary("error")
		logger.exception("summaries.persist failed project_id=%s", payload.project_id)
		raise StoreUnavailable(SUMMARY_ERROR) from exc
	if not persisted:
		logger.info("summaries.unknown_project project_id=%s", payload.project_id)
	obs_metrics.inc_summary("ok")
	return schemas.SummaryOut(summary=summary, persisted=persisted)
