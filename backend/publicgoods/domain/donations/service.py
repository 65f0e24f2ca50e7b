"""Record donations against listed projects."""

from __future__ import annotations

import logging
from uuid import uuid4

from publicgoods.domain.common.errors import NotFound, StoreUnavailable, ValidationFailed
from publicgoods.domain.donations import models, repo, schemas
from publicgoods.domain.projects import repo as projects_repo
from publicgoods.infra.auth import Authenticated, Session
from publicgoods.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


async def donate(payload: schemas.DonationCreate, *, session: Session) -> list[schemas.DonationOut]:
	"""Insert one donation row and return it as a one-element list.

	The donor is taken from the session; anonymous donations are allowed.
	"""
	if payload.project_id is None or not payload.amount:
		raise ValidationFailed("Missing required fields")
	if payload.amount < 0:
		raise ValidationFailed("amount must be positive")
	try:
		project = await projects_repo.get(payload.project_id)
	except Exception as exc:
		logger.exception("donations.project_lookup failed project_id=%s", payload.project_id)
		raise StoreUnavailable("Failed to record donation.") from exc
	if project is None:
		raise NotFound()

	user_id = session.user_id if isinstance(session, Authenticated) else None
	donation = models.Donation(
		id=uuid4(),
		project_id=payload.project_id,
		amount=payload.amount,
		user_id=user_id,
		payment_method=(payload.payment_method or "").strip() or models.DEFAULT_PAYMENT_METHOD,
	)
	try:
		saved = await repo.insert(donation)
	except Exception as exc:
		logger.exception("donations.insert failed project_id=%s", payload.project_id)
		raise StoreUnavailable("Failed to record donation.") from exc
	obs_metrics.inc_donation(saved.payment_method, anonymous=user_id is None)
	logger.info("donations.recorded project_id=%s", saved.project_id)
	return [schemas.DonationOut.from_model(saved)]
