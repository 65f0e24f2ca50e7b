"""Service layer for profile lookup, search and owner upserts."""

from __future__ import annotations

import logging

from publicgoods.domain.common.errors import NotFound, StoreUnavailable
from publicgoods.domain.identity.session_state import USER_UPDATED, AuthStateChange, auth_events
from publicgoods.domain.profiles import models, repo, schemas
from publicgoods.infra.auth import Authenticated
from publicgoods.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


async def get_profile(user_id: str) -> schemas.ProfileOut:
	try:
		profile = await repo.get(user_id)
	except Exception as exc:
		logger.exception("profiles.get failed")
		raise StoreUnavailable("Failed to load profile.") from exc
	if profile is None:
		raise NotFound()
	return schemas.ProfileOut.from_model(profile)


async def get_own_profile(user: Authenticated) -> schemas.ProfileOut:
	"""The caller's profile, or an empty template when none has been saved yet."""
	try:
		profile = await repo.get(user.user_id)
	except Exception as exc:
		logger.exception("profiles.me failed")
		raise StoreUnavailable("Failed to load profile.") from exc
	return schemas.ProfileOut.from_model(profile or models.UserProfile.empty(user.user_id))


async def save_own_profile(user: Authenticated, payload: schemas.ProfileUpsert) -> schemas.ProfileOut:
	profile = models.UserProfile(
		user_id=user.user_id,
		username=payload.username.strip(),
		bio=payload.bio,
		profile_photo=payload.profile_photo or None,
		profile_banner_image=payload.profile_banner_image or None,
		interests=list(payload.interests),
		social_links=list(payload.social_links),
	)
	try:
		saved = await repo.upsert(profile)
	except Exception as exc:
		obs_metrics.inc_profile_saved("error")
		logger.exception("profiles.upsert failed")
		raise StoreUnavailable("Failed to save profile.") from exc
	obs_metrics.inc_profile_saved("saved")
	await auth_events.publish(AuthStateChange(event=USER_UPDATED, user_id=user.user_id, session_id=user.session_id))
	return schemas.ProfileOut.from_model(saved)
