"""Service layer for project submission, detail and listing."""

from __future__ import annotations

import logging
import random
from typing import Optional
from uuid import UUID, uuid4

from publicgoods.domain.common.errors import NotFound, StoreUnavailable, ValidationFailed
from publicgoods.domain.listing.view import INITIAL_REVEAL, ListingPage, ListingView
from publicgoods.domain.projects import models, repo, schemas
from publicgoods.domain.search.params import SearchParams
from publicgoods.infra.auth import Authenticated, Session
from publicgoods.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = (
	"name",
	"description",
	"category",
	"impact_areas",
	"funding_platform",
	"governance_model",
)

LISTING_ERROR = "Failed to load projects."


def missing_fields(payload: schemas.ProjectCreate) -> list[str]:
	"""Required fields that are absent or blank.

	An empty ``impact_areas`` list counts as present.
	"""
	missing: list[str] = []
	for name in REQUIRED_FIELDS:
		value = getattr(payload, name)
		if value is None:
			missing.append(name)
		elif isinstance(value, str) and not value.strip():
			missing.append(name)
	return missing


def _optional(value: Optional[str]) -> Optional[str]:
	text = (value or "").strip()
	return text or None


def build_project(payload: schemas.ProjectCreate, *, session: Session) -> models.Project:
	missing = missing_fields(payload)
	if missing:
		raise ValidationFailed(f"Missing required fields: {', '.join(missing)}.")
	submitted_by = session.user_id if isinstance(session, Authenticated) else _optional(payload.submitted_by)
	return models.Project(
		id=uuid4(),
		name=payload.name.strip(),  # type: ignore[union-attr]
		description=payload.description.strip(),  # type: ignore[union-attr]
		category=payload.category,  # type: ignore[arg-type]
		impact_areas=list(payload.impact_areas or []),
		funding_platform=payload.funding_platform,  # type: ignore[arg-type]
		governance_model=payload.governance_model,  # type: ignore[arg-type]
		website_url=_optional(payload.website_url),
		contact_email=_optional(payload.contact_email),
		project_profile_image=_optional(payload.project_profile_image),
		project_banner_image=_optional(payload.project_banner_image),
		submitted_by=submitted_by,
	)


async def create_project(payload: schemas.ProjectCreate, *, session: Session) -> schemas.ProjectCreated:
	try:
		project = build_project(payload, session=session)
	except ValidationFailed:
		obs_metrics.inc_project_submitted("invalid")
		raise
	try:
		saved = await repo.insert(project)
	except Exception as exc:
		obs_metrics.inc_project_submitted("error")
		logger.exception("projects.create failed name=%s", project.name[:40])
		raise StoreUnavailable("Failed to add project.") from exc
	obs_metrics.inc_project_submitted("created")
	logger.info("projects.create id=%s category=%s", saved.id, saved.category)
	return schemas.ProjectCreated(id=saved.id)


async def get_project(project_id: UUID) -> schemas.ProjectOut:
	try:
		project = await repo.get(project_id)
	except Exception as exc:
		logger.exception("projects.get failed id=%s", project_id)
		raise StoreUnavailable("Failed to load project details.") from exc
	if project is None:
		raise NotFound()
	return schemas.ProjectOut.from_model(project)


async def listing_page(
	params: SearchParams,
	*,
	page: int = 0,
	seed: Optional[int] = None,
	initial_size: int = INITIAL_REVEAL,
) -> schemas.ListingPageOut:
	"""Resolve one reveal step of the browse grid.

	The same ``seed`` yields the same shuffle, so clients can page through
	an unfiltered listing by bumping ``page``.
	"""
	listing: ListingPage[models.Project] = ListingPage()
	listing.begin()
	try:
		results = await repo.search(params)
	except Exception as exc:
		listing.fail(LISTING_ERROR)
		logger.exception("projects.listing failed")
		raise StoreUnavailable(listing.error or LISTING_ERROR) from exc
	view = ListingView.for_results(
		results,
		filtered=params.is_filtered,
		initial_size=initial_size,
		rng=random.Random(seed) if seed is not None else None,
	)
	view.advance(page)
	listing.succeed(view)
	return schemas.ListingPageOut(
		items=[schemas.ProjectOut.from_model(project) for project in view.visible],
		total=view.total,
		shown=view.shown,
		has_more=view.has_more,
		state=listing.state.value,
	)


def filter_options() -> schemas.FilterOptions:
	return schemas.FilterOptions(
		categories=list(models.CATEGORIES),
		funding_platforms=list(models.FUNDING_PLATFORMS),
		governance_models=list(models.GOVERNANCE_MODELS),
		statuses=list(models.STATUSES),
	)
