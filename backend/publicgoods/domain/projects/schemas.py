"""Pydantic schemas for project APIs."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from publicgoods.domain.projects import models
from publicgoods.domain.visuals.schemas import FallbackOut


class ProjectCreate(BaseModel):
	"""Submission payload.

	Required fields are optional here so a missing field is reported as a
	400 with a readable message rather than a schema error.
	"""

	name: Optional[str] = None
	description: Optional[str] = None
	category: Optional[str] = None
	impact_areas: Optional[list[str]] = None
	funding_platform: Optional[str] = None
	governance_model: Optional[str] = None
	website_url: Optional[str] = None
	contact_email: Optional[str] = None
	project_profile_image: Optional[str] = None
	project_banner_image: Optional[str] = None
	submitted_by: Optional[str] = None


class ProjectCreated(BaseModel):
	id: UUID


class ProjectOut(BaseModel):
	id: UUID
	name: str
	description: str
	category: str
	impact_areas: list[str]
	funding_platform: str
	governance_model: str
	website_url: Optional[str] = None
	contact_email: Optional[str] = None
	project_profile_image: Optional[str] = None
	project_banner_image: Optional[str] = None
	status: str
	ai_summary: Optional[str] = None
	submitted_by: Optional[str] = None
	created_at: datetime
	fallback: FallbackOut

	@classmethod
	def from_model(cls, project: models.Project) -> "ProjectOut":
		return cls(
			id=project.id,
			name=project.name,
			description=project.description,
			category=project.category,
			impact_areas=list(project.impact_areas),
			funding_platform=project.funding_platform,
			governance_model=project.governance_model,
			website_url=project.website_url,
			contact_email=project.contact_email,
			project_profile_image=project.project_profile_image,
			project_banner_image=project.project_banner_image,
			status=project.status,
			ai_summary=project.ai_summary,
			submitted_by=project.submitted_by,
			created_at=project.created_at,
			fallback=FallbackOut.for_entity(str(project.id), project.name),
		)


class ListingPageOut(BaseModel):
	items: list[ProjectOut]
	total: int = Field(..., ge=0)
	shown: int = Field(..., ge=0)
	has_more: bool
	state: str


class FilterOptions(BaseModel):
	categories: list[str]
	funding_platforms: list[str]
	governance_models: list[str]
	statuses: list[str]
