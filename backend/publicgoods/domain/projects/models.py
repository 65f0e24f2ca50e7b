"""Domain models for project listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from publicgoods.domain.common.records import (
	RecordLike,
	as_datetime,
	as_optional_str,
	as_str_list,
	as_uuid,
	now_utc,
)

STATUS_ACTIVE = "Active"
STATUS_NEEDS_SUPPORT = "Needs Support"
STATUS_CLOSED = "Closed"
STATUSES: tuple[str, ...] = (STATUS_ACTIVE, STATUS_NEEDS_SUPPORT, STATUS_CLOSED)

CATEGORIES: tuple[str, ...] = ("Climate", "Education", "DeFi", "Social Impact", "Infrastructure", "Other")
FUNDING_PLATFORMS: tuple[str, ...] = ("Gitcoin", "Optimism RPGF", "Ethereum Foundation", "Other")
GOVERNANCE_MODELS: tuple[str, ...] = ("DAO", "Quadratic Funding", "Hybrid", "None")


@dataclass(frozen=True, slots=True)
class Project:
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
	status: str = STATUS_ACTIVE
	ai_summary: Optional[str] = None
	submitted_by: Optional[str] = None
	created_at: datetime = field(default_factory=now_utc)

	@classmethod
	def from_record(cls, record: RecordLike) -> "Project":
		return cls(
			id=as_uuid(record["id"]),
			name=str(record.get("name") or ""),
			description=str(record.get("description") or ""),
			category=str(record.get("category") or ""),
			impact_areas=as_str_list(record.get("impact_areas")),
			funding_platform=str(record.get("funding_platform") or ""),
			governance_model=str(record.get("governance_model") or ""),
			website_url=as_optional_str(record.get("website_url")),
			contact_email=as_optional_str(record.get("contact_email")),
			project_profile_image=as_optional_str(record.get("project_profile_image")),
			project_banner_image=as_optional_str(record.get("project_banner_image")),
			status=str(record.get("status") or STATUS_ACTIVE),
			ai_summary=as_optional_str(record.get("ai_summary")),
			submitted_by=as_optional_str(record.get("submitted_by")),
			created_at=as_datetime(record.get("created_at")),
		)
