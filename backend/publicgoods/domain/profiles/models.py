"""Domain models for user profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from publicgoods.domain.common.records import (
	RecordLike,
	as_datetime,
	as_optional_str,
	as_str_list,
	now_utc,
)

SOCIAL_LINKS_MAX = 5


@dataclass(frozen=True, slots=True)
class UserProfile:
	user_id: str
	username: str = ""
	bio: str = ""
	profile_photo: Optional[str] = None
	profile_banner_image: Optional[str] = None
	interests: list[str] = field(default_factory=list)
	social_links: list[str] = field(default_factory=list)
	updated_at: datetime = field(default_factory=now_utc)

	@classmethod
	def empty(cls, user_id: str) -> "UserProfile":
		return cls(user_id=user_id)

	@classmethod
	def from_record(cls, record: RecordLike) -> "UserProfile":
		return cls(
			user_id=str(record["user_id"]),
			username=str(record.get("username") or ""),
			bio=str(record.get("bio") or ""),
			profile_photo=as_optional_str(record.get("profile_photo")),
			profile_banner_image=as_optional_str(record.get("profile_banner_image")),
			interests=as_str_list(record.get("interests")),
			social_links=as_str_list(record.get("social_links")),
			updated_at=as_datetime(record.get("updated_at")),
		)
