"""Pydantic schemas for profile APIs."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from publicgoods.domain.profiles import models
from publicgoods.domain.visuals.schemas import FallbackOut


class ProfileUpsert(BaseModel):
	username: str = Field(default="", max_length=80)
	bio: str = Field(default="", max_length=2000)
	profile_photo: Optional[str] = None
	profile_banner_image: Optional[str] = None
	interests: list[str] = Field(default_factory=list)
	# Enforced at the input layer only; stored rows are never re-validated
	social_links: list[str] = Field(default_factory=list, max_length=models.SOCIAL_LINKS_MAX)


class ProfileOut(BaseModel):
	user_id: str
	username: str
	bio: str
	profile_photo: Optional[str] = None
	profile_banner_image: Optional[str] = None
	interests: list[str]
	social_links: list[str]
	fallback: FallbackOut

	@classmethod
	def from_model(cls, profile: models.UserProfile) -> "ProfileOut":
		return cls(
			user_id=profile.user_id,
			username=profile.username,
			bio=profile.bio,
			profile_photo=profile.profile_photo,
			profile_banner_image=profile.profile_banner_image,
			interests=list(profile.interests),
			social_links=list(profile.social_links),
			fallback=FallbackOut.for_entity(profile.user_id, profile.username),
		)
