"""Form state for the project submission and profile editing flows.

These mirror what a client holds while the user is typing: repeatable
inputs may carry blank or duplicate entries until the form is submitted,
at which point it compiles to the API payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from publicgoods.domain.profiles.models import SOCIAL_LINKS_MAX
from publicgoods.domain.profiles.schemas import ProfileOut, ProfileUpsert
from publicgoods.domain.projects.schemas import ProjectCreate
from publicgoods.domain.submissions.uploads import SubmissionError


class RepeatableField:
	"""An ordered list of text inputs with add/update/remove controls."""

	def __init__(self, values: Iterable[str] = (), *, max_items: Optional[int] = None) -> None:
		self._values: list[str] = list(values)
		self.max_items = max_items

	def __len__(self) -> int:
		return len(self._values)

	def __iter__(self):
		return iter(self._values)

	@property
	def values(self) -> list[str]:
		return list(self._values)

	@property
	def can_add(self) -> bool:
		return self.max_items is None or len(self._values) < self.max_items

	def add(self, value: str = "") -> int:
		if not self.can_add:
			raise SubmissionError("limit_reached")
		self._values.append(value)
		return len(self._values) - 1

	def update(self, index: int, value: str) -> None:
		self._check_index(index)
		self._values[index] = value

	def remove(self, index: int) -> str:
		self._check_index(index)
		return self._values.pop(index)

	def _check_index(self, index: int) -> None:
		if not 0 <= index < len(self._values):
			raise IndexError(index)


@dataclass
class ProjectSubmissionForm:
	name: str = ""
	description: str = ""
	category: str = ""
	funding_platform: str = ""
	governance_model: str = ""
	website_url: str = ""
	contact_email: str = ""
	project_profile_image: Optional[str] = None
	project_banner_image: Optional[str] = None
	impact_areas: RepeatableField = field(default_factory=RepeatableField)

	def to_payload(self, *, submitted_by: Optional[str] = None) -> ProjectCreate:
		return ProjectCreate(
			name=self.name,
			description=self.description,
			category=self.category,
			impact_areas=self.impact_areas.values,
			funding_platform=self.funding_platform,
			governance_model=self.governance_model,
			website_url=self.website_url or None,
			contact_email=self.contact_email or None,
			project_profile_image=self.project_profile_image,
			project_banner_image=self.project_banner_image,
			submitted_by=submitted_by,
		)


@dataclass
class ProfileForm:
	username: str = ""
	bio: str = ""
	profile_photo: Optional[str] = None
	profile_banner_image: Optional[str] = None
	interests: RepeatableField = field(default_factory=RepeatableField)
	social_links: RepeatableField = field(default_factory=lambda: RepeatableField(max_items=SOCIAL_LINKS_MAX))

	@classmethod
	def from_profile(cls, profile: ProfileOut) -> "ProfileForm":
		return cls(
			username=profile.username,
			bio=profile.bio,
			profile_photo=profile.profile_photo,
			profile_banner_image=profile.profile_banner_image,
			interests=RepeatableField(profile.interests),
			social_links=RepeatableField(profile.social_links, max_items=SOCIAL_LINKS_MAX),
		)

	def to_payload(self) -> ProfileUpsert:
		return ProfileUpsert(
			username=self.username,
			bio=self.bio,
			profile_photo=self.profile_photo,
			profile_banner_image=self.profile_banner_image,
			interests=self.interests.values,
			social_links=self.social_links.values,
		)
