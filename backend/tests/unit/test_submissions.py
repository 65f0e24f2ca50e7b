import pytest
from pydantic import ValidationError

from publicgoods.domain.profiles.schemas import ProfileOut
from publicgoods.domain.submissions.forms import ProfileForm, ProjectSubmissionForm, RepeatableField
from publicgoods.domain.submissions.uploads import (
	MAX_UPLOAD_BYTES,
	InvalidPurpose,
	SubmissionError,
	UploadTooLarge,
	build_blob_path,
	file_extension,
	validate_upload,
)


def test_repeatable_field_add_update_remove():
	field = RepeatableField()
	assert field.add() == 0
	assert field.add("climate") == 1
	field.update(0, "education")
	assert field.values == ["education", "climate"]
	assert field.remove(0) == "education"
	assert field.values == ["climate"]
	with pytest.raises(IndexError):
		field.update(5, "x")


def test_repeatable_field_allows_blank_and_duplicate_entries():
	field = RepeatableField(["a", "a"])
	field.add("")
	assert field.values == ["a", "a", ""]


def test_repeatable_field_cap():
	field = RepeatableField(max_items=5)
	for idx in range(5):
		field.add(f"https://example.org/{idx}")
	assert not field.can_add
	with pytest.raises(SubmissionError) as excinfo:
		field.add()
	assert excinfo.value.reason == "limit_reached"
	assert len(field) == 5


def test_validate_upload_rejects_oversized_file():
	validate_upload(MAX_UPLOAD_BYTES, limit=MAX_UPLOAD_BYTES)
	with pytest.raises(UploadTooLarge) as excinfo:
		validate_upload(2 * 1024 * 1024, limit=MAX_UPLOAD_BYTES)
	assert excinfo.value.status_code == 413
	assert excinfo.value.size == 2 * 1024 * 1024


def test_build_blob_path():
	assert build_blob_path("banner", "sunset.final.png", 1_700_000_000_123_456_789) == "banner/banner-1700000000123.png"
	assert build_blob_path("profile", "avatar.jpg", 5_000_000).startswith("profile/profile-5.")
	with pytest.raises(InvalidPurpose):
		build_blob_path("cover", "a.png", 1)


def test_file_extension_without_dot_uses_whole_name():
	assert file_extension("README") == "README"
	assert file_extension("a.b.c") == "c"


def test_project_form_compiles_payload_in_order():
	form = ProjectSubmissionForm(name="SolarDAO", description="Solar", category="Climate")
	form.impact_areas.add("energy")
	form.impact_areas.add("climate")
	payload = form.to_payload(submitted_by="user-1")
	assert payload.impact_areas == ["energy", "climate"]
	assert payload.website_url is None
	assert payload.submitted_by == "user-1"


def test_profile_form_social_link_cap_enforced_on_payload():
	form = ProfileForm(username="ada")
	for idx in range(5):
		form.social_links.add(f"https://x.example/{idx}")
	assert form.to_payload().social_links[-1] == "https://x.example/4"
	form.social_links._values.append("https://x.example/5")
	with pytest.raises(ValidationError):
		form.to_payload()


def test_profile_form_round_trips_profile():
	profile = ProfileOut.model_validate(
		{
			"user_id": "u1",
			"username": "ada",
			"bio": "math",
			"interests": ["climate", "climate"],
			"social_links": ["https://a.example"],
			"fallback": {"index": 0, "gradient": "g", "initial": "A"},
		}
	)
	form = ProfileForm.from_profile(profile)
	assert form.interests.values == ["climate", "climate"]
	assert form.social_links.max_items == 5
