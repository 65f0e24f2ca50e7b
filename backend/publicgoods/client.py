"""Async HTTP client for the Find Public Goods API.

Input-layer checks (attachment size, social-link cap) run here before any
request is sent, the same way the web forms apply them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from publicgoods.domain.identity.schemas import AuthResponse
from publicgoods.domain.profiles.schemas import ProfileOut
from publicgoods.domain.projects.schemas import ListingPageOut, ProjectOut
from publicgoods.domain.search.params import SearchFilters, build_search_params
from publicgoods.domain.submissions.forms import ProfileForm, ProjectSubmissionForm
from publicgoods.domain.submissions.uploads import build_blob_path, validate_upload


class ApiError(Exception):
	"""Non-2xx answer from the API; ``message`` is the server's ``error`` field."""

	def __init__(self, status_code: int, message: str, request_id: Optional[str] = None) -> None:
		super().__init__(f"{status_code}: {message}")
		self.status_code = status_code
		self.message = message
		self.request_id = request_id


@dataclass
class PublicGoodsClient:
	http: httpx.AsyncClient
	access_token: Optional[str] = None
	max_upload_bytes: Optional[int] = None

	def _auth_headers(self) -> dict[str, str]:
		headers: dict[str, str] = {}
		if self.access_token:
			headers["Authorization"] = f"Bearer {self.access_token}"
		return headers

	async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
		response = await self.http.request(method, path, headers=self._auth_headers(), **kwargs)
		if response.is_error:
			try:
				body = response.json()
			except ValueError:
				body = {}
			message = body.get("error") if isinstance(body, dict) else None
			request_id = body.get("request_id") if isinstance(body, dict) else None
			raise ApiError(response.status_code, str(message or response.reason_phrase), request_id)
		return response.json()

	async def search_projects(
		self,
		query: Optional[str] = None,
		filters: SearchFilters | Mapping[str, Any] | None = None,
	) -> list[ProjectOut]:
		params = build_search_params(query, filters)
		data = await self._request("GET", "/api/search-projects", params=params)
		return [ProjectOut.model_validate(item) for item in data]

	async def search_profiles(self, query: Optional[str] = None) -> list[ProfileOut]:
		params = build_search_params(query)
		data = await self._request("GET", "/api/search-profiles", params=params)
		return [ProfileOut.model_validate(item) for item in data]

	async def listing(self, *, seed: Optional[int] = None, page: int = 0) -> ListingPageOut:
		params: dict[str, Any] = {"page": page}
		if seed is not None:
			params["seed"] = seed
		data = await self._request("GET", "/api/projects/listing", params=params)
		return ListingPageOut.model_validate(data)

	async def upload_image(
		self,
		bucket: str,
		purpose: str,
		filename: str,
		data: bytes,
		*,
		content_type: str = "application/octet-stream",
	) -> str:
		"""Upload an image and return its public URL.

		Oversized files raise ``UploadTooLarge`` without touching the network.
		"""
		validate_upload(len(data), limit=self.max_upload_bytes)
		# Validates the purpose before sending
		build_blob_path(purpose, filename)
		body = await self._request(
			"POST",
			f"/api/uploads/{bucket}/{purpose}",
			files={"file": (filename, data, content_type)},
		)
		return str(body["url"])

	async def submit_project(self, form: ProjectSubmissionForm) -> str:
		payload = form.to_payload()
		body = await self._request("POST", "/api/projects/add", json=payload.model_dump(mode="json"))
		return str(body["id"])

	async def get_project(self, project_id: str) -> ProjectOut:
		return ProjectOut.model_validate(await self._request("GET", f"/api/projects/{project_id}"))

	async def save_profile(self, form: ProfileForm) -> ProfileOut:
		payload = form.to_payload()
		body = await self._request("POST", "/api/profiles/me", json=payload.model_dump(mode="json"))
		return ProfileOut.model_validate(body)

	async def load_profile_form(self) -> ProfileForm:
		body = await self._request("GET", "/api/profiles/me")
		return ProfileForm.from_profile(ProfileOut.model_validate(body))

	async def signup(self, email: str, password: str, *, wallet_address: Optional[str] = None) -> AuthResponse:
		body = await self._request(
			"POST",
			"/api/auth",
			json={"email": email, "password": password, "wallet_address": wallet_address},
		)
		auth = AuthResponse.model_validate(body)
		self.access_token = auth.session.access_token
		return auth

	async def login(self, email: str, password: str) -> AuthResponse:
		body = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
		auth = AuthResponse.model_validate(body)
		self.access_token = auth.session.access_token
		return auth

	async def logout(self) -> None:
		if not self.access_token:
			return
		await self._request("POST", "/api/auth/logout")
		self.access_token = None
