"""Query parameter contract shared by search callers and the search endpoints.

The free-text query travels under ``QUERY_KEY`` so it can never collide with
a filter column name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

QUERY_KEY = "query"
FILTER_KEYS: tuple[str, ...] = ("category", "funding_platform", "governance_model", "status")


def _clean(value: Any) -> Optional[str]:
	if isinstance(value, str) and value != "":
		return value
	return None


@dataclass(frozen=True, slots=True)
class SearchFilters:
	category: Optional[str] = None
	funding_platform: Optional[str] = None
	governance_model: Optional[str] = None
	status: Optional[str] = None

	@classmethod
	def from_mapping(cls, data: Mapping[str, Any] | None) -> "SearchFilters":
		data = data or {}
		return cls(**{key: _clean(data.get(key)) for key in FILTER_KEYS})

	def active(self) -> dict[str, str]:
		"""Only the filters that constrain the result set, in column order."""
		out: dict[str, str] = {}
		for key in FILTER_KEYS:
			value = getattr(self, key)
			if value:
				out[key] = value
		return out



@dataclass(frozen=True, slots=True)
class SearchParams:
	"""Normalised search request: trimmed text plus active equality filters."""

	query: Optional[str] = None
	filters: SearchFilters = SearchFilters()

	@property
	def is_filtered(self) -> bool:
		return bool(self.query) or bool(self.filters.active())

	def as_dict(self) -> dict[str, str]:
		return build_search_params(self.query, self.filters)

	@classmethod
	def parse(cls, raw: Mapping[str, Any]) -> "SearchParams":
		text = raw.get(QUERY_KEY)
		query = text.strip() if isinstance(text, str) else None
		return cls(query=query or None, filters=SearchFilters.from_mapping(raw))


def build_search_params(
	query: Optional[str],
	filters: SearchFilters | Mapping[str, Any] | None = None,
) -> dict[str, str]:
	"""Translate raw UI state into the parameter set sent to a search endpoint.

	Only non-empty fields survive. The text query is trimmed and dropped
	when blank.
	"""
	if not isinstance(filters, SearchFilters):
		filters = SearchFilters.from_mapping(filters)
	params: dict[str, str] = {}
	text = (query or "").strip()
	if text:
		params[QUERY_KEY] = text
	params.update(filters.active())
	return params
