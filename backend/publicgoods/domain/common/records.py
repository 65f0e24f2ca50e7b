"""Coercion helpers for rows coming back from the store."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

RecordLike = Mapping[str, Any]


def now_utc() -> datetime:
	return datetime.now(timezone.utc)


def as_uuid(value: Any) -> UUID:
	if isinstance(value, UUID):
		return value
	return UUID(str(value))


def as_optional_str(value: Any) -> Optional[str]:
	if value is None:
		return None
	text = str(value)
	return text or None


def as_str_list(value: Any) -> list[str]:
	"""Coerce array/JSON columns to an ordered list of strings.

	Order and duplicates are preserved; only ``None`` entries are dropped.
	"""
	if value is None:
		return []
	raw: Any = value
	if isinstance(raw, (bytes, bytearray, memoryview)):
		raw = bytes(raw).decode("utf-8")
	if isinstance(raw, str):
		try:
			raw = json.loads(raw)
		except json.JSONDecodeError:
			return [raw] if raw else []
	if isinstance(raw, (list, tuple)):
		items: Sequence[Any] = raw
	else:
		return []
	return [str(entry) for entry in items if entry is not None]


def as_datetime(value: Any) -> datetime:
	if isinstance(value, datetime):
		return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
	if isinstance(value, str) and value:
		parsed = datetime.fromisoformat(value)
		return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
	return now_utc()


def like_pattern(text: str) -> str:
	"""Build an ILIKE pattern matching ``text`` literally anywhere in a column."""
	escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
	return f"%{escaped}%"


def contains_ci(needle: str, *haystacks: Optional[str]) -> bool:
	"""Case-insensitive substring match ORed across fields."""
	lowered = needle.lower()
	return any(lowered in (field or "").lower() for field in haystacks)
