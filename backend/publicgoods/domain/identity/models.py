"""Identity rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from publicgoods.domain.common.records import RecordLike, as_datetime, as_optional_str, as_uuid, now_utc


@dataclass(slots=True)
class User:
	id: UUID
	email: str
	password_hash: str
	wallet_address: Optional[str] = None
	created_at: datetime = field(default_factory=now_utc)

	@classmethod
	def from_record(cls, record: RecordLike) -> "User":
		return cls(
			id=as_uuid(record["id"]),
			email=str(record["email"]),
			password_hash=str(record.get("password_hash") or ""),
			wallet_address=as_optional_str(record.get("wallet_address")),
			created_at=as_datetime(record.get("created_at")),
		)
