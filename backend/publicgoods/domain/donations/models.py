"""Donation rows. Append-only; no payment processor is involved."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from publicgoods.domain.common.records import RecordLike, as_datetime, as_optional_str, as_uuid, now_utc

DEFAULT_PAYMENT_METHOD = "crypto"


@dataclass(frozen=True, slots=True)
class Donation:
	id: UUID
	project_id: UUID
	amount: Decimal
	user_id: Optional[str] = None
	payment_method: str = DEFAULT_PAYMENT_METHOD
	created_at: datetime = field(default_factory=now_utc)

	@classmethod
	def from_record(cls, record: RecordLike) -> "Donation":
		return cls(
			id=as_uuid(record["id"]),
			project_id=as_uuid(record["project_id"]),
			amount=Decimal(str(record["amount"])),
			user_id=as_optional_str(record.get("user_id")),
			payment_method=str(record.get("payment_method") or DEFAULT_PAYMENT_METHOD),
			created_at=as_datetime(record.get("created_at")),
		)
