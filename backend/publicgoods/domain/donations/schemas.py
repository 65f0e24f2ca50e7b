"""Pydantic schemas for the donation endpoint."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from publicgoods.domain.donations import models


class DonationCreate(BaseModel):
	project_id: Optional[UUID] = None
	# Stored as NUMERIC(20, 8); zero and negatives are rejected by the service
	amount: Optional[Decimal] = Field(default=None, max_digits=20, decimal_places=8, lt=Decimal(10) ** 12)
	payment_method: Optional[str] = Field(default=None, max_length=40)


class DonationOut(BaseModel):
	id: UUID
	project_id: UUID
	user_id: Optional[str] = None
	amount: Decimal
	payment_method: str
	created_at: datetime

	@classmethod
	def from_model(cls, donation: models.Donation) -> "DonationOut":
		return cls(
			id=donation.id,
			project_id=donation.project_id,
			user_id=donation.user_id,
			amount=donation.amount,
			payment_method=donation.payment_method,
			created_at=donation.created_at,
		)
