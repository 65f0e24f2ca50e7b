"""Pydantic schemas for summary generation."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class SummaryRequest(BaseModel):
	project_id: Optional[UUID] = None
	description: Optional[str] = None


class SummaryOut(BaseModel):
	summary: str
	persisted: bool = False
