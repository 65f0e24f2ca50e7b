"""Pydantic schema for placeholder visuals embedded in API payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from publicgoods.domain.visuals.fallback import fallback_visual


class FallbackOut(BaseModel):
	index: int = Field(..., ge=0)
	gradient: str
	initial: str = Field(..., min_length=1)

	@classmethod
	def for_entity(cls, identifier: str, name: str | None) -> "FallbackOut":
		visual = fallback_visual(identifier, name)
		return cls(index=visual.index, gradient=visual.gradient, initial=visual.initial)
