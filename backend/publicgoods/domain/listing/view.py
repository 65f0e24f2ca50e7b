"""Listing view-model: shuffled reveal for browsing, natural order for searches."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")

INITIAL_REVEAL = 9
REVEAL_INCREMENT = 6


class ListingState(str, enum.Enum):
	LOADING = "loading"
	ERROR = "error"
	EMPTY = "empty"
	POPULATED = "populated"


@dataclass(slots=True)
class ListingView(Generic[T]):
	"""A result set plus how much of it is currently revealed."""

	items: list[T]
	shown: int
	increment: int = REVEAL_INCREMENT

	@classmethod
	def for_results(
		cls,
		results: Sequence[T],
		*,
		filtered: bool,
		initial_size: int = INITIAL_REVEAL,
		increment: int = REVEAL_INCREMENT,
		rng: Optional[random.Random] = None,
	) -> "ListingView[T]":
		if initial_size < 0 or increment <= 0:
			raise ValueError("initial_size must be >= 0 and increment > 0")
		items = list(results)
		if not filtered:
			(rng or random.Random()).shuffle(items)
		return cls(items=items, shown=min(initial_size, len(items)), increment=increment)

	@property
	def total(self) -> int:
		return len(self.items)

	@property
	def visible(self) -> list[T]:
		return self.items[: self.shown]

	@property
	def has_more(self) -> bool:
		return self.shown < len(self.items)

	def load_more(self) -> int:
		"""Reveal the next increment; a no-op once everything is shown."""
		if self.has_more:
			self.shown = min(self.shown + self.increment, len(self.items))
		return self.shown

	def advance(self, pages: int) -> int:
		for _ in range(max(0, pages)):
			if not self.has_more:
				break
			self.load_more()
		return self.shown


@dataclass(slots=True)
class ListingPage(Generic[T]):
	"""Request lifecycle around a listing: loading, then exactly one outcome."""

	state: ListingState = ListingState.EMPTY
	view: Optional[ListingView[T]] = None
	error: Optional[str] = None
	_loading: bool = field(default=False, repr=False)

	@property
	def loading(self) -> bool:
		return self._loading

	def begin(self) -> None:
		self._loading = True
		self.state = ListingState.LOADING
		self.error = None

	def succeed(self, view: ListingView[T]) -> None:
		self._loading = False
		self.view = view
		self.error = None
		self.state = ListingState.POPULATED if view.total else ListingState.EMPTY

	def fail(self, message: str) -> None:
		self._loading = False
		self.view = None
		self.error = message
		self.state = ListingState.ERROR
