"""Deterministic placeholder visuals for entities without uploaded images.

An identifier is hashed with a small order-sensitive rolling hash and the
result picks one of a fixed set of gradient styles. The hash is not
collision resistant; two entities may share a gradient. The same identifier
always lands on the same gradient.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

GRADIENT_PALETTE: tuple[str, ...] = (
	"bg-gradient-to-r from-purple-400 via-pink-500 to-red-500",
	"bg-gradient-to-r from-green-400 to-blue-500",
	"bg-gradient-to-r from-yellow-400 via-red-500 to-pink-500",
	"bg-gradient-to-r from-indigo-400 via-purple-500 to-pink-500",
	"bg-gradient-to-r from-blue-500 to-green-500",
	"bg-gradient-to-r from-red-500 via-orange-500 to-yellow-500",
	"bg-gradient-to-r from-green-300 via-blue-500 to-purple-600",
	"bg-gradient-to-r from-pink-500 to-indigo-500",
	"bg-gradient-to-r from-yellow-300 via-green-300 to-blue-500",
)

DEFAULT_INITIAL = "U"


@dataclass(frozen=True, slots=True)
class FallbackVisual:
	index: int
	gradient: str
	initial: str


def _to_int32(value: int) -> int:
	value &= 0xFFFFFFFF
	return value - 0x100000000 if value & 0x80000000 else value


def _code_units(text: str) -> list[int]:
	"""UTF-16 code units, so astral characters hash as surrogate pairs."""
	raw = text.encode("utf-16-le", "surrogatepass")
	return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def rolling_hash(identifier: str) -> int:
	"""``hash = code + ((hash << 5) - hash)`` over the identifier.

	The shift operates on the signed 32-bit view of the accumulator while the
	subtraction and addition do not wrap, which keeps placeholders identical to
	the gradients already shown by the web client.
	"""
	value = 0
	for code in _code_units(identifier or ""):
		shifted = _to_int32(_to_int32(value) << 5)
		value = code + (shifted - value)
	return value


def gradient_index(identifier: str, palette_size: int = len(GRADIENT_PALETTE)) -> int:
	if palette_size <= 0:
		raise ValueError("palette_size must be positive")
	return abs(rolling_hash(identifier)) % palette_size


def gradient_for(identifier: str, palette: Sequence[str] = GRADIENT_PALETTE) -> str:
	return palette[gradient_index(identifier, len(palette))]


def display_initial(name: str | None) -> str:
	text = (name or "").strip()
	if not text:
		return DEFAULT_INITIAL
	return text[0].upper()


def fallback_visual(identifier: str, name: str | None, palette: Sequence[str] = GRADIENT_PALETTE) -> FallbackVisual:
	index = gradient_index(identifier, len(palette))
	return FallbackVisual(index=index, gradient=palette[index], initial=display_initial(name))
