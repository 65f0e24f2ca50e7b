import pytest

from publicgoods.domain.visuals.fallback import (
	DEFAULT_INITIAL,
	GRADIENT_PALETTE,
	display_initial,
	fallback_visual,
	gradient_for,
	gradient_index,
	rolling_hash,
)
from publicgoods.domain.visuals.schemas import FallbackOut


def test_empty_identifier_hashes_to_first_gradient():
	assert rolling_hash("") == 0
	assert gradient_index("") == 0
	assert gradient_for("") == GRADIENT_PALETTE[0]


def test_known_vectors():
	assert rolling_hash("a") == 97
	assert gradient_index("a") == 7
	assert rolling_hash("ab") == 3105
	assert gradient_index("ab") == 0


@pytest.mark.parametrize(
	"identifier",
	[
		"3f2504e0-4f89-11d3-9a0c-0305e82c3301",
		"user-42",
		"x" * 500,
		"emoji \U0001f30d id",
	],
)
def test_index_is_deterministic_and_in_range(identifier):
	first = gradient_index(identifier)
	assert first == gradient_index(identifier)
	assert 0 <= first < len(GRADIENT_PALETTE)


def test_custom_palette_size():
	for size in (1, 2, 5, 9, 13):
		assert 0 <= gradient_index("3f2504e0-4f89-11d3-9a0c-0305e82c3301", size) < size
	with pytest.raises(ValueError):
		gradient_index("abc", 0)


def test_long_identifier_stays_exact():
	# The accumulator is not wrapped, so long ids must not lose precision
	value = rolling_hash("z" * 64)
	assert isinstance(value, int)
	assert abs(value) % 9 == gradient_index("z" * 64)


@pytest.mark.parametrize(
	"name, expected",
	[
		("solarDAO", "S"),
		("  open grants", "O"),
		("", DEFAULT_INITIAL),
		("   ", DEFAULT_INITIAL),
		(None, DEFAULT_INITIAL),
	],
)
def test_display_initial(name, expected):
	assert display_initial(name) == expected


def test_fallback_visual_and_schema_agree():
	visual = fallback_visual("ab", "bob")
	assert visual.index == 0
	assert visual.gradient == GRADIENT_PALETTE[0]
	assert visual.initial == "B"
	out = FallbackOut.for_entity("ab", "bob")
	assert (out.index, out.gradient, out.initial) == (visual.index, visual.gradient, visual.initial)
