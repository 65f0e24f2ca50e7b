import random

import pytest

from publicgoods.domain.listing.view import ListingPage, ListingState, ListingView


def test_unfiltered_results_are_shuffled_with_injected_rng():
	items = list(range(20))
	view = ListingView.for_results(items, filtered=False, rng=random.Random(7))
	expected = list(range(20))
	random.Random(7).shuffle(expected)
	assert view.items == expected
	assert items == list(range(20))
	assert view.shown == 9
	assert view.visible == expected[:9]


def test_filtered_results_keep_natural_order():
	items = list(range(20))
	view = ListingView.for_results(items, filtered=True, rng=random.Random(7))
	assert view.items == items
	assert view.visible == items[:9]


def test_load_more_grows_by_increment_and_clamps():
	view = ListingView.for_results(list(range(20)), filtered=True)
	assert view.load_more() == 15
	assert view.has_more
	assert view.load_more() == 20
	assert not view.has_more


def test_load_more_when_everything_is_shown_is_a_noop():
	view = ListingView.for_results(list(range(9)), filtered=True)
	assert view.shown == 9
	assert not view.has_more
	assert view.load_more() == 9
	assert view.shown == 9
	assert not view.has_more


def test_small_result_set_is_fully_revealed():
	view = ListingView.for_results(["a", "b"], filtered=False, rng=random.Random(1))
	assert view.shown == 2
	assert sorted(view.visible) == ["a", "b"]


def test_advance_pages():
	view = ListingView.for_results(list(range(30)), filtered=True)
	assert view.advance(2) == 21
	assert view.advance(10) == 30
	assert view.advance(-1) == 30


def test_invalid_sizes_rejected():
	with pytest.raises(ValueError):
		ListingView.for_results([], filtered=True, increment=0)


def test_page_lifecycle():
	page: ListingPage[int] = ListingPage()
	page.begin()
	assert page.loading
	assert page.state is ListingState.LOADING

	page.succeed(ListingView.for_results([], filtered=True))
	assert not page.loading
	assert page.state is ListingState.EMPTY
	assert page.error is None

	page.begin()
	page.fail("Failed to load projects.")
	assert not page.loading
	assert page.state is ListingState.ERROR
	assert page.error == "Failed to load projects."
	assert page.view is None

	page.begin()
	page.succeed(ListingView.for_results([1, 2, 3], filtered=True))
	assert page.state is ListingState.POPULATED
	assert page.error is None
