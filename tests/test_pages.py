"""
PageState: page counts, wrapping and jumps.
"""

import random

import pytest

from pagezilla.errors import ConfigurationError, OutOfRangeError
from pagezilla.pagination.pages import PageState
from pagezilla.pagination.reactionbuttons import NavigationEmoji

BACK = NavigationEmoji.BACK
FORWARD = NavigationEmoji.FORWARD


class TestInitialize:
    def test_pages_are_rounded_up(self):
        state = PageState.initialize(25, 10)
        assert state.pages == 3
        assert state.page == 1

    def test_one_element_per_page(self):
        assert PageState.initialize(7, 1).pages == 7

    @pytest.mark.parametrize("start, expected", [(0, 1), (-5, 1), (2, 2), (3, 3), (99, 3)])
    def test_start_page_is_clamped(self, start, expected):
        assert PageState.initialize(25, 10, start).page == expected

    def test_no_elements_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            PageState.initialize(0, 10)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            PageState.initialize(10, 0)


class TestAdvance:
    def test_forward_wraps_to_first_page(self):
        state = PageState.initialize(25, 10)
        assert [state.advance(FORWARD) for _ in range(3)] == [2, 3, 1]

    def test_back_from_first_page_goes_to_last(self):
        state = PageState.initialize(25, 10)
        assert state.advance(BACK) == 3
        assert state.advance(BACK) == 2

    def test_single_page_stays_put(self):
        state = PageState.initialize(1, 10)
        assert state.advance(FORWARD) == 1
        assert state.advance(BACK) == 1

    @pytest.mark.parametrize("pages", [1, 2, 3, 7])
    @pytest.mark.parametrize("seed", range(5))
    def test_random_walks_stay_in_range(self, pages, seed):
        rng = random.Random(seed)
        state = PageState.initialize(pages, 1)
        expected = 1

        for _ in range(50):
            direction = rng.choice((BACK, FORWARD))
            expected = (expected - 1 + (1 if direction is FORWARD else -1)) % pages + 1
            state.advance(direction)
            assert 1 <= state.page <= pages
            assert state.page == expected

    def test_only_back_and_forward_are_directions(self):
        with pytest.raises(ValueError):
            PageState.initialize(5, 1).advance(NavigationEmoji.JUMP)


class TestJumpTo:
    @pytest.mark.parametrize("target", [1, 2, 3])
    def test_in_range(self, target):
        state = PageState.initialize(25, 10)
        assert state.jump_to(target) == target
        assert state.page == target

    @pytest.mark.parametrize("target", [0, -1, 4, 100])
    def test_out_of_range_leaves_state_alone(self, target):
        state = PageState.initialize(25, 10, 2)

        with pytest.raises(OutOfRangeError) as info:
            state.jump_to(target)

        assert state.page == 2
        assert info.value.target == target
        assert info.value.pages == 3

    def test_bools_are_not_pages(self):
        with pytest.raises(OutOfRangeError):
            PageState.initialize(25, 10).jump_to(True)
