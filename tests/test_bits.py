from itertools import combinations
from math import comb

import pytest

from holdem.helpers.bits import _next_combination, iter_combinations, iter_from_left, iter_from_right, popcount
from holdem.helpers.constants import FULL_DECK, SPADE

BASE = 0b0010000010000100000100000010000000001001000100


def test_scanners_yield_every_bit_once():
    assert sum(iter_from_left(BASE)) == BASE
    assert sum(iter_from_right(BASE)) == BASE
    for bit in iter_from_left(BASE):
        assert popcount(BASE & bit) == 1 and popcount(bit) == 1


def test_scanners_are_mirror_images():
    left = list(iter_from_left(BASE))
    right = list(iter_from_right(BASE))
    assert left == list(reversed(right))
    assert left == sorted(left, reverse=True)


def test_scanners_on_empty_word():
    assert list(iter_from_left(0)) == []
    assert list(iter_from_right(0)) == []


def test_scanner_is_not_restartable():
    it = iter_from_right(0b1011)
    assert list(it) == [1, 2, 8]
    assert list(it) == []


def test_combinations_sparse_order():
    # set bits at 0, 2, 3, 5 -> dense slots 0..3, colex order
    assert list(iter_combinations(0b101101, 2)) == [0b101, 0b1001, 0b1100, 0b100001, 0b100100, 0b101000]


@pytest.mark.parametrize("mask,k", [
    (FULL_DECK, 2),
    (SPADE, 5),
    (BASE, 3),
    (0xF0F0F0F, 4),
    (0b1, 1),
])
def test_combinations_count_matches_binomial(mask, k):
    seen = list(iter_combinations(mask, k))
    assert len(seen) == comb(popcount(mask), k)
    assert len(set(seen)) == len(seen)
    for c in seen:
        assert c & mask == c
        assert popcount(c) == k


def test_combinations_take_every_bit():
    assert list(iter_combinations(BASE, popcount(BASE))) == [BASE]


def test_zero_combination_is_the_empty_mask():
    assert list(iter_combinations(BASE, 0)) == [0]


def test_combinations_reject_oversized_k():
    with pytest.raises(ValueError):
        iter_combinations(0b111, 4)


def test_next_combination_repacks_low_bits():
    bits = (0b1, 0b100, 0b1000, 0b100000)
    prefix = (0, 0b1, 0b101, 0b1101, 0b101101)
    assert _next_combination(0b1100, bits, prefix) == 0b100001
    assert _next_combination(0b100001, bits, prefix) == 0b100100
    assert _next_combination(0b101000, bits, prefix) == 0


def test_combinations_match_itertools_on_sparse_mask():
    cards = list(iter_from_right(SPADE | 0b1))
    expected = {sum(c) for c in combinations(cards, 3)}
    assert set(iter_combinations(SPADE | 0b1, 3)) == expected
