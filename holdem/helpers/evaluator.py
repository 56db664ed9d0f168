from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, Iterable, List, Optional, Union

from .cards import CardSet, parse_cards
from .constants import ACE, FIVE


class HandCategory(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


class OutcomeError(Exception):
    def __init__(self, cards: CardSet):
        super().__init__(f"{type(self).__name__}: [{cards}]")
        self.cards = cards


class CardCountTooLow(OutcomeError):
    pass


class HighestCardNotFound(OutcomeError):
    pass


class KindNotFound(OutcomeError):
    pass


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    A ranked hand: its category plus the 5 cards that justify it.

    Ordering operators go through `compare`. Equality stays structural, so
    two equally strong hands in different suits compare 0 but are not ==.
    """
    category: HandCategory
    cards: CardSet

    def __lt__(self, other: "Outcome") -> bool:
        return compare(self, other) < 0

    def __le__(self, other: "Outcome") -> bool:
        return compare(self, other) <= 0

    def __gt__(self, other: "Outcome") -> bool:
        return compare(self, other) > 0

    def __ge__(self, other: "Outcome") -> bool:
        return compare(self, other) >= 0

    def __str__(self) -> str:
        return f"{self.category.name.lower()} [{self.cards}]"


def _highest(cards: CardSet, num: int) -> CardSet:
    best = cards.highest(num)
    if best is None:
        raise HighestCardNotFound(cards)
    return best


def _find_kind(kinds: List[CardSet], size: int) -> Optional[CardSet]:
    return next((k for k in kinds if k.card_count() == size), None)


def classify(cards: CardSet) -> Outcome:
    if cards.card_count() < 5:
        raise CardCountTooLow(cards)

    suited = cards.flush_suit()
    if suited is not None:
        straight_flush = suited.straight()
        if straight_flush is not None:
            return Outcome(HandCategory.STRAIGHT_FLUSH, straight_flush)

    kinds = cards.kinds()

    quads = _find_kind(kinds, 4)
    if quads is not None:
        tail = _highest(cards - quads, 1)
        return Outcome(HandCategory.FOUR_OF_A_KIND, quads | tail)

    trips = _find_kind(kinds, 3)
    if trips is not None:
        pair = next((k for k in kinds if k != trips and k.card_count() >= 2), None)
        if pair is not None:
            return Outcome(HandCategory.FULL_HOUSE, trips | _highest(pair, 2))

    if suited is not None:
        return Outcome(HandCategory.FLUSH, _highest(suited, 5))

    straight = cards.straight()
    if straight is not None:
        return Outcome(HandCategory.STRAIGHT, straight)

    if trips is not None:
        tail = _highest(cards - trips, 2)
        return Outcome(HandCategory.THREE_OF_A_KIND, trips | tail)

    if len(kinds) >= 2:
        pair1, pair2 = kinds[0], kinds[1]
        tail = _highest(cards - pair1 - pair2, 1)
        return Outcome(HandCategory.TWO_PAIR, pair1 | pair2 | tail)

    if kinds:
        pair = kinds[0]
        tail = _highest(cards - pair, 3)
        return Outcome(HandCategory.PAIR, pair | tail)

    return Outcome(HandCategory.HIGH_CARD, _highest(cards, 5))


# ------------------------------------------------------------
# Tie-breaks within one category. Each gets the two qualifying
# hands and returns 1 / 0 / -1.
# ------------------------------------------------------------

def _ace_low(cards: CardSet) -> CardSet:
    if cards.has_any(ACE) and cards.has_any(FIVE):
        return cards - ACE
    return cards


def _cmp_straight(a: CardSet, b: CardSet) -> int:
    return _ace_low(a).compare_rank(_ace_low(b))


def _cmp_plain(a: CardSet, b: CardSet) -> int:
    return a.compare_rank(b)


def _group(cards: CardSet, size: int) -> CardSet:
    group = _find_kind(cards.kinds(), size)
    if group is None:
        raise KindNotFound(cards)
    return group


def _cmp_group_then_kickers(size: int) -> Callable[[CardSet, CardSet], int]:
    def cmp(a: CardSet, b: CardSet) -> int:
        ga, gb = _group(a, size), _group(b, size)
        res = ga.compare_rank(gb)
        if res:
            return res
        return (a - ga).compare_rank(b - gb)
    return cmp


def _cmp_full_house(a: CardSet, b: CardSet) -> int:
    res = _group(a, 3).compare_rank(_group(b, 3))
    if res:
        return res
    return _group(a, 2).compare_rank(_group(b, 2))


def _two_kinds(cards: CardSet) -> List[CardSet]:
    kinds = cards.kinds()
    if len(kinds) < 2:
        raise KindNotFound(cards)
    return kinds[:2]


def _cmp_two_pair(a: CardSet, b: CardSet) -> int:
    ka, kb = _two_kinds(a), _two_kinds(b)
    for pa, pb in zip(ka, kb):
        res = pa.compare_rank(pb)
        if res:
            return res
    return (a - ka[0] - ka[1]).compare_rank(b - kb[0] - kb[1])


_TIE_BREAKS: Dict[HandCategory, Callable[[CardSet, CardSet], int]] = {
    HandCategory.STRAIGHT_FLUSH: _cmp_straight,
    HandCategory.FOUR_OF_A_KIND: _cmp_group_then_kickers(4),
    HandCategory.FULL_HOUSE: _cmp_full_house,
    HandCategory.FLUSH: _cmp_plain,
    HandCategory.STRAIGHT: _cmp_straight,
    HandCategory.THREE_OF_A_KIND: _cmp_group_then_kickers(3),
    HandCategory.TWO_PAIR: _cmp_two_pair,
    HandCategory.PAIR: _cmp_group_then_kickers(2),
    HandCategory.HIGH_CARD: _cmp_plain,
}


def compare(a: Outcome, b: Outcome) -> int:
    if a.category != b.category:
        return 1 if a.category > b.category else -1
    if a.cards == b.cards:
        return 0
    return _TIE_BREAKS[a.category](a.cards, b.cards)


# ------------------------------------------------------------
# String-friendly helpers
# ------------------------------------------------------------

def evaluate_best(
    hand: Iterable[Union[str, CardSet]],
    board: Iterable[Union[str, CardSet]],
) -> Outcome:
    h = parse_cards(hand)
    cards = parse_cards([h, *board])
    if h.card_count() != 2:
        raise ValueError("Hold'em hand must be exactly 2 cards")
    return classify(cards)


def compare_hands(hand1, hand2, board) -> int:
    return compare(evaluate_best(hand1, board), evaluate_best(hand2, board))


def winners(hands, board) -> List[int]:
    outcomes = [evaluate_best(h, board) for h in hands]
    best = outcomes[0]
    for o in outcomes[1:]:
        if compare(o, best) > 0:
            best = o
    return [i for i, o in enumerate(outcomes) if compare(o, best) == 0]
