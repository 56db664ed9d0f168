from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .bits import iter_from_left, popcount
from .constants import (
    ACE,
    FULL_DECK,
    RANK_BY_NAME,
    RANK_NAMES,
    RANKS,
    SUIT_BY_NAME,
    SUIT_NAMES,
    SUITS,
)


class CardsError(Exception):
    pass


class InvalidCards(CardsError):
    def __init__(self, value: int):
        super().__init__(f"Invalid cards mask: {value:#x}")
        self.value = value


class NoCards(CardsError):
    def __init__(self) -> None:
        super().__init__("No cards left to draw")


def _as_mask(cards: Union["CardSet", int]) -> int:
    return cards.value if isinstance(cards, CardSet) else cards


def _card_name(bit: int) -> str:
    rank_i = next(i for i, r in enumerate(RANKS) if r & bit)
    suit_i = next(i for i, s in enumerate(SUITS) if s & bit)
    return RANK_NAMES[rank_i] + SUIT_NAMES[suit_i]


@dataclass(frozen=True, slots=True)
class CardSet:
    """
    Zero or more cards packed into the 52 live bits of a 64-bit word.

    Values only: every operation returns a new CardSet. The empty set is
    representable (an unfinished board, an exhausted deck) but is not
    `is_valid()`; use `CardSet.new` when an empty or foreign mask must fail.
    """
    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0 or self.value & ~FULL_DECK:
            raise InvalidCards(self.value)

    # ---------------- construction ----------------

    @staticmethod
    def new(value: int) -> "CardSet":
        if not CardSet.is_valid_mask(value):
            raise InvalidCards(value)
        return CardSet(value)

    @staticmethod
    def empty() -> "CardSet":
        return CardSet(0)

    @staticmethod
    def full_deck() -> "CardSet":
        return CardSet(FULL_DECK)

    @staticmethod
    def from_str(s: Union[str, Iterable[str]]) -> "CardSet":
        """
        Parse tokens like "As Td 4c" (or "As,Td,4c", or a list of tokens).
        Rank letters are case-insensitive, suits must be one of "shdc".
        """
        if isinstance(s, str):
            tokens = s.replace(",", " ").split()
        else:
            tokens = [t.strip() for t in s]

        value = 0
        for tok in tokens:
            if len(tok) != 2:
                raise ValueError(f"Bad card string: {tok!r}")
            rank, suit = RANK_BY_NAME.get(tok[0].upper()), SUIT_BY_NAME.get(tok[1].lower())
            if rank is None or suit is None:
                raise ValueError(f"Bad card string: {tok!r}")
            bit = rank & suit
            if value & bit:
                raise ValueError(f"Duplicate card: {tok!r}")
            value |= bit
        return CardSet(value)

    @staticmethod
    def is_valid_mask(value: int) -> bool:
        return value != 0 and (FULL_DECK & value) == value

    # ---------------- basic queries ----------------

    def is_valid(self) -> bool:
        return CardSet.is_valid_mask(self.value)

    def card_count(self) -> int:
        return popcount(self.value)

    def __len__(self) -> int:
        return self.card_count()

    def __bool__(self) -> bool:
        return self.value != 0

    def has_any(self, cards: Union["CardSet", int]) -> bool:
        return self.value & _as_mask(cards) != 0

    def cards(self) -> Iterator["CardSet"]:
        for bit in iter_from_left(self.value):
            yield CardSet(bit)

    # ---------------- set operations ----------------

    def union(self, other: Union["CardSet", int]) -> "CardSet":
        return CardSet(self.value | _as_mask(other))

    def remove(self, other: Union["CardSet", int]) -> "CardSet":
        # cards of `other` that are not here are ignored
        return CardSet(self.value & ~_as_mask(other))

    def try_union(self, other: "CardSet") -> "CardSet":
        if not self.is_valid():
            raise InvalidCards(self.value)
        if not other.is_valid():
            raise InvalidCards(other.value)
        return CardSet.new(self.value | other.value)

    def try_remove(self, other: "CardSet") -> "CardSet":
        if not self.is_valid():
            raise InvalidCards(self.value)
        if not other.is_valid():
            raise InvalidCards(other.value)
        return CardSet.new(self.value & ~other.value)

    def __or__(self, other: Union["CardSet", int]) -> "CardSet":
        return self.union(other)

    def __sub__(self, other: Union["CardSet", int]) -> "CardSet":
        return self.remove(other)

    def __and__(self, other: Union["CardSet", int]) -> "CardSet":
        return CardSet(self.value & _as_mask(other))

    # ---------------- drawing ----------------

    def take_random(self, rng: Optional[random.Random] = None) -> Tuple["CardSet", "CardSet"]:
        """Draw one card uniformly. Returns (card, remaining cards)."""
        n = self.card_count()
        if n == 0:
            raise NoCards()

        rng = rng or random.Random()
        idx = rng.randrange(n)
        word = self.value
        for _ in range(idx):
            word &= word - 1  # drop lowest set bit
        card = word & -word
        return CardSet(card), CardSet(self.value ^ card)

    # ---------------- rank / suit queries ----------------

    def highest(self, num: int) -> Optional["CardSet"]:
        """
        The `num` highest cards in bit order. Equal ranks are tie-broken by
        suit (spade first), which only picks the physical card reported.
        """
        if num == 0 or self.card_count() < num:
            return None

        highest = 0
        taken = 0
        for card in iter_from_left(self.value):
            highest |= card
            taken += 1
            if taken >= num:
                return CardSet(highest)
        return None

    def compare_rank(self, other: "CardSet") -> int:
        if self.value == other.value:
            return 0

        for rank in RANKS:
            mine = self.value & rank
            theirs = other.value & rank
            if mine and not theirs:
                return 1
            if theirs and not mine:
                return -1
        return 0

    def flush_suit(self) -> Optional["CardSet"]:
        for suit in SUITS:
            suited = self.value & suit
            if popcount(suited) >= 5:
                return CardSet(suited)
        return None

    def flush(self) -> Optional["CardSet"]:
        suited = self.flush_suit()
        return suited.highest(5) if suited is not None else None

    def straight(self) -> Optional["CardSet"]:
        n = len(RANKS)
        for i in range(n - 3):
            # the last window is 5-4-3-2 with the ace playing low
            window = RANKS[i:i + 4] + ((RANKS[i + 4],) if i + 4 < n else (ACE,))

            picked = 0
            for rank in window:
                present = self.value & rank
                if not present:
                    break
                picked |= 1 << (present.bit_length() - 1)
            else:
                return CardSet(picked)
        return None

    def kinds(self) -> List["CardSet"]:
        out: List[CardSet] = []
        for rank in RANKS:
            group = self.value & rank
            if popcount(group) > 1:
                out.append(CardSet(group))
        return out

    # ---------------- display ----------------

    def __str__(self) -> str:
        return ", ".join(_card_name(bit) for bit in iter_from_left(self.value))

    def __repr__(self) -> str:
        return f"CardSet({self})"


def parse_cards(cards: Iterable[Union[str, CardSet]]) -> CardSet:
    """Fold card strings and CardSets into one CardSet, rejecting duplicates."""
    out = CardSet()
    for x in cards:
        cs = x if isinstance(x, CardSet) else CardSet.from_str(x)
        if out.has_any(cs):
            raise ValueError(f"Duplicate cards detected: {out & cs}")
        out = out | cs
    return out


def make_deck(exclude: Union[CardSet, Iterable[Union[str, CardSet]]] = ()) -> CardSet:
    dead = exclude if isinstance(exclude, CardSet) else parse_cards(exclude)
    return CardSet.full_deck() - dead
