from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Set, Union

from ..helpers.cards import CardSet
from ..helpers.equity import Chance, runout
from ..helpers.evaluator import Outcome, classify, compare

logger = logging.getLogger(__name__)


class Street(IntEnum):
    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3


# table size -> street
_STREET_BY_TABLE = {0: Street.PREFLOP, 3: Street.FLOP, 4: Street.TURN, 5: Street.RIVER}


@dataclass(slots=True)
class Player:
    name: str
    stack: int

    def bet(self, amount: int) -> None:
        if amount <= 0:
            raise ValueError(f"Bet must be positive, got {amount}")
        if amount > self.stack:
            raise ValueError(f"{self.name} cannot bet {amount} with a stack of {self.stack}")
        self.stack -= amount


# ------------------------------------------------------------
# Round history: a flat list of what happened, in order
# ------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Bet:
    seat: int
    amount: int


@dataclass(frozen=True, slots=True)
class Fold:
    seat: int


@dataclass(frozen=True, slots=True)
class Flop:
    cards: CardSet


@dataclass(frozen=True, slots=True)
class Turn:
    cards: CardSet


@dataclass(frozen=True, slots=True)
class River:
    cards: CardSet


GameEvent = Union[Bet, Fold, Flop, Turn, River]


@dataclass
class Game:
    """
    One table: seats, dealer button, deck and the history of the current round.

    The deck is a CardSet value owned by the game; dealing replaces it with
    what is left after the draw. Hole cards are stored per seat so equity
    can be computed from any seat's point of view.
    """
    players: List[Player] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random)
    dealer: int = 0
    deck: CardSet = field(default_factory=CardSet.full_deck)
    table: CardSet = field(default_factory=CardSet)
    hands: Dict[int, CardSet] = field(default_factory=dict)
    folded: Set[int] = field(default_factory=set)
    history: List[GameEvent] = field(default_factory=list)
    pot: int = 0
    rounds_played: int = 0

    @staticmethod
    def with_seed(seed: Optional[int]) -> "Game":
        return Game(rng=random.Random(seed))

    def add_player(self, player: Player) -> None:
        self.players.append(player)

    # ---------------- dealing ----------------

    def _draw(self, count: int) -> CardSet:
        drawn = CardSet()
        for _ in range(count):
            card, self.deck = self.deck.take_random(self.rng)
            drawn = drawn | card
        return drawn

    def _seats_from_dealer(self) -> List[int]:
        n = len(self.players)
        return [(self.dealer + 1 + i) % n for i in range(n)]

    def new_round(self) -> None:
        if len(self.players) < 2:
            raise ValueError("A round needs at least 2 players")

        if self.rounds_played > 0:
            self.dealer = (self.dealer + 1) % len(self.players)

        self.deck = CardSet.full_deck()
        self.table = CardSet()
        self.hands = {seat: CardSet() for seat in range(len(self.players))}
        self.folded = set()
        self.history = []
        self.pot = 0

        # one card at a time, starting left of the button
        for _ in range(2):
            for seat in self._seats_from_dealer():
                self.hands[seat] = self.hands[seat] | self._draw(1)

        self.rounds_played += 1
        logger.info(f"New round {self.rounds_played}, dealer: {self.players[self.dealer].name}")

    @property
    def street(self) -> Street:
        return _STREET_BY_TABLE[self.table.card_count()]

    def _check_round(self) -> None:
        if not self.hands:
            raise ValueError("No round in progress")

    def _deal_street(self, expected: Street, count: int) -> CardSet:
        self._check_round()
        if self.street != expected:
            raise ValueError(f"Cannot deal after {self.street.name}, expected {expected.name}")
        cards = self._draw(count)
        self.table = self.table | cards
        return cards

    def deal_flop(self) -> CardSet:
        cards = self._deal_street(Street.PREFLOP, 3)
        self.history.append(Flop(cards))
        logger.info(f"Flop: {cards}")
        return cards

    def deal_turn(self) -> CardSet:
        cards = self._deal_street(Street.FLOP, 1)
        self.history.append(Turn(cards))
        logger.info(f"Turn: {cards}")
        return cards

    def deal_river(self) -> CardSet:
        cards = self._deal_street(Street.TURN, 1)
        self.history.append(River(cards))
        logger.info(f"River: {cards}")
        return cards

    # ---------------- betting ----------------

    def _check_seat(self, seat: int) -> None:
        if not 0 <= seat < len(self.players):
            raise ValueError(f"No player in seat {seat}")
        if seat in self.folded:
            raise ValueError(f"{self.players[seat].name} has folded")

    def add_bet(self, seat: int, amount: int) -> None:
        self._check_seat(seat)
        self.players[seat].bet(amount)
        self.pot += amount
        self.history.append(Bet(seat, amount))

    def fold(self, seat: int) -> None:
        self._check_seat(seat)
        self.folded.add(seat)
        self.history.append(Fold(seat))
        logger.info(f"{self.players[seat].name} folds")

    def live_seats(self) -> List[int]:
        return [s for s in self._seats_from_dealer() if s not in self.folded]

    # ---------------- evaluation ----------------

    def unseen_for(self, seat: int) -> CardSet:
        """Cards `seat` cannot see: the deck plus the other live players' hole cards."""
        unseen = self.deck
        for other in self.live_seats():
            if other != seat:
                unseen = unseen | self.hands[other]
        return unseen

    def equity(self, seat: int, workers: int = 1) -> Chance:
        self._check_round()
        self._check_seat(seat)
        return runout(self.hands[seat], self.table, self.unseen_for(seat), workers=workers)

    def showdown(self) -> List[int]:
        """
        Award the pot. Returns the winning seats; ties split the pot and odd
        chips go to the first winner left of the button.
        """
        live = self.live_seats()
        if len(live) == 1:
            winners = live
        else:
            if self.street != Street.RIVER:
                raise ValueError("Showdown needs a complete board")
            outcomes: Dict[int, Outcome] = {s: classify(self.hands[s] | self.table) for s in live}
            best = outcomes[live[0]]
            for s in live[1:]:
                if compare(outcomes[s], best) > 0:
                    best = outcomes[s]
            winners = [s for s in live if compare(outcomes[s], best) == 0]
            for s in live:
                logger.info(f"{self.players[s].name}: {outcomes[s]}")

        share, odd = divmod(self.pot, len(winners))
        for i, s in enumerate(winners):
            self.players[s].stack += share + (odd if i == 0 else 0)

        logger.info(f"Pot {self.pot} to {', '.join(self.players[s].name for s in winners)}")
        self.pot = 0
        return winners
