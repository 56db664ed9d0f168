from __future__ import annotations

import logging
import multiprocessing as mp
from dataclasses import dataclass
from functools import partial
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .bits import iter_combinations
from .cards import CardSet, make_deck, parse_cards
from .evaluator import Outcome, OutcomeError, classify, compare

logger = logging.getLogger(__name__)


class RunoutError(Exception):
    pass


class InvalidHand(RunoutError):
    def __init__(self, cards: CardSet):
        super().__init__(f"Player hand must be exactly 2 cards, got [{cards}]")
        self.cards = cards


class InvalidTable(RunoutError):
    def __init__(self, cards: CardSet):
        super().__init__(f"Invalid table cards: [{cards}]")
        self.cards = cards


class InsufficientCards(RunoutError):
    def __init__(self, player: CardSet, table: CardSet):
        super().__init__(f"Not enough unseen cards to run out [{player}] on [{table}]")
        self.player = player
        self.table = table


class InvalidOutcome(RunoutError):
    def __init__(self, cards: CardSet):
        super().__init__(f"Could not classify [{cards}]")
        self.cards = cards


@dataclass(slots=True)
class Chance:
    """
    Win / tie / loss tally. Raw counts while enumerating, probabilities
    after `normalize()`.
    """
    win: float = 0.0
    tie: float = 0.0
    loss: float = 0.0

    def total(self) -> float:
        return self.win + self.tie + self.loss

    def normalize(self) -> "Chance":
        total = self.total()
        if total == 0:
            return Chance()
        return Chance(self.win / total, self.tie / total, self.loss / total)

    def add(self, other: "Chance") -> None:
        self.win += other.win
        self.tie += other.tie
        self.loss += other.loss

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.win, self.tie, self.loss


def _classify(cards: CardSet) -> Outcome:
    try:
        return classify(cards)
    except OutcomeError as e:
        raise InvalidOutcome(e.cards) from e


def _tally_boards(boards: Iterable[int], player: CardSet, table: CardSet, deck: CardSet) -> Chance:
    chance = Chance()
    for new_cards in boards:
        board = table | new_cards
        player_outcome = _classify(player | board)

        for opp in iter_combinations((deck - board).value, 2):
            res = compare(player_outcome, _classify(board | opp))
            if res > 0:
                chance.win += 1
            elif res == 0:
                chance.tie += 1
            else:
                chance.loss += 1
    return chance


def _tally_shard(boards: List[int], player: int, table: int, deck: int) -> Chance:
    # pool entry point; masks cross the process boundary as plain ints
    return _tally_boards(boards, CardSet(player), CardSet(table), CardSet(deck))


def _chunks(it: Iterator[int], size: int) -> Iterator[List[int]]:
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


def _check_runout(player: CardSet, table: CardSet, deck: CardSet) -> int:
    if player.card_count() != 2:
        raise InvalidHand(player)
    if table.card_count() > 5 or table.has_any(player):
        raise InvalidTable(table)
    if deck.has_any(player | table):
        raise InvalidTable(deck & (player | table))

    need = 5 - table.card_count()
    if deck.card_count() < need + 2:
        raise InsufficientCards(player, table)
    return need


def runout(
    player: CardSet,
    table: CardSet,
    deck: CardSet,
    workers: int = 1,
    chunk_size: int = 64,
) -> Chance:
    """
    Exact equity of `player` against one random opponent hand.

    Every way to complete `table` from `deck` is enumerated, and for each
    completed board every opponent hole-card pair from what is left of the
    deck. `deck` must hold only unseen cards (not the player's, not the
    table's). With workers > 1 the board loop is sharded over a process
    pool; each shard returns its own tally and the tallies are summed.
    """
    need = _check_runout(player, table, deck)
    boards = iter_combinations(deck.value, need)

    if workers <= 1:
        chance = _tally_boards(boards, player, table, deck)
    else:
        chance = Chance()
        work = partial(_tally_shard, player=player.value, table=table.value, deck=deck.value)
        with mp.Pool(workers) as pool:
            for part in pool.imap_unordered(work, _chunks(boards, chunk_size)):
                chance.add(part)

    logger.debug(
        f"runout [{player}] on [{table}]: {chance.win:.0f}/{chance.tie:.0f}/{chance.loss:.0f} "
        f"over {chance.total():.0f} trials"
    )
    return chance.normalize()


def exact_equity(
    hero_hand: Iterable[Union[str, CardSet]],
    board: Iterable[Union[str, CardSet]],
    dead_cards: Optional[Iterable[Union[str, CardSet]]] = None,
    workers: int = 1,
) -> Tuple[float, float, float]:
    hero = parse_cards(hero_hand)
    bd = parse_cards(board)
    dead = parse_cards(dead_cards) if dead_cards else CardSet()

    if hero.card_count() != 2:
        raise ValueError("Hero hand must be 2 cards")
    if bd.card_count() > 5:
        raise ValueError("Board cannot exceed 5 cards")

    known = [hero, bd, dead]
    parse_cards(known)  # duplicate check across hand, board and dead cards

    deck = make_deck(exclude=hero | bd | dead)
    return runout(hero, bd, deck, workers=workers).as_tuple()
