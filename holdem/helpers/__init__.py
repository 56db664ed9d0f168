# bits
from .bits import popcount, iter_from_left, iter_from_right, iter_combinations

# cards
from .cards import CardSet, CardsError, InvalidCards, NoCards, parse_cards, make_deck

# evaluation
from .evaluator import (
    HandCategory,
    Outcome,
    OutcomeError,
    CardCountTooLow,
    HighestCardNotFound,
    KindNotFound,
    classify,
    compare,
    evaluate_best,
    compare_hands,
    winners,
)

# equity
from .equity import (
    Chance,
    RunoutError,
    InvalidHand,
    InvalidTable,
    InsufficientCards,
    InvalidOutcome,
    runout,
    exact_equity,
)

__all__ = [
    # bits
    "popcount", "iter_from_left", "iter_from_right", "iter_combinations",

    # cards
    "CardSet", "CardsError", "InvalidCards", "NoCards", "parse_cards", "make_deck",

    # evaluation
    "HandCategory", "Outcome", "OutcomeError", "CardCountTooLow",
    "HighestCardNotFound", "KindNotFound",
    "classify", "compare", "evaluate_best", "compare_hands", "winners",

    # equity
    "Chance", "RunoutError", "InvalidHand", "InvalidTable",
    "InsufficientCards", "InvalidOutcome", "runout", "exact_equity",
]
