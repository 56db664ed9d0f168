from .round import (
    Street,
    Player,
    Bet,
    Fold,
    Flop,
    Turn,
    River,
    GameEvent,
    Game,
)

__all__ = [
    "Street",
    "Player",
    "Bet",
    "Fold",
    "Flop",
    "Turn",
    "River",
    "GameEvent",
    "Game",
]
