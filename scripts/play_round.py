# scripts/play_round.py
from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from holdem.engine.round import Game, Player, Street

logger = logging.getLogger("play_round")

DEFAULT_PLAYERS: List[Tuple[str, int]] = [
    ("Yannick", 200000),
    ("Yan", 300000),
    ("Nick", 400000),
]

SMALL_BLIND = 100
BIG_BLIND = 200

STREET_ARG = {
    "flop": Street.FLOP,
    "turn": Street.TURN,
    "river": Street.RIVER,
}


def parse_player(text: str) -> Tuple[str, int]:
    name, sep, stack = text.rpartition(":")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME:STACK, got {text!r}")
    try:
        return name, int(stack)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Stack must be an integer in {text!r}") from None


def _post_blinds(game: Game) -> None:
    seats = game.live_seats()
    game.add_bet(seats[0], SMALL_BLIND)
    game.add_bet(seats[1], BIG_BLIND)
    # everybody limps, small blind completes
    for seat in seats[2:]:
        game.add_bet(seat, BIG_BLIND)
    game.add_bet(seats[0], BIG_BLIND - SMALL_BLIND)


def _street_record(game: Game, workers: int) -> Dict[str, Any]:
    players = []
    for seat in game.live_seats():
        win, tie, loss = game.equity(seat, workers=workers).as_tuple()
        p = game.players[seat]
        logger.info(f"{p.name} [{game.hands[seat]}]: win {win:.3f} tie {tie:.3f} loss {loss:.3f}")
        players.append({
            "name": p.name,
            "hand": str(game.hands[seat]),
            "win": win,
            "tie": tie,
            "loss": loss,
        })
    return {
        "round": game.rounds_played,
        "street": game.street.name,
        "board": str(game.table),
        "players": players,
    }


def play_round(
    players: Sequence[Tuple[str, int]] = DEFAULT_PLAYERS,
    seed: Optional[int] = None,
    equity_from: Street = Street.TURN,
    workers: int = 1,
) -> Dict[str, Any]:
    game = Game.with_seed(seed)
    for name, stack in players:
        game.add_player(Player(name, stack))

    logger.info("Game new_round")
    game.new_round()
    _post_blinds(game)

    records: List[Dict[str, Any]] = []
    for deal in (game.deal_flop, game.deal_turn, game.deal_river):
        deal()
        if game.street >= equity_from:
            records.append(_street_record(game, workers))

    winners = game.showdown()
    return {
        "streets": records,
        "winners": [game.players[s].name for s in winners],
        "stacks": {p.name: p.stack for p in game.players},
        "history": [repr(e) for e in game.history],
    }


def main() -> None:
    ap = argparse.ArgumentParser(description="Deal one hold'em round and print exact equities.")
    ap.add_argument("--player", action="append", type=parse_player, default=None,
                    help="NAME:STACK, repeat for every seat (default: the built-in three players)")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--equity-from", choices=sorted(STREET_ARG), default="turn",
                    help="first street to compute equity on (flop is slow in pure python)")
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("--out", type=str, default=None, help="append one JSON line per street here")
    ap.add_argument("--log-level", type=str, default="INFO")
    args = ap.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    result = play_round(
        players=args.player or DEFAULT_PLAYERS,
        seed=args.seed,
        equity_from=STREET_ARG[args.equity_from],
        workers=args.workers,
    )

    if args.out:
        with open(args.out, "a", encoding="utf-8") as f:
            for rec in result["streets"]:
                f.write(json.dumps(rec) + "\n")
        print(f"Appended {len(result['streets'])} streets to {args.out}")

    print("Winners:", ", ".join(result["winners"]))
    print("Stacks:", result["stacks"])


if __name__ == "__main__":
    main()
