import pytest

from holdem.helpers.cards import CardSet, make_deck
from holdem.helpers.equity import (
    Chance,
    InsufficientCards,
    InvalidHand,
    InvalidOutcome,
    InvalidTable,
    _classify,
    exact_equity,
    runout,
)
from holdem.helpers.evaluator import CardCountTooLow


def cs(s: str) -> CardSet:
    return CardSet.from_str(s)


QJT = cs("Qs Qh Qd Qc Js Jh Jd Jc Ts Th Td Tc")


def test_normalize_sums_to_one():
    for counts in [(1, 0, 0), (3, 2, 5), (0.5, 0.25, 7)]:
        c = Chance(*counts).normalize()
        assert abs(sum(c.as_tuple()) - 1.0) < 1e-9


def test_normalize_without_trials():
    assert Chance().normalize().as_tuple() == (0.0, 0.0, 0.0)


def test_add_accumulates():
    c = Chance(1, 2, 3)
    c.add(Chance(1, 1, 1))
    assert c.as_tuple() == (2, 3, 4)


def test_quad_aces_cannot_lose():
    chance = runout(cs("Ac Ad"), cs("As Ah Kd"), QJT)
    assert chance.win == 1.0
    assert chance.tie == 0.0
    assert chance.loss == 0.0


def test_river_runout_only_enumerates_opponents():
    hero = cs("As Ah")
    table = cs("Ks Kh 7d 4c 2s")
    chance = runout(hero, table, make_deck(exclude=hero | table))
    assert abs(chance.win + chance.tie + chance.loss - 1.0) < 1e-9
    assert chance.win > 0.75
    assert 0.0 < chance.loss < 0.2


def test_board_is_a_split():
    table = cs("As Ks Qs Js Ts")
    hero = cs("2c 3d")
    deck = cs("4c 5d 6h 7c")
    chance = runout(hero, table, deck)
    assert chance.as_tuple() == (0.0, 1.0, 0.0)


def test_invalid_hand():
    with pytest.raises(InvalidHand):
        runout(cs("As"), cs("Ks Qs Js"), QJT - cs("Js"))
    with pytest.raises(InvalidHand):
        runout(cs("As Ah Ad"), CardSet(), make_deck(exclude=["As", "Ah", "Ad"]))


def test_invalid_table():
    with pytest.raises(InvalidTable):
        runout(cs("2c 3c"), cs("As Ah Ad Ac Ks Kh"), cs("4c 5c 6c"))
    with pytest.raises(InvalidTable):
        runout(cs("2c 3c"), cs("2c Ah Ad"), cs("4c 5c 6c 7c"))
    with pytest.raises(InvalidTable):
        runout(cs("2c 3c"), cs("As Ah Ad"), cs("2c 5c 6c 7c"))


def test_not_enough_unseen_cards():
    with pytest.raises(InsufficientCards):
        runout(cs("2c 3c"), cs("As Ah Ad"), cs("4c 5c"))


def test_parallel_matches_sequential():
    player = cs("Ks Qs")
    table = cs("Js Ts 2d")
    deck = cs("Ah Ad 9s 9h 9c 8d 3c 3h 4s 4d 5c 6h")

    seq = runout(player, table, deck)
    par = runout(player, table, deck, workers=2, chunk_size=5)
    assert seq.as_tuple() == par.as_tuple()
    assert seq.win > 0 and seq.loss > 0


def test_exact_equity_strings():
    wr, tr, lr = exact_equity(["Ah", "Ad"], ["7c", "8d", "9s", "2h", "Kc"])
    assert 0.0 <= wr <= 1.0
    assert 0.0 <= tr <= 1.0
    assert 0.0 <= lr <= 1.0
    assert abs((wr + tr + lr) - 1.0) < 1e-6


def test_exact_equity_dead_cards_leave_the_pool():
    dead = ["Tc", "Td", "Th", "Ts", "6c", "6d"]
    got = exact_equity(["Ah", "Ad"], ["7c", "8d", "9s", "2h", "Kc"], dead_cards=dead)

    hero = cs("Ah Ad")
    table = cs("7c 8d 9s 2h Kc")
    deck = make_deck(exclude=hero | table | cs(" ".join(dead)))
    assert deck.card_count() == 39
    assert got == runout(hero, table, deck).as_tuple()


def test_exact_equity_rejects_bad_input():
    with pytest.raises(ValueError):
        exact_equity(["Ah"], ["7c", "8d", "9s"])
    with pytest.raises(ValueError):
        exact_equity(["Ah", "Ad"], ["Ah", "8d", "9s"])
    with pytest.raises(ValueError):
        exact_equity(["Ah", "Ad"], ["7c", "8d", "9s"], dead_cards=["7c"])


def test_classification_errors_become_invalid_outcome():
    with pytest.raises(InvalidOutcome) as exc:
        _classify(cs("As Ks Qs Js"))
    assert isinstance(exc.value.__cause__, CardCountTooLow)
    assert exc.value.cards == cs("As Ks Qs Js")
