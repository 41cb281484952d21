import random

from dungeonpath.dungeon.directions import DirectionChooser, choose_direction
from dungeonpath.dungeon.orientation import Orientation

N, E, S, W = Orientation.NORTH, Orientation.EAST, Orientation.SOUTH, Orientation.WEST


def chooser(turn_chance=0.25, full_random=False, seed=1):
    return DirectionChooser(turn_chance, full_random, random.Random(seed))


def test_never_backtracks():
    c = chooser(turn_chance=0.9)
    for prev in (N, E, S, W):
        picks = {c.choose(prev) for _ in range(200)}
        assert {N: S, E: W, S: N, W: E}[prev] not in picks


def test_empty_candidates_return_none():
    assert chooser().choose(N, {N, E, W}) is Orientation.NONE
    assert chooser().choose(Orientation.NONE, {N, E, S, W}) is Orientation.NONE


def test_single_candidate_returned():
    c = chooser(turn_chance=0.0)
    for _ in range(20):
        assert c.choose(N, {N, E}) == W


def test_zero_turn_chance_keeps_heading():
    c = chooser(turn_chance=0.0)
    assert all(c.choose(E) == E for _ in range(200))


def test_full_turn_chance_always_turns():
    c = chooser(turn_chance=1.0)
    picks = [c.choose(N) for _ in range(200)]
    assert set(picks) == {E, W}


def test_only_turns_left_when_heading_excluded():
    c = chooser(turn_chance=0.0)
    picks = {c.choose(N, {N}) for _ in range(100)}
    assert picks == {E, W}


def test_start_is_uniform_over_candidates():
    c = chooser()
    picks = {c.choose(Orientation.NONE, {N}) for _ in range(200)}
    assert picks == {E, S, W}


def test_full_random_ignores_momentum():
    c = chooser(turn_chance=0.0, full_random=True)
    picks = {c.choose(N) for _ in range(200)}
    assert picks == {N, E, W}


def test_function_form_uses_given_rng():
    a = [choose_direction(N, turn_chance=0.5, rng=random.Random(9)) for _ in range(5)]
    b = [choose_direction(N, turn_chance=0.5, rng=random.Random(9)) for _ in range(5)]
    assert a == b
