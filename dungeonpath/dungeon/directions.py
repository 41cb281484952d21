"""Momentum-biased heading selection for path extension."""
from __future__ import annotations
import random
from typing import Iterable, Optional

from .orientation import ORIENTATIONS, Orientation, opposite, turn_left, turn_right


class DirectionChooser:
    def __init__(self, turn_chance: float = 0.0, full_random: bool = False, rng: Optional[random.Random] = None):
        self.turn_chance = turn_chance
        self.full_random = full_random
        self.rng = rng or random.Random()

    def candidates(self, previous: Orientation, excluded: Iterable[Orientation]):
        blocked = set(excluded)
        if previous is not Orientation.NONE:
            blocked.add(opposite(previous))
        return [o for o in ORIENTATIONS if o not in blocked]

    def choose(self, previous: Orientation, excluded: Iterable[Orientation] = ()) -> Orientation:
        """Pick the next heading, or ``Orientation.NONE`` when every direction is excluded.

        Backtracking (``opposite(previous)``) is never returned. With a known
        heading the path keeps going straight with probability
        ``1 - turn_chance`` and otherwise turns left or right.
        """
        options = self.candidates(previous, excluded)
        if not options:
            return Orientation.NONE
        if previous is Orientation.NONE or self.full_random:
            return self.rng.choice(options)
        if len(options) == 1:
            return options[0]
        turns = [o for o in (turn_left(previous), turn_right(previous)) if o in options]
        if previous in options:
            if not turns or self.rng.random() >= self.turn_chance:
                return previous
        return self.rng.choice(turns)


def choose_direction(previous: Orientation, excluded: Iterable[Orientation] = (), *, turn_chance: float = 0.0,
                     full_random: bool = False, rng: Optional[random.Random] = None) -> Orientation:
    return DirectionChooser(turn_chance, full_random, rng).choose(previous, excluded)


__all__ = ["DirectionChooser", "choose_direction"]
