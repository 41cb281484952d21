"""Grid and direction primitives.

Positions are plain ``(x, y)`` tuples on an unbounded grid. NORTH is +y and
EAST is +x. ``Orientation.NONE`` only means "no heading yet" and is rejected
by ``move`` and ``opposite``.
"""
from __future__ import annotations
from enum import Enum
from typing import Tuple

Position = Tuple[int, int]


class Orientation(Enum):
    NONE = "none"
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def __str__(self) -> str:
        return self.value


ORIENTATIONS = (Orientation.NORTH, Orientation.EAST, Orientation.SOUTH, Orientation.WEST)

_STEPS = {
    Orientation.NORTH: (0, 1),
    Orientation.EAST: (1, 0),
    Orientation.SOUTH: (0, -1),
    Orientation.WEST: (-1, 0),
}
_OPPOSITES = {
    Orientation.NORTH: Orientation.SOUTH,
    Orientation.SOUTH: Orientation.NORTH,
    Orientation.EAST: Orientation.WEST,
    Orientation.WEST: Orientation.EAST,
}
_ANGLES = {
    Orientation.NORTH: 0,
    Orientation.EAST: 90,
    Orientation.SOUTH: 180,
    Orientation.WEST: 270,
}
_BY_ANGLE = {a: o for o, a in _ANGLES.items()}


def _require_cardinal(orientation: Orientation) -> None:
    if orientation not in _STEPS:
        raise ValueError(f"expected a cardinal orientation, got {orientation!r}")


def move(position: Position, orientation: Orientation) -> Position:
    """Return the cell one step from ``position`` towards ``orientation``."""
    _require_cardinal(orientation)
    dx, dy = _STEPS[orientation]
    return (position[0] + dx, position[1] + dy)


def opposite(orientation: Orientation) -> Orientation:
    _require_cardinal(orientation)
    return _OPPOSITES[orientation]


def angle_of(orientation: Orientation) -> int:
    _require_cardinal(orientation)
    return _ANGLES[orientation]


def orientation_of(angle: float) -> Orientation:
    """Map an angle in degrees (any multiple of 90, negatives allowed) to a cardinal."""
    normalized = int(round(angle)) % 360
    if normalized not in _BY_ANGLE:
        raise ValueError(f"angle {angle} is not a multiple of 90 degrees")
    return _BY_ANGLE[normalized]


def turn_left(orientation: Orientation) -> Orientation:
    return orientation_of(angle_of(orientation) - 90)


def turn_right(orientation: Orientation) -> Orientation:
    return orientation_of(angle_of(orientation) + 90)


def neighbors(position: Position):
    """Yield ``(orientation, cell)`` for the four adjacent cells in ``ORIENTATIONS`` order."""
    for o in ORIENTATIONS:
        yield o, move(position, o)


__all__ = [
    "Position",
    "Orientation",
    "ORIENTATIONS",
    "move",
    "opposite",
    "angle_of",
    "orientation_of",
    "turn_left",
    "turn_right",
    "neighbors",
]
