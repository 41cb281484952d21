from typing import Dict, List, Set

from .orientation import Orientation, Position, opposite

MAIN_PATH_ID = 0


class Node:
    """One room of the dungeon graph."""
    __slots__ = ("_position", "path_id", "has_key", "locks", "doors")

    def __init__(self, position: Position, path_id: int = MAIN_PATH_ID):
        self._position = (int(position[0]), int(position[1]))
        self.path_id = path_id
        self.has_key = False
        self.locks: Set[Orientation] = set()
        self.doors: Dict[Orientation, "Node"] = {}

    @property
    def position(self) -> Position:
        return self._position

    def door_orientations(self) -> List[Orientation]:
        return list(self.doors.keys())

    def free_orientations(self, candidates) -> List[Orientation]:
        return [o for o in candidates if o not in self.doors]

    def to_dict(self):
        return {
            "position": list(self._position),
            "path_id": self.path_id,
            "doors": [str(o) for o in self.doors],
            "locks": sorted(str(o) for o in self.locks),
            "has_key": self.has_key,
        }

    def __repr__(self) -> str:
        return f"Node({self._position}, path_id={self.path_id})"


def link(a: Node, b: Node, orientation: Orientation) -> None:
    """Connect ``a`` to ``b`` through ``a``'s ``orientation`` side, both directions at once."""
    back = opposite(orientation)
    if orientation in a.doors or back in b.doors:
        raise ValueError(f"door {orientation} between {a!r} and {b!r} already in use")
    a.doors[orientation] = b
    b.doors[back] = a


def lock(a: Node, orientation: Orientation) -> None:
    """Lock the door on ``a``'s ``orientation`` side and its counterpart."""
    other = a.doors[orientation]
    a.locks.add(orientation)
    other.locks.add(opposite(orientation))


__all__ = ["MAIN_PATH_ID", "Node", "link", "lock"]
