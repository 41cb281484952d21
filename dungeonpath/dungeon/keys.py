"""Key and lock placement.

The key of a secondary path goes to the room farthest (in doors crossed) from
the branch root, staying inside that path. The matching lock sits on the main
path door that leads on from the branch's anchor room.
"""
from __future__ import annotations
from typing import FrozenSet, List, Optional, Tuple

from .nodes import MAIN_PATH_ID, Node, lock


def deepest_node(root: Node) -> Tuple[Node, int]:
    """Return ``(node, depth)`` of the deepest room reachable from ``root`` via same-path doors.

    Each branch of the walk keeps its own visited set so siblings never prune
    one another. Ties keep the first room visited.
    """
    return _deepest(root, 0, frozenset())


def _deepest(node: Node, depth: int, visited: FrozenSet[int]) -> Tuple[Node, int]:
    visited = visited | {id(node)}
    best = (node, depth)
    for neighbor in node.doors.values():
        if neighbor.path_id != node.path_id or id(neighbor) in visited:
            continue
        found = _deepest(neighbor, depth + 1, visited)
        if found[1] > best[1]:
            best = found
    return best


def place_key(path: List[Node]) -> Optional[Node]:
    if not path or path[0].path_id == MAIN_PATH_ID:
        return None
    node, _depth = deepest_node(path[0])
    node.has_key = True
    return node


def place_lock(main_path: List[Node], anchor: Node) -> bool:
    """Lock the door from ``anchor`` to the next main path room, if both exist and it is still open."""
    try:
        index = main_path.index(anchor)
    except ValueError:
        return False
    if index + 1 >= len(main_path):
        return False
    following = main_path[index + 1]
    for orientation, other in anchor.doors.items():
        if other is following:
            if orientation in anchor.locks:
                return False
            lock(anchor, orientation)
            return True
    return False


__all__ = ["deepest_node", "place_key", "place_lock"]
