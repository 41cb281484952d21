"""Path construction: main path and secondary branches.

Every step picks a heading with the ``DirectionChooser`` and asks the
``ReachabilityOracle`` whether the rest of the path still fits from the new
cell. When no heading supports the full length, the heading that got
furthest is used and the path is shortened to what that heading can
actually reach.

A path is staged in a ``PathResult`` first and only linked into the graph by
``commit``; a path rejected under ``fail_if_too_short`` leaves no trace.
"""
from __future__ import annotations
import collections.abc
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from .directions import DirectionChooser
from .errors import PathTooShort
from .nodes import MAIN_PATH_ID, Node, link
from .orientation import Orientation, Position, move, opposite
from .reachability import ReachabilityOracle


@dataclass
class _Fallback:
    direction: Orientation = Orientation.NONE
    cell: Optional[Position] = None
    achievable: int = 0

    def offer(self, direction: Orientation, cell: Position, achievable: int) -> None:
        # strictly greater: the first probe wins ties
        if achievable > self.achievable:
            self.direction, self.cell, self.achievable = direction, cell, achievable


@dataclass
class _Step:
    direction: Orientation
    cell: Position
    budget: int


@dataclass
class PathResult:
    path_id: int
    requested: int
    anchor: Optional[Node] = None
    steps: List[_Step] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)
    fallbacks: int = 0
    probes: int = 0

    @property
    def achieved(self) -> int:
        return len(self.steps) + (1 if self.anchor is None and self.nodes else 0)

    @property
    def truncated(self) -> bool:
        return self.achieved < self.requested


class PathBuilder:
    def __init__(self, occupied: Set[Position], chooser: DirectionChooser, fail_if_too_short: bool = False):
        self.occupied = occupied
        self.chooser = chooser
        self.fail_if_too_short = fail_if_too_short

    def build_main(self, length: int, origin: Position = (0, 0)) -> PathResult:
        """Stage a main path of ``length`` rooms starting with a room at ``origin``."""
        result = PathResult(MAIN_PATH_ID, length)
        if origin in self.occupied:
            return self._finish(result)
        root = Node(origin, MAIN_PATH_ID)
        result.nodes.append(root)
        self._extend(result, origin, Orientation.NONE, length - 1, (), {origin})
        return self._finish(result)

    def build_secondary(self, path_id: int, anchor: Node, length: int) -> PathResult:
        """Stage ``length`` new rooms branching off ``anchor``.

        Headings the anchor already uses for its doors are never tried for
        the first step.
        """
        result = PathResult(path_id, length, anchor=anchor)
        self._extend(result, anchor.position, Orientation.NONE, length, anchor.door_orientations(), set())
        return self._finish(result)

    def commit(self, result: PathResult) -> List[Node]:
        """Create and link the staged rooms, then mark their cells occupied."""
        previous = result.anchor if result.anchor is not None else (result.nodes[0] if result.nodes else None)
        for step in result.steps:
            node = Node(step.cell, result.path_id)
            link(previous, node, step.direction)
            result.nodes.append(node)
            previous = node
        self.occupied.update(n.position for n in result.nodes)
        return result.nodes

    def _extend(self, result: PathResult, position: Position, previous: Orientation, remaining: int,
                first_excluded: Iterable[Orientation], staged: Set[Position]) -> None:
        oracle = ReachabilityOracle(_Union(self.occupied, staged))
        excluded_seed = set(first_excluded)
        while remaining > 0:
            step = self._probe(oracle, position, previous, remaining, excluded_seed)
            excluded_seed = set()
            if step is None:
                break
            if step.budget < remaining:
                result.fallbacks += 1
                remaining = step.budget
            result.steps.append(step)
            staged.add(step.cell)
            position, previous = step.cell, step.direction
            remaining -= 1
        result.probes += oracle.probes

    def _probe(self, oracle: ReachabilityOracle, position: Position, previous: Orientation, remaining: int,
               excluded_seed: Set[Orientation]) -> Optional[_Step]:
        excluded = {Orientation.NONE} | excluded_seed
        if previous is not Orientation.NONE:
            excluded.add(opposite(previous))
        fallback = _Fallback()
        while True:
            direction = self.chooser.choose(previous, excluded)
            if direction is Orientation.NONE:
                break
            excluded.add(direction)
            cell = move(position, direction)
            reach = oracle.is_reachable(frozenset(), cell, remaining)
            if reach.feasible:
                return _Step(direction, cell, remaining)
            fallback.offer(direction, cell, reach.achievable(remaining))
        if fallback.cell is None:
            return None
        return _Step(fallback.direction, fallback.cell, fallback.achievable)

    def _finish(self, result: PathResult) -> PathResult:
        if result.truncated and self.fail_if_too_short:
            raise PathTooShort(result.path_id, result.requested, result.achieved)
        return result


class _Union(collections.abc.Set):
    """Read-only membership view over the committed and staged cells."""

    def __init__(self, *sets):
        self._sets = sets

    def __contains__(self, item) -> bool:
        return any(item in s for s in self._sets)

    def __iter__(self):
        seen = set()
        for s in self._sets:
            for item in s:
                if item not in seen:
                    seen.add(item)
                    yield item

    def __len__(self) -> int:
        return sum(1 for _ in self)


__all__ = ["PathBuilder", "PathResult"]
