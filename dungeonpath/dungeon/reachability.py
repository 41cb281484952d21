"""Depth-limited lookahead used before committing a path step.

``is_reachable`` answers whether a simple path of ``depth`` cells can start
at ``candidate`` without touching an occupied cell or a cell already used
earlier in the same lookahead. The search is an exhaustive 4-way recursion,
so its cost grows as 4**depth; callers keep ``depth`` small (path lengths are
clamped to 99 by the config).
"""
from __future__ import annotations
from typing import AbstractSet, FrozenSet, NamedTuple

from .orientation import Position, neighbors


class Reachability(NamedTuple):
    feasible: bool
    # Cells still missing at the closest collision; 0 when feasible.
    shortfall: int

    def achievable(self, requested: int) -> int:
        return requested - self.shortfall


class ReachabilityOracle:
    def __init__(self, occupied: AbstractSet[Position]):
        self.occupied = occupied
        self.probes = 0

    def is_reachable(self, explored: FrozenSet[Position], candidate: Position, depth: int) -> Reachability:
        self.probes += 1
        if candidate in self.occupied or candidate in explored:
            return Reachability(False, depth)
        depth -= 1
        if depth <= 0:
            return Reachability(True, 0)
        branch = explored | {candidate}
        best = depth
        for _o, cell in neighbors(candidate):
            result = self.is_reachable(branch, cell, depth)
            if result.feasible:
                return result
            best = min(best, result.shortfall)
        return Reachability(False, best)


def is_reachable(occupied: AbstractSet[Position], explored: AbstractSet[Position], candidate: Position,
                 depth: int) -> Reachability:
    return ReachabilityOracle(occupied).is_reachable(frozenset(explored), candidate, depth)


__all__ = ["Reachability", "ReachabilityOracle", "is_reachable"]
