"""Pipeline orchestration for dungeon graph generation.

Provides the public Dungeon class used by the API and CLI. Phases run in a
fixed order, each timed when metrics are enabled:

    build_main_path -> branch_scan (secondary path + key per branch) -> place_locks

Generation is a single synchronous batch; the finished Dungeon is treated as
read-only by every consumer.
"""
from __future__ import annotations
import random
import time
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .config import DungeonConfig
from .directions import DirectionChooser
from .errors import MainPathInfeasible, PathTooShort, SecondaryPathSkipped
from .keys import place_key, place_lock
from .metrics import init_metrics
from .nodes import MAIN_PATH_ID, Node
from .orientation import ORIENTATIONS, Position
from .paths import PathBuilder
from .render import render_ascii

log = get_logger("dungeon")

ORIGIN: Position = (0, 0)


class Dungeon:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        *,
        seed: int | None = None,
        blocked: Iterable[Position] = (),
        enable_metrics: bool = True,
    ):
        config = (config or DungeonConfig()).validated()
        if seed is not None:
            config.seed = seed
        if config.seed is None:
            config.seed = random.randint(1, 1_000_000)
        self.config = config
        self.seed = config.seed
        self._log = log.bind(seed=self.seed)
        # Local RNG so external random usage does not affect generation
        self._rng = random.Random(self.seed)
        self.enable_metrics = enable_metrics
        self.metrics: Dict[str, object] = init_metrics() if enable_metrics else {}
        self.blocked = frozenset((int(x), int(y)) for x, y in blocked)
        self.occupied = set(self.blocked)
        self.nodes: List[Node] = []
        self.paths: Dict[int, List[Node]] = {}
        self._anchors: Dict[int, Node] = {}
        self._chooser = DirectionChooser(config.turn_chance, config.full_random, self._rng)
        self._builder = PathBuilder(self.occupied, self._chooser, config.fail_if_too_short)
        self._run_pipeline()

    @property
    def main_path(self) -> List[Node]:
        return self.paths.get(MAIN_PATH_ID, [])

    @property
    def secondary_paths(self) -> Dict[int, List[Node]]:
        return {pid: nodes for pid, nodes in self.paths.items() if pid != MAIN_PATH_ID}

    def node_at(self, position: Position) -> Optional[Node]:
        for node in self.nodes:
            if node.position == position:
                return node
        return None

    def _run_pipeline(self):
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        _phase('build_main_path', self._build_main_path)
        _phase('branch_scan', self._branch_scan)
        if self.config.lock_doors:
            _phase('place_locks', self._place_locks)

        if self.enable_metrics:
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
        self._log.info(
            event="dungeon_generated",
            main_rooms=len(self.main_path),
            secondary_paths=len(self.paths) - 1,
            rooms=len(self.nodes),
        )

    def _build_main_path(self):
        cfg = self.config
        requested = self._rng.randint(cfg.min_main_path_length, cfg.max_main_path_length)
        self._count('main_path_requested', requested)
        try:
            result = self._builder.build_main(requested, ORIGIN)
        except PathTooShort as exc:
            self._log.warn(event="main_path_infeasible", requested=exc.requested, achieved=exc.achieved)
            raise MainPathInfeasible(exc.requested, exc.achieved, self.seed) from exc
        self._count('oracle_probes', result.probes)
        if not result.nodes:
            self._log.warn(event="main_path_infeasible", requested=requested, achieved=0)
            raise MainPathInfeasible(requested, 0, self.seed)
        nodes = self._builder.commit(result)
        self.paths[MAIN_PATH_ID] = nodes
        self.nodes.extend(nodes)
        self._count('main_path_length', len(nodes))
        self._count('main_path_fallbacks', result.fallbacks)

    def _branch_scan(self):
        cfg = self.config
        main = self.main_path
        index = 0
        while True:
            index += self._rng.randint(cfg.min_rooms_before_new_secondary, cfg.max_rooms_before_new_secondary)
            if index >= len(main):
                break
            try:
                self._build_secondary_path(index, main[index])
            except SecondaryPathSkipped as exc:
                self._count('secondary_paths_skipped')
                self._log.debug(event="secondary_path_skipped", branch=exc.branch_index, reason=exc.reason)

    def _build_secondary_path(self, index: int, anchor: Node):
        cfg = self.config
        if not anchor.free_orientations(ORIENTATIONS):
            raise SecondaryPathSkipped(index, "no free orientation")
        length = self._rng.randint(cfg.min_secondary_path_length, cfg.max_secondary_path_length)
        if length <= 0:
            raise SecondaryPathSkipped(index, "zero length")
        path_id = len(self.paths)
        try:
            result = self._builder.build_secondary(path_id, anchor, length)
        except PathTooShort as exc:
            raise SecondaryPathSkipped(index, f"too short ({exc.achieved}/{exc.requested})") from exc
        self._count('oracle_probes', result.probes)
        if not result.steps:
            raise SecondaryPathSkipped(index, "no room to grow")
        nodes = self._builder.commit(result)
        self.paths[path_id] = nodes
        self._anchors[path_id] = anchor
        self.nodes.extend(nodes)
        self._count('secondary_paths_built')
        self._count('secondary_rooms', len(nodes))
        if result.truncated:
            self._count('secondary_paths_truncated')
        if place_key(nodes) is not None:
            self._count('keys_placed')

    def _place_locks(self):
        main = self.main_path
        for anchor in self._anchors.values():
            if place_lock(main, anchor):
                self._count('locks_placed')

    def _count(self, key: str, amount: int = 1):
        if self.enable_metrics:
            self.metrics[key] += amount

    def render(self, padding: int | None = None) -> str:
        return render_ascii(self, padding)

    def to_dict(self):
        return {
            "seed": self.seed,
            "config": self.config.to_dict(),
            "main_path": [n.to_dict() for n in self.main_path],
            "secondary_paths": {str(pid): [n.to_dict() for n in nodes] for pid, nodes in self.secondary_paths.items()},
        }


__all__ = ["Dungeon", "ORIGIN"]
