"""Generation failure types.

Only two failures are visible outside the path builder: the whole run aborts
with ``MainPathInfeasible`` or a single branch is dropped with
``SecondaryPathSkipped``. ``PathTooShort`` is the builder's own signal and is
translated into one of those by the pipeline.
"""


class DungeonGenerationError(Exception):
    pass


class PathTooShort(DungeonGenerationError):
    def __init__(self, path_id: int, requested: int, achieved: int):
        super().__init__(f"path {path_id} reached {achieved} of {requested} rooms")
        self.path_id = path_id
        self.requested = requested
        self.achieved = achieved


class MainPathInfeasible(DungeonGenerationError):
    def __init__(self, requested: int, achieved: int, seed=None):
        super().__init__(f"main path needs {requested} rooms but only {achieved} fit (seed={seed})")
        self.requested = requested
        self.achieved = achieved
        self.seed = seed

    def to_dict(self):
        return {
            "error": "main_path_infeasible",
            "requested": self.requested,
            "achieved": self.achieved,
            "seed": self.seed,
        }


class SecondaryPathSkipped(DungeonGenerationError):
    def __init__(self, branch_index: int, reason: str):
        super().__init__(f"secondary path at main room {branch_index} skipped: {reason}")
        self.branch_index = branch_index
        self.reason = reason


__all__ = ["DungeonGenerationError", "PathTooShort", "MainPathInfeasible", "SecondaryPathSkipped"]
