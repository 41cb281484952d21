"""Public dungeon package interface.

Graph generation core (orientation primitives, nodes, direction chooser,
reachability oracle, path builder, key placement) plus the Dungeon pipeline
that ties them together.
"""

from .config import DungeonConfig, MAX_PATH_LENGTH
from .errors import DungeonGenerationError, MainPathInfeasible, SecondaryPathSkipped
from .nodes import MAIN_PATH_ID, Node, link
from .orientation import ORIENTATIONS, Orientation, move, opposite
from .pipeline import Dungeon
from .reachability import Reachability, is_reachable  # noqa: F401

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "MAX_PATH_LENGTH",
    "DungeonGenerationError",
    "MainPathInfeasible",
    "SecondaryPathSkipped",
    "MAIN_PATH_ID",
    "Node",
    "link",
    "ORIENTATIONS",
    "Orientation",
    "move",
    "opposite",
    "Reachability",
    "is_reachable",
]
