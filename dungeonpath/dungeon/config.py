import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

# Lookahead cost is exponential in path length, keep it bounded.
MAX_PATH_LENGTH = 99
MAX_DEBUG_PADDING = 10

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class DungeonConfig:
    min_main_path_length: int = 10
    max_main_path_length: int = 10
    min_secondary_path_length: int = 1
    max_secondary_path_length: int = 4
    min_rooms_before_new_secondary: int = 2
    max_rooms_before_new_secondary: int = 4
    turn_chance: float = 0.25
    fail_if_too_short: bool = False
    full_random: bool = False
    lock_doors: bool = True
    seed: Optional[int] = None
    debug_padding: int = 4

    def validated(self) -> "DungeonConfig":
        """Return a copy with every range clamped and every min <= max."""
        min_main = _clamp(self.min_main_path_length, 1, MAX_PATH_LENGTH)
        max_main = _clamp(max(self.max_main_path_length, min_main), 1, MAX_PATH_LENGTH)
        min_sec = _clamp(self.min_secondary_path_length, 0, MAX_PATH_LENGTH)
        max_sec = _clamp(max(self.max_secondary_path_length, min_sec), 0, MAX_PATH_LENGTH)
        min_gap = _clamp(self.min_rooms_before_new_secondary, 1, max_main)
        max_gap = _clamp(max(self.max_rooms_before_new_secondary, min_gap), 1, max_main)
        return replace(
            self,
            min_main_path_length=min_main,
            max_main_path_length=max_main,
            min_secondary_path_length=min_sec,
            max_secondary_path_length=max_sec,
            min_rooms_before_new_secondary=min_gap,
            max_rooms_before_new_secondary=max_gap,
            turn_chance=min(1.0, max(0.0, float(self.turn_chance))),
            debug_padding=_clamp(self.debug_padding, 0, MAX_DEBUG_PADDING),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["DungeonConfig"] = None) -> "DungeonConfig":
        """Build a config from loosely typed values (query args, env, JSON). Unknown keys are ignored."""
        cfg = replace(base) if base is not None else cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            setattr(cfg, f.name, _coerce(f.name, raw, f.default))
        return cfg

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "DUNGEON_") -> "DungeonConfig":
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key in environ:
                values[f.name] = environ[key]
        return cls.from_mapping(values)

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if raw is None:
        return None if name == "seed" else default
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"{name}: expected a boolean, got {raw!r}")
    try:
        if isinstance(default, float):
            return float(raw)
        if isinstance(raw, bool):
            raise ValueError
        if isinstance(raw, str) and raw.strip() == "" and name == "seed":
            return None
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name}: expected a number, got {raw!r}") from None


__all__ = ["DungeonConfig", "MAX_PATH_LENGTH"]
