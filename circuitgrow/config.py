"""Tunables for pattern growth and the viewer, plus YAML loading."""
from __future__ import annotations

import pathlib
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple

import yaml

from circuitgrow.patterns.weights import check_table
from circuitgrow.state.circuit import GROWTH_MOVES, MOVE_LABELS, Move, move_from_label

Color = Tuple[int, int, int]

DEFAULT_TUNING_PATH = pathlib.Path(__file__).resolve().parent / "content" / "tuning.yaml"

SPLIT_COUNTS: Dict[str, int] = {
    "no-split": 1,
    "split-2": 2,
    "split-3": 3,
}


class ConfigError(ValueError):
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def default_move_weights() -> Dict[Move, float]:
    return {
        Move.STEP_UP: 0.5,
        Move.STEP_UP_LEFT: 0.25,
        Move.STEP_UP_RIGHT: 0.25,
    }


def split_table_for(split_chance: float) -> Dict[str, float]:
    """Two thirds of the split mass goes to 2-way splits, one third to 3-way."""
    return {
        "no-split": 1.0 - split_chance,
        "split-2": split_chance * 2.0 / 3.0,
        "split-3": split_chance / 3.0,
    }


@dataclass
class GrowthConfig:
    # 0.0 keeps every node on a single path; raise it to get branching
    split_chance: float = 0.0
    split_table: Optional[Dict[str, float]] = None
    move_weights: Dict[Move, float] = field(default_factory=default_move_weights)
    end_chance_scale: float = 0.01
    min_row_nodes: int = 3
    seed: Optional[int] = None
    table_tolerance: float = 1e-6

    def resolved_split_table(self) -> Dict[str, float]:
        if self.split_table is not None:
            return dict(self.split_table)
        return split_table_for(self.split_chance)

    def _range_problems(self) -> List[str]:
        problems: List[str] = []
        if not 0.0 <= self.split_chance <= 1.0:
            problems.append(f"split_chance must be within [0, 1], got {self.split_chance}")
        tables = (("split_table", self.resolved_split_table()), ("move_weights", self.move_weights))
        for name, table in tables:
            negative = [label for label, w in table.items() if _is_number(w) and w < 0]
            if negative:
                problems.append(f"{name} has negative weights for {', '.join(map(str, negative))}")
        if self.end_chance_scale < 0:
            problems.append("end_chance_scale must be >= 0")
        if self.min_row_nodes < 1:
            problems.append("min_row_nodes must be >= 1")
        return problems

    def check_ranges(self) -> None:
        """
        Reject settings no table can express. Table shape (unknown labels,
        weights not summing to 1) is left to the draws themselves.
        """
        problems = self._range_problems()
        if problems:
            raise ConfigError("; ".join(problems))

    def validate(self) -> None:
        problems = self._range_problems()
        split_table = self.resolved_split_table()
        unknown = [label for label in split_table if label not in SPLIT_COUNTS]
        if unknown:
            problems.append(f"unknown split strategies: {', '.join(map(str, unknown))}")
        problems.extend(f"split_table: {p}" for p in check_table(split_table, self.table_tolerance))
        bad_moves = [m for m in self.move_weights if m not in GROWTH_MOVES]
        if bad_moves:
            problems.append(f"move_weights may not contain {', '.join(MOVE_LABELS[m] for m in bad_moves)}")
        problems.extend(
            f"move_weights: {p}" for p in check_table(self.move_weights, self.table_tolerance)
        )
        if problems:
            raise ConfigError("; ".join(problems))


@dataclass
class ViewerConfig:
    width: int = 1280
    height: int = 900
    cell_size: float = 64.0
    speed: float = 1.0
    wave_length: Optional[int] = 2
    wave_gap: int = 1
    stroke_width: int = 1
    circuit_color: Color = (0, 160, 60)
    bg_color: Color = (0, 0, 0)
    debug_color: Color = (255, 80, 80)
    draw_cursor: bool = False
    debug: bool = False
    fps: int = 60
    debug_log_path: Optional[str] = None


# ------------------------------------------------------------------ #
# YAML loading                                                        #
# ------------------------------------------------------------------ #

def _parse_growth(data: Dict[str, Any]) -> GrowthConfig:
    cfg = GrowthConfig()
    for key in ("split_chance", "end_chance_scale", "table_tolerance"):
        if key in data:
            value = data[key]
            if not _is_number(value):
                raise ConfigError(f"growth.{key} must be a number")
            setattr(cfg, key, float(value))
    for key in ("min_row_nodes", "seed"):
        if key in data and data[key] is not None:
            value = data[key]
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"growth.{key} must be an integer")
            setattr(cfg, key, value)
    if data.get("split_table") is not None:
        table = data["split_table"]
        if not isinstance(table, dict):
            raise ConfigError("growth.split_table must be a mapping")
        cfg.split_table = {str(k): v for k, v in table.items()}
    if data.get("move_weights") is not None:
        raw = data["move_weights"]
        if not isinstance(raw, dict):
            raise ConfigError("growth.move_weights must be a mapping")
        weights: Dict[Move, float] = {}
        for label, weight in raw.items():
            try:
                weights[move_from_label(str(label))] = weight
            except KeyError:
                raise ConfigError(f"growth.move_weights: unknown move {label!r}") from None
        cfg.move_weights = weights
    cfg.validate()
    return cfg


_VIEWER_INTS = ("width", "height", "stroke_width", "fps", "wave_gap")
_VIEWER_NUMBERS = ("cell_size", "speed")
_VIEWER_FLAGS = ("draw_cursor", "debug")


def _parse_color(key: str, value: Any) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"viewer.{key} must be an [r, g, b] list")
    if not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
        raise ConfigError(f"viewer.{key} channels must be integers in 0..255")
    return (value[0], value[1], value[2])


def _parse_viewer(data: Dict[str, Any]) -> ViewerConfig:
    cfg = ViewerConfig()
    known = {f.name for f in fields(ViewerConfig)}
    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"viewer.{key} is not a viewer setting")
        if key.endswith("_color"):
            value = _parse_color(key, value)
        elif key in _VIEWER_INTS:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"viewer.{key} must be an integer")
        elif key == "wave_length":
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise ConfigError("viewer.wave_length must be an integer or null")
        elif key in _VIEWER_NUMBERS:
            if not _is_number(value):
                raise ConfigError(f"viewer.{key} must be a number")
            value = float(value)
        elif key in _VIEWER_FLAGS:
            if not isinstance(value, bool):
                raise ConfigError(f"viewer.{key} must be true or false")
        elif key == "debug_log_path":
            if value is not None and not isinstance(value, str):
                raise ConfigError("viewer.debug_log_path must be a string")
        setattr(cfg, key, value)
    if cfg.speed <= 0:
        raise ConfigError("viewer.speed must be > 0")
    if cfg.cell_size <= 0:
        raise ConfigError("viewer.cell_size must be > 0")
    for key in ("width", "height", "stroke_width", "fps"):
        if getattr(cfg, key) < 1:
            raise ConfigError(f"viewer.{key} must be >= 1")
    if cfg.wave_gap < 0 or (cfg.wave_length is not None and cfg.wave_length < 0):
        raise ConfigError("viewer.wave_length and viewer.wave_gap must be >= 0")
    return cfg


def load_tuning(path: Optional[str] = None) -> Tuple[GrowthConfig, ViewerConfig]:
    """
    Load growth and viewer settings from YAML.

    Without a path the packaged content/tuning.yaml is used; a missing packaged
    file just yields the defaults.
    """
    if path is None:
        tuning_path = DEFAULT_TUNING_PATH
        if not tuning_path.exists():
            return GrowthConfig(), ViewerConfig()
    else:
        tuning_path = pathlib.Path(path)
    try:
        with tuning_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"cannot read tuning file {tuning_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"tuning file {tuning_path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("tuning file must contain a mapping")
    growth = data.get("growth") or {}
    viewer = data.get("viewer") or {}
    if not isinstance(growth, dict) or not isinstance(viewer, dict):
        raise ConfigError("'growth' and 'viewer' sections must be mappings")
    return _parse_growth(growth), _parse_viewer(viewer)
