"""Value types for circuit growth: points, headings, moves, nodes and segments."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


@dataclass(frozen=True)
class Point:
    """Grid coordinates (cells, not pixels)."""

    x: float
    y: float

    def add(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def scale(self, n: float) -> "Point":
        return Point(self.x * n, self.y * n)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Point(0, 0)


class Orientation(Enum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def is_vertical(self) -> bool:
        return self in (Orientation.UP, Orientation.DOWN)


class Move(Enum):
    """A decision relative to the node's own heading."""

    STEP_UP = "up"
    STEP_UP_LEFT = "up-left"
    STEP_UP_RIGHT = "up-right"
    TERMINATE = "end"


ORIENTATION_LABELS: Dict[Orientation, str] = {
    Orientation.UP: "Up",
    Orientation.RIGHT: "Right",
    Orientation.DOWN: "Down",
    Orientation.LEFT: "Left",
}

MOVE_LABELS: Dict[Move, str] = {
    Move.STEP_UP: "Up",
    Move.STEP_UP_LEFT: "UpLeft",
    Move.STEP_UP_RIGHT: "UpRight",
    Move.TERMINATE: "End",
}

# moves a node may draw when it keeps growing
GROWTH_MOVES: Tuple[Move, ...] = (Move.STEP_UP, Move.STEP_UP_LEFT, Move.STEP_UP_RIGHT)


def move_from_label(label: str) -> Move:
    """Accept either the enum value ("up-left") or the display label ("UpLeft")."""
    for move in Move:
        if label == move.value or label == MOVE_LABELS[move]:
            return move
    raise KeyError(label)


@dataclass(frozen=True)
class Node:
    position: Point
    orientation: Orientation
    level: int = 0


@dataclass(frozen=True)
class Segment:
    """One transition emitted by the generator; TERMINATE segments have end == start."""

    move: Move
    orientation: Orientation
    start: Point
    end: Point
    level: int

    @property
    def is_end(self) -> bool:
        return self.move is Move.TERMINATE

    def to_dict(self) -> Dict[str, object]:
        return {
            "move": MOVE_LABELS[self.move],
            "orientation": ORIENTATION_LABELS[self.orientation],
            "start": list(self.start.as_tuple()),
            "end": list(self.end.as_tuple()),
            "level": self.level,
        }
