"""Per-level diagnostic records for overlay/visualization tools."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

Vec2 = Tuple[float, float]


@dataclass
class SuccessorTrace:
    position: Vec2
    in_bounds: bool
    available: bool
    bounds: Dict[str, str] = field(default_factory=dict)


@dataclass
class NodeTrace:
    position: Vec2
    level: int
    orientation: str
    split_strategy: str = ""
    actions_amount: int = 0
    row_has_density: bool = False
    end_chance: float = 0.0
    actions: List[str] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)
    successors: List[SuccessorTrace] = field(default_factory=list)


class GrowthTrace:
    """
    Caller-owned collector handed to CircuitPatternGenerator.advance().

    The generator clears it at the start of every level, so after a call it
    describes exactly that level.
    """

    def __init__(self) -> None:
        self.nodes: List[NodeTrace] = []

    def reset(self) -> None:
        self.nodes.clear()

    def add(self, record: NodeTrace) -> None:
        self.nodes.append(record)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [asdict(n) for n in self.nodes]
