"""
Level-by-level growth of a grid-aligned circuit pattern.

The generator holds a frontier of live nodes. Each advance() moves every node
one level: it may terminate, continue along its heading, or veer diagonally,
and every decision is reported as a Segment for the renderer to animate.
"""
from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from circuitgrow.config import SPLIT_COUNTS, GrowthConfig
from circuitgrow.patterns import geometry
from circuitgrow.patterns.trace import GrowthTrace, NodeTrace, SuccessorTrace
from circuitgrow.patterns.weights import draw, table_without
from circuitgrow.rng import new_rng
from circuitgrow.state.circuit import (
    MOVE_LABELS,
    ORIENTATION_LABELS,
    ORIGIN,
    Move,
    Node,
    Orientation,
    Point,
    Segment,
)


class SplitStrategyError(RuntimeError):
    """The split table produced a label with no known branch count."""


def seed_nodes() -> List[Node]:
    """Four nodes at the origin, one per heading."""
    return [Node(position=ORIGIN, orientation=o, level=0) for o in Orientation]


class CircuitPatternGenerator:
    def __init__(
        self,
        h_segments: float,
        v_segments: float,
        starting_nodes: Optional[Iterable[Node]] = None,
        *,
        config: Optional[GrowthConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        # one extra cell each way so the boundary itself can be reached
        self.h_segments = h_segments + 1
        self.v_segments = v_segments + 1
        self.config = config or GrowthConfig()
        self.config.check_ranges()
        self.rng = rng if rng is not None else new_rng(self.config.seed)
        self._nodes: List[Node] = list(starting_nodes) if starting_nodes is not None else seed_nodes()

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #

    @property
    def frontier(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def is_exhausted(self) -> bool:
        return not self._nodes

    @property
    def level(self) -> Optional[int]:
        """Deepest level currently on the frontier, None once growth has stopped."""
        if not self._nodes:
            return None
        return max(n.level for n in self._nodes)

    def in_bounds(self, node: Node) -> bool:
        return geometry.in_bounds(node, self.h_segments / 2, self.v_segments / 2)

    def is_available(self, pos: Point) -> bool:
        """True when no node of the current frontier sits on pos."""
        return all(n.position != pos for n in self._nodes)

    def level_progress(self, node: Node) -> float:
        return geometry.level_progress(node, self.h_segments, self.v_segments)

    # ------------------------------------------------------------------ #
    # Growth                                                             #
    # ------------------------------------------------------------------ #

    def advance(self, trace: Optional[GrowthTrace] = None) -> List[Segment]:
        """Grow every frontier node by one level and return the emitted segments."""
        if trace is not None:
            trace.reset()

        segments: List[Segment] = []
        next_nodes: List[Node] = []
        claimed: Set[Point] = set()

        for node in self._nodes:
            record = self._new_record(node) if trace is not None else None
            for move in self._generate_moves(node, claimed, record):
                next_pos = node.position.add(geometry.offset_for(move, node.orientation))
                segments.append(
                    Segment(
                        move=move,
                        orientation=node.orientation,
                        start=node.position,
                        end=next_pos,
                        level=node.level,
                    )
                )
                if move is Move.TERMINATE:
                    continue

                successor = Node(position=next_pos, orientation=node.orientation, level=node.level + 1)
                inside = self.in_bounds(successor)
                available = self.is_available(next_pos) and next_pos not in claimed
                if record is not None:
                    record.successors.append(
                        SuccessorTrace(
                            position=next_pos.as_tuple(),
                            in_bounds=inside,
                            available=available,
                            bounds=self._describe_bounds(next_pos),
                        )
                    )
                if inside and available:
                    next_nodes.append(successor)
                    claimed.add(next_pos)
            if trace is not None and record is not None:
                trace.add(record)

        self._nodes = next_nodes
        return segments

    # callers that think in terms of "the next level"
    next = advance

    def _generate_moves(
        self,
        node: Node,
        claimed: Set[Point],
        record: Optional[NodeTrace],
    ) -> List[Move]:
        cfg = self.config
        split_strategy = draw(cfg.resolved_split_table(), self.rng)
        try:
            actions_amount = SPLIT_COUNTS[split_strategy]
        except KeyError:
            raise SplitStrategyError(f'Invalid splitting strategy "{split_strategy}"') from None

        has_density = self._row_has_density(node)
        end_chance = 0.0
        if has_density:
            end_chance = min(1.0, self.level_progress(node) * cfg.end_chance_scale)

        if record is not None:
            record.split_strategy = str(split_strategy)
            record.actions_amount = actions_amount
            record.row_has_density = has_density
            record.end_chance = end_chance

        if draw({"end": end_chance, "no-end": 1.0 - end_chance}, self.rng) == "end":
            return self._finish(record, [Move.TERMINATE])

        moves: List[Move] = []
        table: Dict[Move, float] = dict(cfg.move_weights)
        # every draw removes a move from the table, so this runs at most len(move_weights) times
        while table and len(moves) < actions_amount:
            move = draw(table, self.rng)
            table = table_without(move, table)
            candidate = node.position.add(geometry.offset_for(move, node.orientation))
            if candidate in claimed:
                if record is not None:
                    record.rejected.append(MOVE_LABELS[move])
                continue
            moves.append(move)

        if not moves:
            moves = [Move.TERMINATE]
        return self._finish(record, moves)

    def _row_has_density(self, node: Node) -> bool:
        """Enough neighbours share this node's row to close it off without leaving gaps."""
        axis = geometry.axis_coordinate(node)
        if axis == 0:
            return False
        if node.orientation.is_vertical:
            sharing = sum(1 for n in self._nodes if n.position.y == axis)
        else:
            sharing = sum(1 for n in self._nodes if n.position.x == axis)
        return sharing >= self.config.min_row_nodes

    # ------------------------------------------------------------------ #
    # Tracing helpers                                                    #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _new_record(node: Node) -> NodeTrace:
        return NodeTrace(
            position=node.position.as_tuple(),
            level=node.level,
            orientation=ORIENTATION_LABELS[node.orientation],
        )

    @staticmethod
    def _finish(record: Optional[NodeTrace], moves: Sequence[Move]) -> List[Move]:
        if record is not None:
            record.actions = [MOVE_LABELS[m] for m in moves]
        return list(moves)

    def _describe_bounds(self, pos: Point) -> Dict[str, str]:
        hw = self.h_segments / 2
        hh = self.v_segments / 2
        return {
            "l": f"{-hw:.2f} - {-hw <= pos.x}",
            "r": f"{hw:.2f} - {pos.x <= hw}",
            "b": f"{-hh:.2f} - {-hh <= pos.y}",
            "t": f"{hh:.2f} - {pos.y <= hh}",
        }
