import dataclasses
import json

import pytest

from circuitgrow.patterns.geometry import (
    axis_coordinate,
    in_bounds,
    lateral,
    level_progress,
    offset_for,
)
from circuitgrow.state.circuit import (
    GROWTH_MOVES,
    MOVE_LABELS,
    ORIGIN,
    Move,
    Node,
    Orientation,
    Point,
    Segment,
    move_from_label,
)


class TestPoint:
    def test_add_and_scale_return_new_points(self) -> None:
        p = Point(1, 2)
        q = p.add(Point(3, -1))
        assert q == Point(4, 1)
        assert p == Point(1, 2)
        assert p.scale(2.5) == Point(2.5, 5.0)

    def test_points_are_frozen_and_hashable(self) -> None:
        p = Point(0, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 3  # type: ignore[misc]
        assert {Point(1, 1), Point(1, 1), Point(1, 2)} == {Point(1, 1), Point(1, 2)}

    def test_as_tuple(self) -> None:
        assert Point(1.5, -2).as_tuple() == (1.5, -2)


class TestOffsets:
    def test_offsets_are_unit_bounded(self) -> None:
        for orientation in Orientation:
            for move in Move:
                off = offset_for(move, orientation)
                assert off.x in (-1, 0, 1)
                assert off.y in (-1, 0, 1)
                is_zero = off == ORIGIN
                assert is_zero == (move is Move.TERMINATE)

    def test_step_up_visits_each_cardinal_direction_once(self) -> None:
        offsets = [offset_for(Move.STEP_UP, o) for o in Orientation]
        assert len(set(offsets)) == 4
        assert set(offsets) == {Point(0, -1), Point(1, 0), Point(0, 1), Point(-1, 0)}

    def test_diagonals_by_heading(self) -> None:
        assert offset_for(Move.STEP_UP_RIGHT, Orientation.UP) == Point(-1, -1)
        assert offset_for(Move.STEP_UP_LEFT, Orientation.UP) == Point(1, -1)
        assert offset_for(Move.STEP_UP_RIGHT, Orientation.RIGHT) == Point(1, -1)
        assert offset_for(Move.STEP_UP_RIGHT, Orientation.DOWN) == Point(1, 1)
        assert offset_for(Move.STEP_UP_RIGHT, Orientation.LEFT) == Point(-1, 1)

    def test_diagonals_mirror_around_forward(self) -> None:
        for o in Orientation:
            left = offset_for(Move.STEP_UP_LEFT, o)
            right = offset_for(Move.STEP_UP_RIGHT, o)
            assert left.add(right) == offset_for(Move.STEP_UP, o).scale(2)
            assert left != right

    def test_lateral_rotates_with_heading(self) -> None:
        # a quarter turn of the heading is a quarter turn of its side vector
        order = [Orientation.UP, Orientation.RIGHT, Orientation.DOWN, Orientation.LEFT]
        for a, b in zip(order, order[1:] + order[:1]):
            la, lb = lateral(a), lateral(b)
            assert Point(-la.y, la.x) == lb


class TestBounds:
    def test_origin_is_in_bounds(self) -> None:
        assert in_bounds(Node(ORIGIN, Orientation.UP), 1, 1)

    def test_boundary_is_inclusive(self) -> None:
        assert in_bounds(Node(Point(1.5, -2), Orientation.UP), 1.5, 2)
        assert in_bounds(Node(Point(-1.5, 2), Orientation.UP), 1.5, 2)

    def test_outside_either_axis(self) -> None:
        assert not in_bounds(Node(Point(2, 0), Orientation.RIGHT), 1.5, 10)
        assert not in_bounds(Node(Point(0, -3), Orientation.UP), 10, 2.5)

    def test_axis_and_progress(self) -> None:
        up = Node(Point(3, -4), Orientation.UP)
        left = Node(Point(-3, 1), Orientation.LEFT)
        assert axis_coordinate(up) == -4
        assert axis_coordinate(left) == -3
        assert level_progress(up, 11, 8) == pytest.approx(0.5)
        assert level_progress(left, 12, 8) == pytest.approx(0.25)
        assert level_progress(up, 11, 0) == 0.0


class TestLabels:
    def test_move_from_label_accepts_values_and_labels(self) -> None:
        assert move_from_label("up-left") is Move.STEP_UP_LEFT
        assert move_from_label("UpRight") is Move.STEP_UP_RIGHT
        assert move_from_label("end") is Move.TERMINATE
        with pytest.raises(KeyError):
            move_from_label("sideways")

    def test_growth_moves_exclude_terminate(self) -> None:
        assert Move.TERMINATE not in GROWTH_MOVES
        assert set(MOVE_LABELS) == set(Move)

    def test_segment_to_dict_is_json_friendly(self) -> None:
        seg = Segment(Move.STEP_UP, Orientation.DOWN, ORIGIN, Point(0, 1), 0)
        data = seg.to_dict()
        assert json.loads(json.dumps(data)) == {
            "move": "Up",
            "orientation": "Down",
            "start": [0, 0],
            "end": [0, 1],
            "level": 0,
        }
        assert not seg.is_end
        assert Segment(Move.TERMINATE, Orientation.UP, ORIGIN, ORIGIN, 2).is_end
