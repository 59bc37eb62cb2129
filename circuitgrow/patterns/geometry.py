"""Grid geometry for growing nodes: move offsets, bounds and progress."""
from typing import Dict

from circuitgrow.state.circuit import ORIGIN, Move, Node, Orientation, Point

# unit step straight ahead for each heading (screen coordinates, y grows downward)
FORWARD: Dict[Orientation, Point] = {
    Orientation.UP: Point(0, -1),
    Orientation.RIGHT: Point(1, 0),
    Orientation.DOWN: Point(0, 1),
    Orientation.LEFT: Point(-1, 0),
}


def lateral(orientation: Orientation) -> Point:
    """The 'right hand' side of a heading; rotates with it."""
    f = FORWARD[orientation]
    return Point(f.y, -f.x)


def offset_for(move: Move, orientation: Orientation) -> Point:
    """Absolute grid offset of a relative move for a node facing `orientation`."""
    if move is Move.TERMINATE:
        return ORIGIN
    forward = FORWARD[orientation]
    if move is Move.STEP_UP:
        return forward
    side = lateral(orientation)
    if move is Move.STEP_UP_RIGHT:
        return forward.add(side)
    return forward.add(side.scale(-1))


def in_bounds(node: Node, half_width: float, half_height: float) -> bool:
    x, y = node.position.x, node.position.y
    return -half_width <= x <= half_width and -half_height <= y <= half_height


def axis_coordinate(node: Node) -> float:
    """Coordinate along the node's growth axis (y for vertical growers, x otherwise)."""
    return node.position.y if node.orientation.is_vertical else node.position.x


def level_progress(node: Node, h_segments: float, v_segments: float) -> float:
    """How far a node has travelled from the origin relative to the grid extent on its axis."""
    total = v_segments if node.orientation.is_vertical else h_segments
    if total <= 0:
        return 0.0
    return abs(axis_coordinate(node)) / total
