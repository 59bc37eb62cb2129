import pygame
import pytest

from circuitgrow.animation import WaveScheduler
from circuitgrow.config import GrowthConfig, ViewerConfig
from circuitgrow.render.canvas import CircuitRenderer, lerp
from circuitgrow.rng import new_rng
from circuitgrow.state.circuit import ORIGIN, Move, Orientation, Point, Segment

FG = (0, 200, 0)
BG = (0, 0, 0)


@pytest.fixture
def surface():
    return pygame.Surface((200, 200))


@pytest.fixture
def viewer():
    return ViewerConfig(width=200, height=200, cell_size=40, circuit_color=FG, bg_color=BG, wave_length=None)


def lit(surface, x, y) -> bool:
    return tuple(surface.get_at((int(x), int(y))))[:3] == FG


class TestLerp:
    def test_endpoints(self) -> None:
        assert lerp(0, 10, 0) == 0
        assert lerp(0, 10, 0.5) == 5
        assert lerp(0, 10, 1) == 10


class TestLines:
    def test_partial_line_stops_at_progress(self, surface, viewer) -> None:
        r = CircuitRenderer(viewer)
        head = r.draw_line(surface, Point(20, 100), Point(180, 100), 0.5)
        assert head == (100, 100)
        assert lit(surface, 60, 100)
        assert not lit(surface, 150, 100)

    def test_disappearing_line_keeps_the_far_end(self, surface, viewer) -> None:
        r = CircuitRenderer(viewer)
        r.draw_line(surface, Point(20, 100), Point(180, 100), 0.25, disappearing=True)
        assert lit(surface, 170, 100)
        assert not lit(surface, 40, 100)

    def test_cursor_only_while_drawing(self, surface, viewer) -> None:
        viewer.draw_cursor = True
        r = CircuitRenderer(viewer)
        r.draw_line(surface, Point(20, 50), Point(180, 50), 0.5)
        assert lit(surface, 100, 51)
        surface.fill(BG)
        r.draw_line(surface, Point(20, 150), Point(180, 150), 1.0)
        assert not lit(surface, 180, 151)


class TestEnds:
    def test_end_marker_draws_stub_and_ring(self, surface, viewer) -> None:
        r = CircuitRenderer(viewer)
        seg = Segment(Move.TERMINATE, Orientation.RIGHT, ORIGIN, ORIGIN, 3)
        r.draw_end(surface, Point(100, 100), seg, 40, 1.0)
        # stub runs right from the start point, ring sits beyond it
        assert lit(surface, 103, 100)
        # ring of radius 4 centred 13px to the right; check around its top
        assert any(lit(surface, 113 + dx, 96 + dy) for dx in range(-2, 3) for dy in range(-1, 2))

    def test_nothing_before_progress(self, surface, viewer) -> None:
        r = CircuitRenderer(viewer)
        seg = Segment(Move.TERMINATE, Orientation.UP, ORIGIN, ORIGIN, 3)
        r.draw_end(surface, Point(100, 100), seg, 40, 0.0)
        assert not any(lit(surface, 100 + dx, 100 - dy) for dx in range(-6, 7) for dy in range(2, 20))


class TestFrame:
    def test_draws_scheduler_segments(self, surface, viewer) -> None:
        scheduler = WaveScheduler(viewer, GrowthConfig(), rng=new_rng(4))
        r = CircuitRenderer(viewer)
        scheduler.progress = 1.0
        r.draw(surface, scheduler)
        # every seed starts at the centre of the canvas
        assert lit(surface, 100, 100)

    def test_debug_overlay(self, surface, viewer) -> None:
        viewer.debug = True
        scheduler = WaveScheduler(viewer, GrowthConfig(), rng=new_rng(4))
        r = CircuitRenderer(viewer)
        r.draw(surface, scheduler)
        assert tuple(surface.get_at((100, 100)))[:3] == viewer.debug_color
