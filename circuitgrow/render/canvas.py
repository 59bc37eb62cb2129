"""Pygame drawing of animated circuit segments."""
import math
from typing import Optional, Tuple

import pygame

from circuitgrow.animation import WaveScheduler
from circuitgrow.config import ViewerConfig
from circuitgrow.patterns.geometry import offset_for
from circuitgrow.state.circuit import Move, Point, Segment

Color = Tuple[int, int, int]


def lerp(s: float, e: float, progress: float) -> float:
    if progress >= 1:
        return e
    return s + (e - s) * progress


class CircuitRenderer:
    def __init__(self, cfg: ViewerConfig) -> None:
        self.cfg = cfg
        self.fg: Color = cfg.circuit_color
        self.bg: Color = cfg.bg_color
        self.debug_fg: Color = cfg.debug_color
        self.cursor_radius = 2
        self._font: Optional[pygame.font.Font] = None

    # ------------------------------------------------------------------ #
    # Frame                                                              #
    # ------------------------------------------------------------------ #

    def draw(self, surface: pygame.Surface, scheduler: WaveScheduler) -> None:
        surface.fill(self.bg)
        for wave in scheduler.waves:
            for seg, progress, disappearing in scheduler.visible_segments(wave):
                self.draw_segment(surface, scheduler, seg, progress, disappearing)
        if self.cfg.debug:
            self.draw_debug(surface, scheduler)

    def draw_segment(
        self,
        surface: pygame.Surface,
        scheduler: WaveScheduler,
        seg: Segment,
        progress: float,
        disappearing: bool = False,
    ) -> None:
        start = scheduler.to_canvas(seg.start)
        if seg.is_end:
            self.draw_end(surface, start, seg, scheduler.viewer.cell_size, progress, disappearing)
        else:
            self.draw_line(surface, start, scheduler.to_canvas(seg.end), progress, disappearing)

    def draw_line(
        self,
        surface: pygame.Surface,
        start: Point,
        end: Point,
        progress: float,
        disappearing: bool = False,
    ) -> Tuple[float, float]:
        """Draw start->end up to progress (or retract it); returns the pen position."""
        if disappearing:
            anchor = end
            head = (lerp(end.x, start.x, 1 - progress), lerp(end.y, start.y, 1 - progress))
        else:
            anchor = start
            head = (lerp(start.x, end.x, progress), lerp(start.y, end.y, progress))
        pygame.draw.line(surface, self.fg, anchor.as_tuple(), head, self.cfg.stroke_width)
        if self.cfg.draw_cursor and progress < 1:
            self.draw_cursor(surface, head)
        return head

    def draw_end(
        self,
        surface: pygame.Surface,
        start: Point,
        seg: Segment,
        cell_size: float,
        progress: float,
        disappearing: bool = False,
    ) -> None:
        """A short stub along the heading capped with a ring drawn as the level plays."""
        r = cell_size / 10
        stub = (cell_size - r) / 4
        direction = offset_for(Move.STEP_UP, seg.orientation)
        center = start.add(direction.scale(stub + r))
        self.draw_line(surface, start, start.add(direction.scale(stub)), min(1.0, progress * 2), disappearing)

        sweep = 2 * math.pi * ((1 - progress) if disappearing else progress)
        rect = pygame.Rect(0, 0, max(1, int(r * 2)), max(1, int(r * 2)))
        rect.center = (int(center.x), int(center.y))
        if sweep >= 2 * math.pi:
            pygame.draw.circle(surface, self.fg, rect.center, max(1, int(r)), self.cfg.stroke_width)
        elif sweep > 0:
            pygame.draw.arc(surface, self.fg, rect, 0, sweep, self.cfg.stroke_width)

        if self.cfg.draw_cursor and progress < 1:
            # pygame angles run counter-clockwise on a y-down screen
            tip = (center.x + r * math.cos(sweep), center.y - r * math.sin(sweep))
            self.draw_cursor(surface, tip)

    def draw_cursor(self, surface: pygame.Surface, pos: Tuple[float, float]) -> None:
        pygame.draw.circle(surface, self.fg, (int(pos[0]), int(pos[1])), self.cursor_radius)

    # ------------------------------------------------------------------ #
    # Debug overlay                                                      #
    # ------------------------------------------------------------------ #

    def _debug_font(self) -> pygame.font.Font:
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.SysFont("consolas", 12)
        return self._font

    def draw_debug(self, surface: pygame.Surface, scheduler: WaveScheduler) -> None:
        """Mark each traced node with a dot and its chosen actions."""
        font = self._debug_font()
        for wave in scheduler.waves:
            if wave.trace is None:
                continue
            for record in wave.trace:
                p = scheduler.to_canvas(Point(*record.position))
                pos = (int(p.x), int(p.y))
                pygame.draw.circle(surface, self.debug_fg, pos, 3)
                label = f"{record.orientation[0]}{record.level}:{','.join(record.actions)}"
                if record.rejected:
                    label += f" x{','.join(record.rejected)}"
                text = font.render(label, True, self.debug_fg)
                surface.blit(text, (pos[0] + 4, pos[1] + 4))
