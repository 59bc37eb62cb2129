"""
Frame scheduling for animated growth.

A Wave is one generator and the segments it has produced so far. The
scheduler steps every wave one level each time the frame counter wraps,
and starts a fresh wave from the centre once the newest one has travelled
far enough, so the screen shows pulses of circuitry rolling outward.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from circuitgrow.config import GrowthConfig, ViewerConfig
from circuitgrow.patterns.generator import CircuitPatternGenerator
from circuitgrow.patterns.trace import GrowthTrace
from circuitgrow.rng import RNG, new_rng
from circuitgrow.state.circuit import Point, Segment

BASE_FRAMES_PER_LEVEL = 64


@dataclass
class Wave:
    generator: CircuitPatternGenerator
    segments: List[Segment] = field(default_factory=list)
    completed: List[Segment] = field(default_factory=list)
    trace: Optional[GrowthTrace] = None

    @property
    def current_level(self) -> Optional[int]:
        return self.segments[0].level if self.segments else None

    def advance(self) -> None:
        self.completed.extend(self.segments)
        self.segments = self.generator.advance(self.trace)


class WaveScheduler:
    def __init__(
        self,
        viewer: ViewerConfig,
        growth: Optional[GrowthConfig] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        rng: Optional[RNG] = None,
    ) -> None:
        self.viewer = viewer
        self.growth = growth or GrowthConfig()
        self.rng = rng if rng is not None else new_rng(self.growth.seed)
        self.width = width if width is not None else viewer.width
        self.height = height if height is not None else viewer.height
        self.center = Point(self.width / 2, self.height / 2)
        self.current_frame = 0
        self.progress = 0.0
        self.frames_per_level = 0.0
        self.set_speed(viewer.speed)
        self.waves: List[Wave] = []
        self.add_wave()

    # ------------------------------------------------------------------ #
    # Waves                                                              #
    # ------------------------------------------------------------------ #

    def add_wave(self) -> Wave:
        cell = self.viewer.cell_size
        generator = CircuitPatternGenerator(
            self.width / cell,
            self.height / cell,
            config=self.growth,
            rng=self.rng.spawn(),
        )
        wave = Wave(generator=generator, trace=GrowthTrace() if self.viewer.debug else None)
        wave.segments = generator.advance(wave.trace)
        self.waves.append(wave)
        return wave

    def reset(self) -> None:
        self.current_frame = 0
        self.progress = 0.0
        self.waves = []
        self.add_wave()

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.center = Point(width / 2, height / 2)
        self.reset()

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ValueError("speed must be > 0")
        self.viewer.speed = speed
        self.frames_per_level = BASE_FRAMES_PER_LEVEL / speed

    def set_cell_size(self, size: float) -> None:
        self.viewer.cell_size = size
        self.reset()

    def set_debug(self, enabled: bool) -> None:
        """Turn tracing on or off for every wave from its next level onward."""
        self.viewer.debug = enabled
        for wave in self.waves:
            wave.trace = GrowthTrace() if enabled else None

    @property
    def is_finished(self) -> bool:
        return all(not wave.segments for wave in self.waves)

    # ------------------------------------------------------------------ #
    # Frames                                                             #
    # ------------------------------------------------------------------ #

    def update(self) -> bool:
        """Advance one frame; returns True when a new level was generated."""
        self.current_frame += 1
        rolled = False
        if self.current_frame > self.frames_per_level:
            self.current_frame = 0
            for wave in self.waves:
                wave.advance()
            self._maybe_start_wave()
            self._prune()
            rolled = True
        self.progress = self.current_frame / self.frames_per_level
        return rolled

    def _maybe_start_wave(self) -> None:
        length = self.viewer.wave_length
        if not length or not self.waves:
            return
        level = self.waves[-1].current_level
        if level is not None and level > length + self.viewer.wave_gap:
            self.add_wave()

    def _prune(self) -> None:
        length = self.viewer.wave_length
        if not length:
            return
        # finished waves have retracted completely once they stop producing levels
        self.waves = [w for w in self.waves if w.segments] or self.waves[-1:]
        for wave in self.waves:
            level = wave.current_level
            if level is None:
                continue
            last_level = level - length
            wave.completed = [s for s in wave.completed if s.level >= last_level]

    def visible_segments(self, wave: Wave) -> Iterator[Tuple[Segment, float, bool]]:
        """
        Yield (segment, progress, disappearing) for everything that should be drawn.

        With a wave length the tail of the wave retracts: the oldest visible
        level shrinks while the newest grows.
        """
        level = wave.current_level
        length = self.viewer.wave_length
        if level is None:
            if not length:
                for seg in wave.completed:
                    yield seg, 1.0, False
            return
        last_level = level - length if length else -1
        for seg in wave.completed:
            if last_level > seg.level:
                continue
            disappearing = last_level == seg.level
            yield seg, (self.progress if disappearing else 1.0), disappearing
        for seg in wave.segments:
            yield seg, self.progress, False

    def to_canvas(self, p: Point) -> Point:
        return p.scale(self.viewer.cell_size).add(self.center)
