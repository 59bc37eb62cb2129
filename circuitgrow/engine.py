"""
Viewer entry point: owns the pygame event/update/draw loop.

The engine never reaches into the generator; it drives a WaveScheduler one
frame at a time and hands the result to the renderer.
"""
from __future__ import annotations

import json
from typing import Optional

import pygame

from circuitgrow.animation import WaveScheduler
from circuitgrow.config import GrowthConfig, ViewerConfig
from circuitgrow.render.canvas import CircuitRenderer
from circuitgrow.rng import RNG

SPEED_STEP = 1.25


class Engine:
    def __init__(
        self,
        viewer: ViewerConfig,
        growth: Optional[GrowthConfig] = None,
        rng: Optional[RNG] = None,
    ) -> None:
        pygame.init()
        self.cfg = viewer
        self.display = pygame.display.set_mode((viewer.width, viewer.height), pygame.RESIZABLE)
        pygame.display.set_caption("circuitgrow")
        self.scheduler = WaveScheduler(viewer, growth, rng=rng)
        self.renderer = CircuitRenderer(viewer)
        self.clock = pygame.time.Clock()
        self.running = True
        self.stepping = False
        self.quit_requested = False

    def run(self) -> None:
        try:
            while not self.quit_requested:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.tick()
                self.renderer.draw(self.display, self.scheduler)
                pygame.display.flip()
                self.clock.tick(self.cfg.fps)
        finally:
            pygame.quit()

    def tick(self) -> None:
        if not (self.running or self.stepping):
            return
        if self.scheduler.update():
            self._log_level()
            if self.stepping:
                self.stepping = False
            if self.scheduler.is_finished and self.running:
                self.scheduler.reset()

    # ------------------------------------------------------------------ #
    # Input                                                              #
    # ------------------------------------------------------------------ #

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.VIDEORESIZE:
            self.display = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
            self.scheduler.resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.quit_requested = True
        elif key == pygame.K_SPACE:
            self.toggle_running()
        elif key == pygame.K_n:
            self.step()
        elif key == pygame.K_r:
            self.scheduler.reset()
        elif key == pygame.K_d:
            self.cfg.debug = not self.cfg.debug
            self.scheduler.set_debug(self.cfg.debug)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.scheduler.set_speed(self.cfg.speed * SPEED_STEP)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.scheduler.set_speed(self.cfg.speed / SPEED_STEP)

    def toggle_running(self) -> None:
        if not self.running and self.scheduler.is_finished:
            self.scheduler.reset()
        self.running = not self.running
        self.stepping = False

    def step(self) -> None:
        """Pause and play exactly one more level."""
        self.running = False
        if self.scheduler.is_finished:
            self.scheduler.reset()
        self.stepping = True

    # --- debug logging ---
    def _log_level(self) -> None:
        if not (self.cfg.debug and self.cfg.debug_log_path):
            return
        for index, wave in enumerate(self.scheduler.waves):
            if wave.trace is None:
                continue
            self._debug(json.dumps({"wave": index, "level": wave.current_level, "nodes": wave.trace.to_dicts()}))

    def _debug(self, msg: str) -> None:
        if not self.cfg.debug_log_path:
            return
        try:
            with open(self.cfg.debug_log_path, "a", encoding="utf-8") as f:
                f.write(msg + "\n")
        except OSError:
            pass
