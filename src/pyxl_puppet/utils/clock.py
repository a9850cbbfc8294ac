"""Frame timing for the viewer loop."""
from __future__ import annotations

from dataclasses import dataclass

import pygame


@dataclass
class FrameClock:
    target_fps: int

    def __post_init__(self) -> None:
        self._clock = pygame.time.Clock()
        self._skip_next = True

    def reset(self) -> None:
        """Make the next tick report zero elapsed time."""
        self._skip_next = True

    def tick(self) -> float:
        """Wait for the next frame and return the seconds since the previous one."""
        dt = self._clock.tick(self.target_fps) / 1000.0
        if self._skip_next:
            self._skip_next = False
            return 0.0
        return dt

    @property
    def fps(self) -> float:
        return self._clock.get_fps()
