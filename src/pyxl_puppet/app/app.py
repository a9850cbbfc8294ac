"""Top-level viewer orchestration."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

import pygame

from pyxl_puppet.core.config import AppConfig
from pyxl_puppet.core.kinematics import compute_skeleton, hit_test
from pyxl_puppet.core.pose import Pose, default_pose
from pyxl_puppet.physics.session import PhysicsSession
from pyxl_puppet.rendering.renderer import Renderer
from pyxl_puppet.utils.clock import FrameClock

logger = logging.getLogger(__name__)

TILT_STEP = math.radians(5)


@dataclass
class PuppetApp:
    config: AppConfig

    def __post_init__(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.window.title)
        self.screen = pygame.display.set_mode(self.config.window.size, pygame.RESIZABLE)

        self.clock = FrameClock(target_fps=self.config.window.target_fps)
        self.session = PhysicsSession(
            target_pose=default_pose(),
            canvas=self.config.canvas,
            physics=self.config.physics,
        )
        self.renderer = Renderer(config=self.config, screen=self.screen)
        self.selected: Optional[str] = None

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            pose = self.session.tick(dt)
            skeleton = compute_skeleton(pose, self.config.canvas)
            self.renderer.draw(skeleton, physics_enabled=self.session.enabled, selected=self.selected)

            pygame.display.flip()

        pygame.quit()

    def handle_key(self, key: int) -> bool:
        """Apply a key binding. Returns False when the app should quit."""
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_p:
            self.clock.reset()
            self.session.toggle()
        elif key == pygame.K_r:
            self.set_pose(default_pose())
            self.session.restart()
        elif key == pygame.K_LEFT:
            self._tilt(-TILT_STEP)
        elif key == pygame.K_RIGHT:
            self._tilt(TILT_STEP)
        return True

    def handle_click(self, screen_pos) -> None:
        point = self.renderer.to_canvas(screen_pos)
        bone = hit_test(compute_skeleton(self.session.pose, self.config.canvas), point)
        self.selected = bone.key if bone is not None else None
        logger.debug("Selected bone: %s", self.selected)

    def set_pose(self, pose: Pose) -> None:
        self.session.set_target_pose(pose)

    def _tilt(self, amount: float) -> None:
        pose = self.session.target_pose
        self.set_pose(replace(pose, ground_tilt=pose.ground_tilt + amount))
