"""Frame-loop driver that owns the active ragdoll simulation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from pyxl_puppet.core.config import DEFAULT_CANVAS, DEFAULT_PHYSICS, CanvasConfig, PhysicsConfig
from pyxl_puppet.core.pose import Pose
from pyxl_puppet.physics.body import PhysicsBody, create_physics_body_from_pose
from pyxl_puppet.physics.extract import extract_pose_from_physics_body
from pyxl_puppet.physics.solver import update_physics_body

logger = logging.getLogger(__name__)


@dataclass
class PhysicsSession:
    """Holds the displayed pose and, while physics is on, the body behind it.

    The body is rebuilt from the most recent externally-set pose every time
    physics is switched on or restarted; it never outlives a toggle-off.
    """

    target_pose: Pose
    canvas: CanvasConfig = DEFAULT_CANVAS
    physics: PhysicsConfig = DEFAULT_PHYSICS
    enabled: bool = False
    body: Optional[PhysicsBody] = field(default=None, init=False)
    pose: Pose = field(init=False)
    elapsed: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.pose = self.target_pose
        if self.enabled:
            self._build_body()

    def set_target_pose(self, pose: Pose) -> None:
        self.target_pose = pose
        if not self.enabled:
            self.pose = pose

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self.enabled:
            return
        self.enabled = enabled
        if enabled:
            self._build_body()
            logger.info("Physics enabled")
        else:
            self.body = None
            self.pose = self.target_pose
            logger.info("Physics disabled after %.2fs of simulation", self.elapsed)

    def toggle(self) -> bool:
        self.set_enabled(not self.enabled)
        return self.enabled

    def restart(self) -> None:
        if not self.enabled:
            return
        self._build_body()
        logger.info("Physics restarted from the current target pose")

    def tick(self, dt: float) -> Pose:
        """Step the simulation once and return the pose to display."""
        if self.body is None or dt <= 0:
            return self.pose

        dt = min(dt, self.physics.max_dt)
        update_physics_body(self.body, dt, self.canvas, self.physics)
        self.pose = extract_pose_from_physics_body(self.body, self.pose, self.canvas)
        self.elapsed += dt
        return self.pose

    def _build_body(self) -> None:
        self.body = create_physics_body_from_pose(self.target_pose, self.canvas, self.physics)
        self.pose = self.target_pose
        self.elapsed = 0.0
