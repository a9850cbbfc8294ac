"""Angular pose of the puppet.

Every angle is in radians and relative to the accumulated world angle of the
joint's parent. ``ground_tilt`` is the world angle of the root and ``offset``
moves the root away from the canvas center.
"""
from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field

from pymunk import Vec2d


@dataclass
class LimbAngles:
    shoulder: float = 0.0
    elbow: float = 0.0
    hand: float = 0.0
    hip: float = 0.0
    knee: float = 0.0
    foot: float = 0.0


@dataclass
class Pose:
    ground_tilt: float = 0.0
    offset: Vec2d = Vec2d(0.0, 0.0)
    torso: float = 0.0
    waist: float = 0.0
    head: float = 0.0
    left: LimbAngles = field(default_factory=LimbAngles)
    right: LimbAngles = field(default_factory=LimbAngles)

    def copy(self) -> "Pose":
        return copy.deepcopy(self)


def default_pose() -> Pose:
    """The T-pose: torso up, waist down, arms level, feet turned outward."""
    return Pose(
        ground_tilt=0.0,
        offset=Vec2d(0.0, 0.0),
        torso=-math.pi / 2,
        waist=math.pi / 2,
        head=0.0,
        left=LimbAngles(
            shoulder=-math.pi / 2,
            elbow=0.0,
            hand=0.0,
            hip=0.15,
            knee=0.0,
            foot=math.pi / 2 - 0.15,
        ),
        right=LimbAngles(
            shoulder=math.pi / 2,
            elbow=0.0,
            hand=0.0,
            hip=-0.15,
            knee=0.0,
            foot=-math.pi / 2 + 0.15,
        ),
    )
