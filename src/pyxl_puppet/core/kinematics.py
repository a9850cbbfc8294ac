"""Forward kinematics: turn a Pose into world-space joints and bones."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from pymunk import Vec2d

from pyxl_puppet.core.config import DEFAULT_CANVAS, CanvasConfig
from pyxl_puppet.core.hierarchy import (
    CHILDREN,
    GROUND_KEY,
    POSE_FIELDS,
    BoneShape,
    Joint,
)
from pyxl_puppet.core.pose import Pose

GROUND_WIDTH = 2.0


@dataclass(frozen=True)
class BoneSegment:
    key: str
    start: Vec2d
    end: Vec2d
    width: float
    angle: float
    shape: BoneShape

    @property
    def length(self) -> float:
        return self.start.get_distance(self.end)


@dataclass
class Skeleton:
    joints: Dict[str, Vec2d] = field(default_factory=dict)
    bones: List[BoneSegment] = field(default_factory=list)


def get_local_angle(pose: Pose, joint: Joint) -> float:
    """Return the angle stored for ``joint``; joints without a field are rigid (0)."""
    address = POSE_FIELDS[joint]
    if address is None:
        return 0.0
    side, name = address
    owner = pose if side is None else getattr(pose, side)
    return getattr(owner, name)


def set_local_angle(pose: Pose, joint: Joint, angle: float) -> bool:
    """Store ``angle`` for ``joint``. Returns False when the joint has no field."""
    address = POSE_FIELDS[joint]
    if address is None:
        return False
    side, name = address
    owner = pose if side is None else getattr(pose, side)
    setattr(owner, name, angle)
    return True


def compute_skeleton(pose: Pose, canvas: CanvasConfig = DEFAULT_CANVAS) -> Skeleton:
    skeleton = Skeleton()

    # The ground guide is placed independently of the body.
    ground = Vec2d(canvas.width / 2, canvas.ground_y)
    skeleton.joints[GROUND_KEY] = ground
    skeleton.bones.append(
        BoneSegment(
            key=GROUND_KEY,
            start=ground,
            end=ground,
            width=GROUND_WIDTH,
            angle=pose.ground_tilt,
            shape=BoneShape.LINE,
        )
    )

    root = canvas.center + pose.offset
    skeleton.joints[Joint.ROOT] = root
    _walk(pose, Joint.ROOT, root, pose.ground_tilt, skeleton)
    return skeleton


def _walk(pose: Pose, parent: Joint, parent_pos: Vec2d, parent_angle: float, skeleton: Skeleton) -> None:
    for bone in CHILDREN[parent]:
        angle = parent_angle + get_local_angle(pose, bone.child)
        pos = parent_pos + Vec2d(math.cos(angle), math.sin(angle)) * bone.length
        skeleton.joints[bone.child] = pos
        skeleton.bones.append(
            BoneSegment(
                key=bone.child.value,
                start=parent_pos,
                end=pos,
                width=bone.width,
                angle=angle,
                shape=bone.shape,
            )
        )
        _walk(pose, bone.child, pos, angle, skeleton)


def find_bone(skeleton: Skeleton, key: Union[str, Joint]) -> Optional[BoneSegment]:
    for bone in skeleton.bones:
        if bone.key == key:
            return bone
    return None


def _distance_to_segment(point: Vec2d, start: Vec2d, end: Vec2d) -> float:
    segment = end - start
    length_sq = segment.dot(segment)
    if length_sq == 0:
        return point.get_distance(start)
    t = max(0.0, min(1.0, (point - start).dot(segment) / length_sq))
    return point.get_distance(start + segment * t)


def hit_test(skeleton: Skeleton, point: Vec2d) -> Optional[BoneSegment]:
    """Return the bone closest to ``point`` if the point lies within its width.

    The ground guide is never hit.
    """
    best = None
    best_distance = math.inf
    for bone in skeleton.bones:
        if bone.key == GROUND_KEY:
            continue
        distance = _distance_to_segment(point, bone.start, bone.end)
        if distance <= bone.width / 2 and distance < best_distance:
            best = bone
            best_distance = distance
    return best
