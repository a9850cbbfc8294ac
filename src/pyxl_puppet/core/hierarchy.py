"""Static joint hierarchy of the puppet.

Joints are addressed through the ``Joint`` enum; its values are the dotted keys
used by skeletons and physics particles (``"left.hip"``). The tree itself is a
flat, ordered list of bone edges. Each edge carries the length and width of the
bone that ends at its child joint.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Joint(str, Enum):
    ROOT = "root"
    WAIST = "waist"
    TORSO = "torso"
    NECK = "neck"
    HEAD = "head"
    LEFT_SHOULDER = "left.shoulder"
    LEFT_ELBOW = "left.elbow"
    LEFT_HAND = "left.hand"
    RIGHT_SHOULDER = "right.shoulder"
    RIGHT_ELBOW = "right.elbow"
    RIGHT_HAND = "right.hand"
    LEFT_HIP = "left.hip"
    LEFT_KNEE = "left.knee"
    LEFT_FOOT = "left.foot"
    RIGHT_HIP = "right.hip"
    RIGHT_KNEE = "right.knee"
    RIGHT_FOOT = "right.foot"

    def __str__(self) -> str:
        return self.value


GROUND_KEY = "ground"


class BoneShape(str, Enum):
    """Outline a bone is drawn with, traced from its parent joint to its child."""

    LINE = "line"
    POLYGON = "polygon"
    CURVE = "curve"
    CIRCLE = "circle"
    FLARE = "flare"


@dataclass(frozen=True)
class BoneSpec:
    parent: Joint
    child: Joint
    length: float
    width: float
    shape: BoneShape


# Parents always come before their children.
BONES: Tuple[BoneSpec, ...] = (
    BoneSpec(Joint.ROOT, Joint.WAIST, 96.0, 50.0, BoneShape.FLARE),
    BoneSpec(Joint.WAIST, Joint.LEFT_HIP, 112.0, 36.0, BoneShape.CURVE),
    BoneSpec(Joint.LEFT_HIP, Joint.LEFT_KNEE, 112.0, 26.0, BoneShape.CURVE),
    BoneSpec(Joint.LEFT_KNEE, Joint.LEFT_FOOT, 48.0, 16.0, BoneShape.POLYGON),
    BoneSpec(Joint.WAIST, Joint.RIGHT_HIP, 112.0, 36.0, BoneShape.CURVE),
    BoneSpec(Joint.RIGHT_HIP, Joint.RIGHT_KNEE, 112.0, 26.0, BoneShape.CURVE),
    BoneSpec(Joint.RIGHT_KNEE, Joint.RIGHT_FOOT, 48.0, 16.0, BoneShape.POLYGON),
    BoneSpec(Joint.ROOT, Joint.TORSO, 80.0, 76.0, BoneShape.FLARE),
    BoneSpec(Joint.TORSO, Joint.NECK, 10.0, 24.0, BoneShape.CURVE),
    BoneSpec(Joint.NECK, Joint.HEAD, 64.0, 38.0, BoneShape.CIRCLE),
    BoneSpec(Joint.TORSO, Joint.LEFT_SHOULDER, 96.0, 24.0, BoneShape.CURVE),
    BoneSpec(Joint.LEFT_SHOULDER, Joint.LEFT_ELBOW, 96.0, 19.0, BoneShape.CURVE),
    BoneSpec(Joint.LEFT_ELBOW, Joint.LEFT_HAND, 48.0, 10.0, BoneShape.POLYGON),
    BoneSpec(Joint.TORSO, Joint.RIGHT_SHOULDER, 96.0, 24.0, BoneShape.CURVE),
    BoneSpec(Joint.RIGHT_SHOULDER, Joint.RIGHT_ELBOW, 96.0, 19.0, BoneShape.CURVE),
    BoneSpec(Joint.RIGHT_ELBOW, Joint.RIGHT_HAND, 48.0, 10.0, BoneShape.POLYGON),
)

CHILDREN: Dict[Joint, Tuple[BoneSpec, ...]] = {
    joint: tuple(bone for bone in BONES if bone.parent is joint) for joint in Joint
}

# Pose attribute holding each joint's local angle: (side, name) where side is
# None for the flat fields. Root and neck have no stored angle.
POSE_FIELDS: Dict[Joint, Optional[Tuple[Optional[str], str]]] = {
    Joint.ROOT: None,
    Joint.NECK: None,
    Joint.WAIST: (None, "waist"),
    Joint.TORSO: (None, "torso"),
    Joint.HEAD: (None, "head"),
}
for _joint in Joint:
    if "." in _joint.value:
        _side, _name = _joint.value.split(".")
        POSE_FIELDS[_joint] = (_side, _name)

CORE_JOINTS = frozenset({Joint.ROOT, Joint.WAIST, Joint.TORSO, Joint.NECK})
EXTREMITY_JOINTS = frozenset(
    {Joint.LEFT_HAND, Joint.RIGHT_HAND, Joint.LEFT_FOOT, Joint.RIGHT_FOOT}
)
FOOT_JOINTS = frozenset({Joint.LEFT_FOOT, Joint.RIGHT_FOOT})
# Particles watched by the anti-spin pass.
SPIN_DAMPED_JOINTS = (Joint.ROOT, Joint.TORSO, Joint.WAIST)
