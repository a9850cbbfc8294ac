"""Map simulated particle positions back onto a Pose."""
from __future__ import annotations

import math

from pyxl_puppet.core.config import DEFAULT_CANVAS, CanvasConfig
from pyxl_puppet.core.hierarchy import CHILDREN, Joint
from pyxl_puppet.core.kinematics import get_local_angle, set_local_angle
from pyxl_puppet.core.pose import Pose
from pyxl_puppet.physics.body import PhysicsBody


def unwrap_angle(angle: float, reference: float) -> float:
    """Return the angle equal to ``angle`` modulo a full turn nearest ``reference``."""
    return reference + math.remainder(angle - reference, math.tau)


def extract_pose_from_physics_body(
    body: PhysicsBody,
    reference_pose: Pose,
    canvas: CanvasConfig = DEFAULT_CANVAS,
) -> Pose:
    """Recover joint angles from ``body``.

    ``reference_pose`` is copied as the template, so fields the particles
    cannot determine keep their reference values. The root's tilt comes from
    the mean of the torso and waist particles, which sit a quarter turn from
    the ground direction; the offset makes the camera follow the root.

    ``atan2`` only reports directions in (-pi, pi], so each recovered angle is
    taken as the whole-turn equivalent closest to the template's value. A limb
    bent past half a turn comes back as stored, and a straight limb lying on
    the -pi direction does not flip to +pi.
    """
    pose = reference_pose.copy()

    root = body.get(Joint.ROOT)
    torso = body.get(Joint.TORSO)
    waist = body.get(Joint.WAIST)
    if root is None or torso is None or waist is None:
        return pose

    core = (torso.pos + waist.pos) / 2
    ground_angle = unwrap_angle((core - root.pos).angle - math.pi / 2, reference_pose.ground_tilt)
    pose.ground_tilt = ground_angle
    pose.offset = root.pos - canvas.center

    _walk(body, pose, Joint.ROOT, ground_angle)
    return pose


def _walk(body: PhysicsBody, pose: Pose, parent: Joint, parent_angle: float) -> None:
    parent_particle = body.get(parent)
    if parent_particle is None:
        return
    for bone in CHILDREN[parent]:
        child_particle = body.get(bone.child)
        if child_particle is None:
            continue
        world_angle = (child_particle.pos - parent_particle.pos).angle
        # The template's value is read before it is overwritten.
        local = unwrap_angle(world_angle - parent_angle, get_local_angle(pose, bone.child))
        set_local_angle(pose, bone.child, local)
        _walk(body, pose, bone.child, parent_angle + local)
