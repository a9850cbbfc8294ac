"""Particle/constraint ragdoll built from a posed skeleton."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pymunk import Vec2d

from pyxl_puppet.core.config import DEFAULT_CANVAS, DEFAULT_PHYSICS, CanvasConfig, PhysicsConfig
from pyxl_puppet.core.hierarchy import BONES, CORE_JOINTS, EXTREMITY_JOINTS, GROUND_KEY, Joint
from pyxl_puppet.core.kinematics import compute_skeleton
from pyxl_puppet.core.pose import Pose

logger = logging.getLogger(__name__)


@dataclass
class PhysicsParticle:
    id: Joint
    pos: Vec2d
    prev_pos: Vec2d
    mass: float

    @property
    def velocity(self) -> Vec2d:
        return self.pos - self.prev_pos


@dataclass(frozen=True)
class PhysicsConstraint:
    particle_a: int
    particle_b: int
    rest_length: float


@dataclass
class PhysicsBody:
    particles: List[PhysicsParticle] = field(default_factory=list)
    constraints: List[PhysicsConstraint] = field(default_factory=list)
    particle_map: Dict[Joint, int] = field(default_factory=dict)

    def get(self, joint: Joint) -> Optional[PhysicsParticle]:
        index = self.particle_map.get(joint)
        return self.particles[index] if index is not None else None


def particle_mass(joint: Joint, physics: PhysicsConfig = DEFAULT_PHYSICS) -> float:
    if joint in CORE_JOINTS:
        return physics.core_mass
    if joint in EXTREMITY_JOINTS:
        return physics.extremity_mass
    return physics.default_mass


def create_physics_body_from_pose(
    pose: Pose,
    canvas: CanvasConfig = DEFAULT_CANVAS,
    physics: PhysicsConfig = DEFAULT_PHYSICS,
) -> PhysicsBody:
    skeleton = compute_skeleton(pose, canvas)
    body = PhysicsBody()

    for key, point in skeleton.joints.items():
        if key == GROUND_KEY:
            continue
        joint = Joint(key)
        body.particle_map[joint] = len(body.particles)
        body.particles.append(
            PhysicsParticle(id=joint, pos=point, prev_pos=point, mass=particle_mass(joint, physics))
        )

    for bone in BONES:
        index_a = body.particle_map.get(bone.parent)
        index_b = body.particle_map.get(bone.child)
        if index_a is None or index_b is None:
            continue
        rest_length = body.particles[index_a].pos.get_distance(body.particles[index_b].pos)
        # Near-zero edges would divide by zero in the solver.
        if rest_length > physics.min_rest_length:
            body.constraints.append(PhysicsConstraint(index_a, index_b, rest_length))

    logger.debug(
        "Built physics body: %d particles, %d constraints",
        len(body.particles),
        len(body.constraints),
    )
    return body
