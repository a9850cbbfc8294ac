"""Pose and ragdoll-simulate a 2D stick-figure puppet."""
from pyxl_puppet.core.kinematics import Skeleton, BoneSegment, compute_skeleton
from pyxl_puppet.core.pose import LimbAngles, Pose, default_pose
from pyxl_puppet.physics.body import PhysicsBody, create_physics_body_from_pose
from pyxl_puppet.physics.extract import extract_pose_from_physics_body
from pyxl_puppet.physics.solver import update_physics_body

__all__ = [
    "BoneSegment",
    "LimbAngles",
    "PhysicsBody",
    "Pose",
    "Skeleton",
    "compute_skeleton",
    "create_physics_body_from_pose",
    "default_pose",
    "extract_pose_from_physics_body",
    "update_physics_body",
]
