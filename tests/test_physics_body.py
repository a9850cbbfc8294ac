"""Tests for building a physics body from a pose."""

import pytest

from pyxl_puppet.core.config import PhysicsConfig
from pyxl_puppet.core.hierarchy import BONES, CORE_JOINTS, EXTREMITY_JOINTS, GROUND_KEY, Joint
from pyxl_puppet.core.kinematics import compute_skeleton
from pyxl_puppet.physics.body import create_physics_body_from_pose, particle_mass


class TestParticles:
    def test_one_particle_per_joint_except_ground(self, pose, body):
        joints = compute_skeleton(pose).joints
        assert len(body.particles) == len(joints) - 1
        assert GROUND_KEY not in body.particle_map

    def test_particles_start_at_joints_at_rest(self, pose, body):
        joints = compute_skeleton(pose).joints
        for particle in body.particles:
            assert particle.pos == joints[particle.id]
            assert particle.prev_pos == particle.pos

    def test_particle_map_indexes_particles(self, body):
        for joint, index in body.particle_map.items():
            assert body.particles[index].id is joint
        assert body.get(Joint.HEAD).id is Joint.HEAD


class TestMasses:
    def test_mass_classes(self, body):
        for particle in body.particles:
            if particle.id in CORE_JOINTS:
                assert particle.mass == 3.0
            elif "hand" in particle.id or "foot" in particle.id:
                assert particle.mass == 0.5
            else:
                assert particle.mass == 1.0

    def test_extremities_lighter_than_core(self, body):
        extremities = [p.mass for p in body.particles if p.id in EXTREMITY_JOINTS]
        core = [p.mass for p in body.particles if p.id in CORE_JOINTS]
        assert len(extremities) == 4
        assert len(core) == 4
        assert max(extremities) < min(core)

    def test_all_masses_positive(self, body):
        assert all(p.mass > 0 for p in body.particles)

    def test_masses_come_from_config(self):
        physics = PhysicsConfig(core_mass=5.0, extremity_mass=0.25, default_mass=2.0)
        assert particle_mass(Joint.WAIST, physics) == 5.0
        assert particle_mass(Joint.RIGHT_FOOT, physics) == 0.25
        assert particle_mass(Joint.LEFT_KNEE, physics) == 2.0


class TestConstraints:
    def test_one_constraint_per_edge(self, body):
        assert len(body.constraints) == len(BONES)
        pairs = {
            (body.particles[c.particle_a].id, body.particles[c.particle_b].id)
            for c in body.constraints
        }
        assert pairs == {(bone.parent, bone.child) for bone in BONES}

    def test_rest_lengths_match_bones(self, body):
        lengths = {bone.child: bone.length for bone in BONES}
        for constraint in body.constraints:
            child = body.particles[constraint.particle_b].id
            assert constraint.rest_length == pytest.approx(lengths[child])

    def test_short_edges_dropped(self, pose):
        physics = PhysicsConfig(min_rest_length=50.0)
        body = create_physics_body_from_pose(pose, physics=physics)
        kept = {body.particles[c.particle_b].id for c in body.constraints}
        assert len(body.constraints) == len([b for b in BONES if b.length > 50.0])
        assert Joint.NECK not in kept
        assert Joint.LEFT_HAND not in kept
        assert Joint.RIGHT_FOOT not in kept
        # Particles are still created for every joint.
        assert len(body.particles) == len(BONES) + 1

    def test_rest_length_uses_posed_distance(self, pose):
        pose.left.elbow = 1.0
        body = create_physics_body_from_pose(pose)
        elbow = body.get(Joint.LEFT_ELBOW)
        hand = body.get(Joint.LEFT_HAND)
        constraint = next(
            c for c in body.constraints if body.particles[c.particle_b].id is Joint.LEFT_HAND
        )
        assert constraint.rest_length == pytest.approx(elbow.pos.get_distance(hand.pos))
