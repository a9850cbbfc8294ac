"""One step of the Verlet ragdoll: integrate, relax constraints, damp spin, collide."""
from __future__ import annotations

from typing import List

from pymunk import Vec2d

from pyxl_puppet.core.config import DEFAULT_CANVAS, DEFAULT_PHYSICS, CanvasConfig, PhysicsConfig
from pyxl_puppet.core.hierarchy import FOOT_JOINTS, SPIN_DAMPED_JOINTS
from pyxl_puppet.physics.body import PhysicsBody, PhysicsParticle


def update_physics_body(
    body: PhysicsBody,
    dt: float,
    canvas: CanvasConfig = DEFAULT_CANVAS,
    physics: PhysicsConfig = DEFAULT_PHYSICS,
) -> None:
    """Advance ``body`` in place by one frame.

    No external acceleration acts on the body, so motion is carried entirely
    by the previous-position velocity; ``dt`` is the frame time the caller
    has already clamped. Degenerate constraints and particles are skipped,
    this never raises.
    """
    _integrate(body, physics)
    for _ in range(physics.solver_iterations):
        _relax_constraints(body, physics)
    _damp_core_spin(body, physics)
    _collide(body, canvas, physics)


def _integrate(body: PhysicsBody, physics: PhysicsConfig) -> None:
    for particle in body.particles:
        if particle.mass == 0:
            continue
        velocity = (particle.pos - particle.prev_pos) * physics.friction
        particle.prev_pos = particle.pos
        particle.pos = particle.pos + velocity


def _relax_constraints(body: PhysicsBody, physics: PhysicsConfig) -> None:
    particles = body.particles
    for constraint in body.constraints:
        a = particles[constraint.particle_a]
        b = particles[constraint.particle_b]
        delta = b.pos - a.pos
        distance = delta.length
        if distance < physics.min_solve_distance:
            continue
        total_mass = a.mass + b.mass
        if total_mass == 0:
            continue

        # Each end moves by the other's mass share; anchors stay put.
        if a.mass == 0:
            share_a, share_b = 0.0, 1.0
        elif b.mass == 0:
            share_a, share_b = 1.0, 0.0
        else:
            share_a, share_b = b.mass / total_mass, a.mass / total_mass

        correction = delta * ((distance - constraint.rest_length) / distance)
        a.pos = a.pos + correction * share_a
        b.pos = b.pos - correction * share_b


def _damp_core_spin(body: PhysicsBody, physics: PhysicsConfig) -> None:
    core: List[PhysicsParticle] = []
    for joint in SPIN_DAMPED_JOINTS:
        particle = body.get(joint)
        if particle is not None and particle.mass > 0:
            core.append(particle)
    if len(core) < 2:
        return

    total_mass = sum(p.mass for p in core)
    com = Vec2d(sum(p.pos.x * p.mass for p in core), sum(p.pos.y * p.mass for p in core)) / total_mass
    com_prev = (
        Vec2d(sum(p.prev_pos.x * p.mass for p in core), sum(p.prev_pos.y * p.mass for p in core))
        / total_mass
    )

    for particle in core:
        tangential = (particle.pos - com) - (particle.prev_pos - com_prev)
        damped = tangential * physics.rotational_damping
        particle.pos = particle.pos + (damped - tangential)


def _collide(body: PhysicsBody, canvas: CanvasConfig, physics: PhysicsConfig) -> None:
    radius = physics.particle_radius
    bounce = physics.bounce_factor
    ground = canvas.ground_y - radius

    for particle in body.particles:
        x, y = particle.pos
        prev_x, prev_y = particle.prev_pos
        vx, vy = x - prev_x, y - prev_y

        if y > canvas.height - radius:
            y = canvas.height - radius
            prev_y = y + vy * bounce
        if y < radius:
            y = radius
            prev_y = y + vy * bounce
        if x > canvas.width - radius:
            x = canvas.width - radius
            prev_x = x + vx * bounce
        if x < radius:
            x = radius
            prev_x = x + vx * bounce

        if particle.id in FOOT_JOINTS and y > ground:
            y = ground
            prev_y = y + vy * bounce

        particle.pos = Vec2d(x, y)
        particle.prev_pos = Vec2d(prev_x, prev_y)
