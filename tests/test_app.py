"""Tests for the viewer app and renderer on a headless display."""

import math
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest
from pymunk import Vec2d

from pyxl_puppet.app.app import TILT_STEP, PuppetApp
from pyxl_puppet.core.config import AppConfig, WindowConfig
from pyxl_puppet.core.hierarchy import GROUND_KEY, BoneShape, Joint
from pyxl_puppet.core.kinematics import compute_skeleton, find_bone
from pyxl_puppet.core.pose import default_pose
from pyxl_puppet.rendering.renderer import GUIDE_COLOR, PALETTE, bone_color, bone_outline


@pytest.fixture
def app():
    app = PuppetApp(config=AppConfig(window=WindowConfig(size=(500, 500))))
    yield app
    pygame.quit()


class TestRenderer:
    def test_draws_skeleton(self, app):
        skeleton = compute_skeleton(app.session.pose)
        app.renderer.draw(skeleton, physics_enabled=True, selected=Joint.LEFT_HIP.value)
        assert app.renderer.surface.get_size() == (1000, 1000)

    def test_to_canvas_undoes_scaling(self, app):
        point = app.renderer.to_canvas((250, 250))
        assert point.x == pytest.approx(500.0)
        assert point.y == pytest.approx(500.0)

    def test_bone_colors(self):
        assert bone_color(GROUND_KEY) == GUIDE_COLOR
        assert bone_color(Joint.LEFT_KNEE.value) == PALETTE["knee"]
        assert bone_color("torso") == PALETTE["torso"]

    def test_draws_every_selection(self, app):
        skeleton = compute_skeleton(app.session.pose)
        for key in (Joint.HEAD.value, Joint.TORSO.value, Joint.RIGHT_HAND.value, GROUND_KEY):
            app.renderer.draw(skeleton, selected=key)


def _bone_frame(bone):
    direction = Vec2d(math.cos(bone.angle), math.sin(bone.angle))
    return [
        ((point - bone.start).dot(direction), (point - bone.start).dot(direction.perpendicular()))
        for point in bone_outline(bone)
    ]


class TestBoneOutline:
    @pytest.fixture
    def skeleton(self):
        return compute_skeleton(default_pose())

    def test_polygon_is_a_wedge(self, skeleton):
        bone = find_bone(skeleton, Joint.RIGHT_HAND)
        assert bone.shape is BoneShape.POLYGON
        base_a, base_b, tip = bone_outline(bone)
        assert base_a.get_distance(base_b) == pytest.approx(bone.width)
        midpoint = (base_a + base_b) / 2
        assert midpoint.x == pytest.approx(bone.start.x)
        assert midpoint.y == pytest.approx(bone.start.y)
        assert tip.x == pytest.approx(bone.end.x)
        assert tip.y == pytest.approx(bone.end.y)

    @pytest.mark.parametrize("joint", [Joint.RIGHT_ELBOW, Joint.LEFT_KNEE, Joint.NECK])
    def test_curve_stays_inside_bone(self, skeleton, joint):
        bone = find_bone(skeleton, joint)
        assert bone.shape is BoneShape.CURVE
        frame = _bone_frame(bone)
        assert len(frame) > 3
        assert all(-1e-9 <= along <= bone.length + 1e-9 for along, _ in frame)
        assert max(abs(across) for _, across in frame) == pytest.approx(bone.width / 2)
        assert max(along for along, _ in frame) == pytest.approx(bone.length)

    @pytest.mark.parametrize("joint", [Joint.TORSO, Joint.WAIST])
    def test_flare_is_widest_near_child(self, skeleton, joint):
        bone = find_bone(skeleton, joint)
        assert bone.shape is BoneShape.FLARE
        frame = _bone_frame(bone)
        assert all(-1e-9 <= along <= bone.length + 1e-9 for along, _ in frame)
        widest_along, widest_across = max(frame, key=lambda item: abs(item[1]))
        assert abs(widest_across) == pytest.approx(bone.width / 2)
        assert widest_along == pytest.approx(0.9 * bone.length)
        assert frame[0] == pytest.approx((0.0, 0.0), abs=1e-9)

    def test_curve_and_polygon_shapes_differ(self, skeleton):
        assert len(bone_outline(find_bone(skeleton, Joint.LEFT_HAND))) == 3
        assert len(bone_outline(find_bone(skeleton, Joint.LEFT_ELBOW))) > 3


class TestKeys:
    def test_escape_quits(self, app):
        assert app.handle_key(pygame.K_ESCAPE) is False

    def test_p_toggles_physics(self, app):
        assert app.handle_key(pygame.K_p) is True
        assert app.session.enabled
        app.handle_key(pygame.K_p)
        assert not app.session.enabled
        assert app.session.body is None

    def test_arrows_tilt_target_pose(self, app):
        app.handle_key(pygame.K_RIGHT)
        app.handle_key(pygame.K_RIGHT)
        app.handle_key(pygame.K_LEFT)
        assert app.session.target_pose.ground_tilt == pytest.approx(TILT_STEP)
        assert app.session.pose.ground_tilt == pytest.approx(math.radians(5))

    def test_r_resets_pose(self, app):
        app.handle_key(pygame.K_RIGHT)
        app.handle_key(pygame.K_r)
        assert app.session.target_pose.ground_tilt == 0.0


class TestSelection:
    def test_click_selects_bone(self, app):
        # The right forearm spans canvas x 596..692 at y 420.
        app.handle_click((322, 210))
        assert app.selected == Joint.RIGHT_ELBOW

    def test_click_on_empty_space_clears(self, app):
        app.handle_click((322, 210))
        app.handle_click((10, 10))
        assert app.selected is None
