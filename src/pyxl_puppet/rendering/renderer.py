"""Pygame renderer for puppet skeletons."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pygame
from pymunk import Vec2d

from pyxl_puppet.core.config import AppConfig
from pyxl_puppet.core.hierarchy import GROUND_KEY, BoneShape, Joint
from pyxl_puppet.core.kinematics import BoneSegment, Skeleton, compute_skeleton
from pyxl_puppet.core.pose import default_pose

Color = Tuple[int, int, int]
Point = Tuple[float, float]

GRID_SPACING = 50
GRID_COLOR = (222, 216, 204)
GUIDE_COLOR = (255, 59, 48)
JOINT_COLOR = (26, 26, 26)
JOINT_RADIUS = 5
SELECTION_COLOR = (224, 37, 168)
CURVE_STEPS = 8

PALETTE: Dict[str, Color] = {
    "head": (168, 168, 168),
    "neck": (119, 119, 119),
    "torso": (26, 26, 26),
    "waist": (26, 26, 26),
    "hip": (26, 26, 26),
    "shoulder": (26, 26, 26),
    "knee": (128, 128, 128),
    "elbow": (128, 128, 128),
    "hand": (77, 77, 77),
    "foot": (77, 77, 77),
}

# Back to front.
DRAW_ORDER = (
    GROUND_KEY,
    Joint.RIGHT_HIP, Joint.RIGHT_KNEE, Joint.RIGHT_FOOT,
    Joint.LEFT_HIP, Joint.LEFT_KNEE, Joint.LEFT_FOOT,
    Joint.WAIST,
    Joint.RIGHT_SHOULDER, Joint.RIGHT_ELBOW, Joint.RIGHT_HAND,
    Joint.LEFT_SHOULDER, Joint.LEFT_ELBOW, Joint.LEFT_HAND,
    Joint.TORSO,
    Joint.NECK, Joint.HEAD,
)


def bone_color(key: str) -> Color:
    if key == GROUND_KEY:
        return GUIDE_COLOR
    part = key.split(".")[-1]
    return PALETTE.get(part, (0, 0, 0))


def _quadratic(start: Point, control: Point, end: Point) -> List[Point]:
    """Sample a quadratic Bezier, excluding ``start``."""
    points = []
    for step in range(1, CURVE_STEPS + 1):
        t = step / CURVE_STEPS
        u = 1 - t
        points.append(
            (
                u * u * start[0] + 2 * u * t * control[0] + t * t * end[0],
                u * u * start[1] + 2 * u * t * control[1] + t * t * end[1],
            )
        )
    return points


def _local_outline(shape: BoneShape, length: float, width: float) -> List[Point]:
    """Outline in bone space: x runs along the bone, y across it."""
    half = width / 2
    if shape is BoneShape.POLYGON:
        # Wedge from a flat base at the parent to a point at the child.
        return [(0.0, -half), (0.0, half), (length, 0.0)]
    if shape is BoneShape.CURVE:
        # Spindle that swells to full width two thirds of the way down.
        points = [(0.0, 0.0)]
        points += _quadratic((0.0, 0.0), (length / 3, -half), (2 * length / 3, -half))
        points.append((length, 0.0))
        points.append((2 * length / 3, half))
        points += _quadratic((2 * length / 3, half), (length / 3, half), (0.0, 0.0))[:-1]
        return points
    if shape is BoneShape.FLARE:
        # Narrow at the parent, widest just short of the child.
        shoulder = 0.9 * length
        points = [(0.0, 0.0)]
        points += _quadratic((0.0, 0.0), (0.35 * length, -0.37 * width), (shoulder, -half))
        points += _quadratic((shoulder, -half), (length, 0.0), (shoulder, half))
        points += _quadratic((shoulder, half), (0.35 * length, 0.37 * width), (0.0, 0.0))[:-1]
        return points
    return [(0.0, 0.0), (length, 0.0)]


def bone_outline(bone: BoneSegment) -> List[Vec2d]:
    """World-space polygon for ``bone``'s shape."""
    direction = Vec2d(math.cos(bone.angle), math.sin(bone.angle))
    across = direction.perpendicular()
    return [
        bone.start + direction * along + across * offset
        for along, offset in _local_outline(bone.shape, bone.length, bone.width)
    ]


@dataclass
class Renderer:
    config: AppConfig
    screen: pygame.Surface

    def __post_init__(self) -> None:
        canvas = self.config.canvas
        self.surface = pygame.Surface((int(canvas.width), int(canvas.height)))
        # Static guides come from the default pose with no offset.
        rest = compute_skeleton(default_pose(), canvas)
        self._navel_y = rest.joints[Joint.ROOT].y
        self._shoulder_y = rest.joints[Joint.TORSO].y

    def draw(self, skeleton: Skeleton, physics_enabled: bool = False, selected: Optional[str] = None) -> None:
        self.surface.fill(self.config.window.background_color)
        self._draw_grid()
        self._draw_guides()

        bones = {bone.key: bone for bone in skeleton.bones}
        for key in DRAW_ORDER:
            bone = bones.get(key)
            if bone is None:
                continue
            if key == selected:
                self._draw_highlight(bone)
            self._draw_bone(bone)
        self._draw_joints(skeleton)
        if physics_enabled:
            pygame.draw.circle(self.surface, GUIDE_COLOR, (20, 20), 8)

        self._present()

    def to_canvas(self, screen_pos: Tuple[int, int]) -> Vec2d:
        """Map a window position back onto canvas coordinates."""
        scale, origin = self._layout()
        return (Vec2d(*screen_pos) - origin) / scale

    def _draw_grid(self) -> None:
        width, height = self.surface.get_size()
        for x in range(0, width + 1, GRID_SPACING):
            pygame.draw.line(self.surface, GRID_COLOR, (x, 0), (x, height))
        for y in range(0, height + 1, GRID_SPACING):
            pygame.draw.line(self.surface, GRID_COLOR, (0, y), (width, y))

    def _draw_guides(self) -> None:
        width, height = self.surface.get_size()
        pygame.draw.line(self.surface, GUIDE_COLOR, (0, self._navel_y), (width, self._navel_y))
        pygame.draw.line(self.surface, GUIDE_COLOR, (0, self._shoulder_y), (width, self._shoulder_y))
        pygame.draw.line(self.surface, GUIDE_COLOR, (width / 2, 0), (width / 2, height))

    def _draw_bone(self, bone: BoneSegment) -> None:
        color = bone_color(bone.key)
        if bone.key == GROUND_KEY:
            half = Vec2d(math.cos(bone.angle), math.sin(bone.angle)) * (self.surface.get_width() / 2)
            pygame.draw.line(self.surface, color, bone.start - half, bone.start + half, int(bone.width))
            return
        if bone.shape is BoneShape.CIRCLE:
            center = (bone.start + bone.end) / 2
            pygame.draw.circle(self.surface, color, center, max(bone.length, bone.width) / 2)
            return
        if bone.shape is BoneShape.LINE:
            pygame.draw.line(self.surface, color, bone.start, bone.end, max(1, int(bone.width)))
            return
        pygame.draw.polygon(self.surface, color, bone_outline(bone))

    def _draw_joints(self, skeleton: Skeleton) -> None:
        for key, point in skeleton.joints.items():
            if key in (GROUND_KEY, Joint.HEAD):
                continue
            pygame.draw.circle(self.surface, JOINT_COLOR, point, JOINT_RADIUS)

    def _draw_highlight(self, bone: BoneSegment) -> None:
        if bone.shape is BoneShape.CIRCLE:
            center = (bone.start + bone.end) / 2
            pygame.draw.circle(self.surface, SELECTION_COLOR, center, max(bone.length, bone.width) / 2 + 4)
            return
        if bone.shape is BoneShape.LINE:
            pygame.draw.line(self.surface, SELECTION_COLOR, bone.start, bone.end, int(bone.width) + 8)
            return
        pygame.draw.polygon(self.surface, SELECTION_COLOR, bone_outline(bone), 8)

    def _layout(self) -> Tuple[float, Vec2d]:
        screen_w, screen_h = self.screen.get_size()
        canvas_w, canvas_h = self.surface.get_size()
        scale = min(screen_w / canvas_w, screen_h / canvas_h)
        origin = Vec2d((screen_w - canvas_w * scale) / 2, (screen_h - canvas_h * scale) / 2)
        return scale, origin

    def _present(self) -> None:
        """Scale the canvas to fit the window, keeping its aspect ratio."""
        scale, origin = self._layout()
        canvas_w, canvas_h = self.surface.get_size()
        size = (max(1, int(canvas_w * scale)), max(1, int(canvas_h * scale)))
        scaled = pygame.transform.smoothscale(self.surface, size)
        self.screen.fill((0, 0, 0))
        self.screen.blit(scaled, (int(origin.x), int(origin.y)))
