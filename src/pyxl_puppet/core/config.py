"""Configuration models and loaders."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from pymunk import Vec2d


@dataclass(frozen=True)
class WindowConfig:
    size: Tuple[int, int] = (1000, 1000)
    title: str = "Pyxl Puppet"
    target_fps: int = 60
    background_color: Tuple[int, int, int] = (244, 241, 222)


@dataclass(frozen=True)
class CanvasConfig:
    """World dimensions shared by the skeleton builder, the solver and the renderer."""

    width: float = 1000.0
    height: float = 1000.0
    ground_y: float = 825.0

    @property
    def center(self) -> Vec2d:
        return Vec2d(self.width / 2, self.height / 2)


@dataclass(frozen=True)
class PhysicsConfig:
    friction: float = 0.995
    solver_iterations: int = 10
    bounce_factor: float = 0.7
    rotational_damping: float = 0.98
    particle_radius: float = 5.0
    min_rest_length: float = 0.1
    min_solve_distance: float = 0.001
    core_mass: float = 3.0
    extremity_mass: float = 0.5
    default_mass: float = 1.0
    max_dt: float = 1.0 / 30.0


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    window: WindowConfig = field(default_factory=WindowConfig)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CANVAS = CanvasConfig()
DEFAULT_PHYSICS = PhysicsConfig()


def _load_json(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text())


def load_app_config(path: Path) -> AppConfig:
    payload = _load_json(path)

    window = WindowConfig(
        size=tuple(payload["window"]["size"]),
        title=payload["window"]["title"],
        target_fps=payload["window"]["target_fps"],
        background_color=tuple(payload["window"]["background_color"]),
    )

    canvas = CanvasConfig(
        width=float(payload["canvas"]["width"]),
        height=float(payload["canvas"]["height"]),
        ground_y=float(payload["canvas"]["ground_y"]),
    )

    # Physics keys are optional; anything left out keeps the tuned default.
    physics = PhysicsConfig(**payload.get("physics", {}))

    logging_section = payload.get("logging", {})
    log_config = LoggingConfig(
        level=logging_section.get("level", LoggingConfig.level),
        format=logging_section.get("format", LoggingConfig.format),
    )

    return AppConfig(window=window, canvas=canvas, physics=physics, logging=log_config)
