"""Shared assertions for pose comparisons."""

import pytest

from pyxl_puppet.core.pose import Pose

LIMB_FIELDS = ("shoulder", "elbow", "hand", "hip", "knee", "foot")


def assert_pose_close(actual: Pose, expected: Pose, abs_tol: float = 1e-9) -> None:
    """Compare every stored angle as a plain number, no whole-turn slack."""
    assert actual.ground_tilt == pytest.approx(expected.ground_tilt, abs=abs_tol)
    assert actual.offset.x == pytest.approx(expected.offset.x, abs=1e-6)
    assert actual.offset.y == pytest.approx(expected.offset.y, abs=1e-6)
    for name in ("torso", "waist", "head"):
        assert getattr(actual, name) == pytest.approx(getattr(expected, name), abs=abs_tol), name
    for side in ("left", "right"):
        for name in LIMB_FIELDS:
            got = getattr(getattr(actual, side), name)
            want = getattr(getattr(expected, side), name)
            assert got == pytest.approx(want, abs=abs_tol), f"{side}.{name}"
