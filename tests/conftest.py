import pytest

from pyxl_puppet.core.pose import default_pose
from pyxl_puppet.physics.body import create_physics_body_from_pose


@pytest.fixture
def pose():
    return default_pose()


@pytest.fixture
def body(pose):
    return create_physics_body_from_pose(pose)
