"""
Pytest configuration and fixtures for dqkit tests.
"""

import pytest
import torch

from dqkit.dq import (
    DualQuaternion,
    create_rotation,
    create_rotation_then_translation,
    create_translation,
    multiply,
    transform_point,
)
from dqkit.utils.config import get_config, set_config
from dqkit.utils.quaternion import random_quaternion


@pytest.fixture(autouse=True)
def restore_config():
    """Keep config changes from leaking between tests."""
    previous = get_config()
    yield
    set_config(previous)


@pytest.fixture
def generator():
    """Seeded random generator for reproducible values."""
    return torch.Generator().manual_seed(1234)


@pytest.fixture
def identity():
    """Identity transformation."""
    return DualQuaternion.identity()


@pytest.fixture
def random_transformation(generator):
    """Factory for random unit dual quaternions (rotation + translation)."""
    def make() -> DualQuaternion:
        q = random_quaternion(1, generator=generator)[0]
        t = torch.randn(3, generator=generator)
        return create_rotation_then_translation(q, t)
    return make


@pytest.fixture
def random_values(generator):
    """Factory for dual quaternions with eight arbitrary components."""
    def make() -> DualQuaternion:
        return DualQuaternion.from_values(torch.randn(8, generator=generator))
    return make


@pytest.fixture
def scara_forward_kinematics():
    """
    End-effector position of an EPSON E2L SCARA robot.

    Three revolute joints about Z at x = 0, 300 and 650, a prismatic joint
    moving down along Z, and the end effector at (650, 0, 318) in the
    reference configuration.
    """
    def fk(theta1=0.0, theta2=0.0, theta3=0.0, z=0.0) -> torch.Tensor:
        unit_z = [0.0, 0.0, 1.0]
        r1 = create_rotation(theta1, unit_z, [0.0, 0.0, 0.0])
        r2 = create_rotation(theta2, unit_z, [300.0, 0.0, 0.0])
        r3 = create_rotation(theta3, unit_z, [650.0, 0.0, 0.0])
        t = create_translation([0.0, 0.0, -1.0], amount=z)
        end_effector = create_translation([650.0, 0.0, 318.0])

        # Rightmost displacement is applied first
        displacement = multiply(r1, r2, r3, t, end_effector)
        return transform_point(displacement)
    return fk


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
