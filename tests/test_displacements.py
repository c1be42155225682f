"""
Tests for rigid displacement factories.
"""

import logging

import pytest
import torch
import math

from dqkit.dq import (
    DualQuaternion,
    compare,
    create_rotation,
    create_rotation_plucker,
    create_translation,
    create_rotation_matrix,
    create_rotation_then_translation,
    transform_point,
)
from dqkit.utils.quaternion import (
    quaternion_from_axis_angle,
    quaternion_to_matrix,
    rotate_vector,
)


UNIT_Z = [0.0, 0.0, 1.0]
ORIGIN = [0.0, 0.0, 0.0]


class TestCreateRotation:
    """Tests for rotations about lines."""

    def test_half_turn_about_z(self):
        """sin(π/2) = 1 and the cos(π/2) residue is snapped to zero."""
        r = create_rotation_plucker(math.pi, UNIT_Z, ORIGIN)
        assert r.tolist() == [0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0]

    def test_zero_angle_is_identity(self):
        r = create_rotation(0.0, UNIT_Z, [3.0, 4.0, 5.0])
        assert r == DualQuaternion.identity()

    def test_moment_from_point(self):
        """create_rotation uses the moment point × axis."""
        point = [1.0, 2.0, 0.0]
        via_point = create_rotation(0.8, UNIT_Z, point)
        via_moment = create_rotation_plucker(0.8, UNIT_Z, torch.linalg.cross(
            torch.tensor(point), torch.tensor(UNIT_Z)))
        assert compare(via_point, via_moment) == 0

    def test_rotation_about_offset_axis(self):
        """A quarter turn about the Z line through (1, 0, 0) moves the origin to (1, -1, 0)."""
        r = create_rotation(math.pi / 2, UNIT_Z, [1.0, 0.0, 0.0])
        p = transform_point(r)
        assert torch.allclose(p, torch.tensor([1.0, -1.0, 0.0]))

    def test_rotation_through_origin_matches_quaternion(self, generator):
        axis = torch.nn.functional.normalize(torch.randn(3, generator=generator), dim=0)
        v = torch.randn(3, generator=generator)

        r = create_rotation(1.1, axis, ORIGIN)
        expected = rotate_vector(v, quaternion_from_axis_angle(axis, 1.1))

        assert torch.allclose(transform_point(r, v, round=False), expected, atol=1e-5)

    def test_is_unit(self):
        assert create_rotation(0.5, [0.0, 1.0, 0.0], [2.0, 0.0, 1.0]).is_unit

    def test_tensor_angle(self):
        r = create_rotation_plucker(torch.tensor(math.pi), UNIT_Z, ORIGIN)
        assert r[2] == 1.0


class TestCreateTranslation:
    """Tests for pure translations."""

    def test_layout(self):
        t = create_translation([2.0, 4.0, 6.0])
        assert t.tolist() == [0.0, 0.0, 0.0, 1.0, 1.0, 2.0, 3.0, 0.0]

    def test_amount_scales_vector(self):
        t = create_translation([0.0, 0.0, -1.0], amount=10.0)
        assert t.tolist() == [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, -5.0, 0.0]

    def test_amount_is_keyword_only(self):
        with pytest.raises(TypeError):
            create_translation(5.0, [1.0, 0.0, 0.0])

    def test_translation_property(self):
        t = create_translation([1.0, 0.0, 0.0], amount=5.0)
        assert torch.allclose(t.translation, torch.tensor([5.0, 0.0, 0.0]))

    def test_moves_point(self):
        p = transform_point(create_translation([1.0, -2.0, 3.0]), [1.0, 1.0, 1.0])
        assert torch.allclose(p, torch.tensor([2.0, -1.0, 4.0]))

    def test_wrong_shape_raises(self):
        with pytest.raises(ValueError):
            create_translation([1.0, 2.0])


class TestCreateRotationMatrix:
    """Tests for recovering rotations from matrices."""

    def test_identity_matrix(self):
        r = create_rotation_matrix(torch.eye(3))
        assert r == DualQuaternion.identity()

    def test_matches_axis_angle(self):
        axis = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)
        q = quaternion_from_axis_angle(axis, 1.2)

        r = create_rotation_matrix(quaternion_to_matrix(q))
        expected = DualQuaternion(q, torch.zeros(4))

        assert compare(r, expected, precision=1e-5) == 0

    def test_quarter_turn_about_z(self):
        R = torch.tensor([
            [0.0, -1.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
        ])
        r = create_rotation_matrix(R)
        p = transform_point(r, [1.0, 0.0, 0.0])
        assert torch.allclose(p, torch.tensor([0.0, 1.0, 0.0]))

    def test_accepts_nested_lists(self):
        r = create_rotation_matrix([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
        assert r.is_unit

    def test_half_turn_raises(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dqkit.dq.displacements"):
            with pytest.raises(ValueError):
                create_rotation_matrix(torch.diag(torch.tensor([-1.0, -1.0, 1.0])))
        assert "singular" in caplog.text

    def test_wrong_shape_raises(self):
        with pytest.raises(ValueError, match="3, 3"):
            create_rotation_matrix(torch.eye(4))


class TestCreateRotationThenTranslation:
    """Tests for combined rotation and translation."""

    def test_parts(self):
        rotation = quaternion_from_axis_angle(torch.tensor([0.0, 0.0, 1.0]), 0.4)
        q = create_rotation_then_translation(rotation, [1.0, 2.0, 3.0])

        assert torch.allclose(q.rotation, rotation, atol=1e-6)
        assert torch.allclose(q.translation, torch.tensor([1.0, 2.0, 3.0]), atol=1e-5)
        assert q.is_unit

    def test_rotation_is_normalized(self):
        q = create_rotation_then_translation([0.0, 0.0, 0.0, 3.0], [1.0, 0.0, 0.0])
        assert q.tolist() == [0.0, 0.0, 0.0, 1.0, 0.5, 0.0, 0.0, 0.0]

    def test_rotates_then_translates(self):
        rotation = quaternion_from_axis_angle(torch.tensor([0.0, 0.0, 1.0]), math.pi / 2)
        q = create_rotation_then_translation(rotation, [1.0, 0.0, 0.0])
        p = transform_point(q, [1.0, 0.0, 0.0])
        assert torch.allclose(p, torch.tensor([1.0, 1.0, 0.0]))

    def test_equals_translation_times_rotation(self):
        rotation = quaternion_from_axis_angle(torch.tensor([1.0, 1.0, 0.0]), 0.9)
        q = create_rotation_then_translation(rotation, [0.5, -1.0, 2.0])

        composed = create_translation([0.5, -1.0, 2.0]) * DualQuaternion(rotation, torch.zeros(4))

        assert compare(q, composed, precision=1e-5) == 0
