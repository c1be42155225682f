"""
Tests for the Clifford conjugation actions and point transformation.
"""

import pytest
import torch
import math

from dqkit.dq import (
    DualQuaternion,
    compare,
    create_point,
    create_line,
    create_rotation,
    create_rotation_plucker,
    create_translation,
    create_rotation_then_translation,
    get_point,
    clifford_conjugation_f1g,
    clifford_conjugation_f2g,
    clifford_conjugation_f3g,
    clifford_conjugation_f4g,
    transform_point,
)
from dqkit.utils.quaternion import quaternion_conjugate, quaternion_to_matrix, random_quaternion


UNIT_X = [1.0, 0.0, 0.0]
UNIT_Z = [0.0, 0.0, 1.0]
ORIGIN = [0.0, 0.0, 0.0]


# =============================================================================
# Conjugation Action Tests
# =============================================================================

class TestCliffordConjugations:
    """Tests for the four sandwich actions."""

    def test_f1g_explicit(self, random_values):
        a, b = random_values(), random_values()
        assert compare(clifford_conjugation_f1g(a, b), a * b * a, precision=1e-5) == 0

    def test_f2g_explicit(self, random_values):
        a, b = random_values(), random_values()
        expected = a * b * a.conjugate()
        assert compare(clifford_conjugation_f2g(a, b), expected, precision=1e-5) == 0

    def test_f3g_explicit(self, random_values):
        a, b = random_values(), random_values()
        star = DualQuaternion.from_values(a.real.tolist() + (-a.dual).tolist())
        assert compare(clifford_conjugation_f3g(a, b), a * b * star, precision=1e-5) == 0

    def test_f4g_explicit(self, random_values):
        a, b = random_values(), random_values()
        dual = a.dual.clone()
        dual[3] = -dual[3]
        star = DualQuaternion.from_values(quaternion_conjugate(a.real).tolist() + dual.tolist())
        assert compare(clifford_conjugation_f4g(a, b), a * b * star, precision=1e-5) == 0

    def test_f1g_and_f3g_agree_for_pure_rotation(self, random_values):
        r = create_rotation(0.7, [0.0, 1.0, 0.0], ORIGIN)
        b = random_values()
        assert compare(clifford_conjugation_f1g(r, b), clifford_conjugation_f3g(r, b), precision=1e-5) == 0

    def test_identity_action(self, identity, random_values):
        b = random_values()
        for action in (
            clifford_conjugation_f1g,
            clifford_conjugation_f2g,
            clifford_conjugation_f3g,
            clifford_conjugation_f4g,
        ):
            assert compare(action(identity, b), b) == 0

    def test_operands_unchanged(self, random_values):
        a, b = random_values(), random_values()
        a_before, b_before = a.tolist(), b.tolist()
        clifford_conjugation_f3g(a, b)
        clifford_conjugation_f4g(a, b, adjust=True)
        assert a.tolist() == a_before
        assert b.tolist() == b_before


# =============================================================================
# Point Action Tests
# =============================================================================

class TestPointAction:
    """Tests for moving points with F4G."""

    def test_translation(self):
        t = create_translation([1.0, 2.0, 3.0])
        moved = clifford_conjugation_f4g(t, create_point([1.0, 1.0, 1.0]))
        assert torch.allclose(get_point(moved), torch.tensor([2.0, 3.0, 4.0]))
        assert torch.allclose(moved.real, torch.tensor([0.0, 0.0, 0.0, 1.0]))

    def test_result_is_a_point(self, random_transformation, generator):
        q = random_transformation()
        moved = clifford_conjugation_f4g(q, create_point(torch.randn(3, generator=generator)))
        assert torch.allclose(moved.real, torch.tensor([0.0, 0.0, 0.0, 1.0]), atol=1e-5)
        assert abs(moved[7]) < 1e-5

    def test_adjust_snaps_noise(self):
        r = create_rotation_plucker(math.pi / 2, UNIT_Z, ORIGIN)
        moved = clifford_conjugation_f4g(r, create_point(UNIT_X), adjust=True)
        assert moved[4] == 0.0
        assert moved[5] == pytest.approx(1.0)

    def test_matches_rotation_matrix(self, generator):
        for _ in range(5):
            q = random_quaternion(1, generator=generator)[0]
            t = torch.randn(3, generator=generator)
            p = torch.randn(3, generator=generator)

            transformation = create_rotation_then_translation(q, t)
            expected = quaternion_to_matrix(q) @ p + t

            assert torch.allclose(transform_point(transformation, p, round=False), expected, atol=1e-5)


# =============================================================================
# Line Action Tests
# =============================================================================

class TestLineAction:
    """Tests for moving lines with F2G."""

    def test_translated_line(self):
        """The Z line through the origin shifted by X has moment (0, -1, 0)."""
        line = create_line(UNIT_Z, ORIGIN)
        moved = clifford_conjugation_f2g(create_translation(UNIT_X), line)
        expected = [0.0, 0.0, 1.0, 0.0, 0.0, -1.0, 0.0, 0.0]
        assert torch.allclose(moved.to_tensor(), torch.tensor(expected), atol=1e-6)

    def test_translated_line_matches_construction(self):
        line = create_line([0.0, 1.0, 0.0], [1.0, 0.0, 2.0])
        moved = clifford_conjugation_f2g(create_translation([3.0, -1.0, 0.5]), line)
        expected = create_line([0.0, 1.0, 0.0], [4.0, -1.0, 2.5])
        assert compare(moved, expected, precision=1e-5) == 0

    def test_rotated_line(self):
        line = create_line(UNIT_X, ORIGIN)
        r = create_rotation_plucker(math.pi / 2, UNIT_Z, ORIGIN)
        moved = clifford_conjugation_f2g(r, line)
        assert torch.allclose(moved.real, torch.tensor([0.0, 1.0, 0.0, 0.0]), atol=1e-6)
        assert torch.allclose(moved.dual, torch.zeros(4), atol=1e-6)

    def test_line_keeps_plucker_form(self, random_transformation):
        line = create_line([1.0, -2.0, 0.5], [0.3, 0.0, 1.0])
        moved = clifford_conjugation_f2g(random_transformation(), line)
        assert abs(moved[3]) < 1e-5
        assert abs(moved[7]) < 1e-5
        assert torch.dot(moved.real[:3], moved.dual[:3]).abs().item() < 1e-4


# =============================================================================
# transform_point Tests
# =============================================================================

class TestTransformPoint:
    """Tests for transform_point."""

    def test_half_turn_after_translation(self):
        rotation = create_rotation_plucker(math.pi, UNIT_Z, ORIGIN)
        translation = create_translation(UNIT_X, amount=5.0)
        p = transform_point(rotation * translation)
        assert torch.allclose(p, torch.tensor([-5.0, 0.0, 0.0]))

    def test_quarter_turn_after_translation(self):
        rotation = create_rotation_plucker(math.pi / 2, UNIT_Z, ORIGIN)
        translation = create_translation(UNIT_X, amount=5.0)
        p = transform_point(rotation * translation)
        assert torch.allclose(p, torch.tensor([0.0, 5.0, 0.0]))

    def test_order_matters(self):
        rotation = create_rotation_plucker(math.pi / 2, UNIT_Z, ORIGIN)
        translation = create_translation(UNIT_X, amount=5.0)
        p = transform_point(translation * rotation)
        assert torch.allclose(p, torch.tensor([5.0, 0.0, 0.0]))

    def test_default_point_is_origin(self, random_transformation):
        q = random_transformation()
        assert torch.equal(transform_point(q), transform_point(q, ORIGIN))

    def test_rounding(self):
        t = create_translation([1.23456, 0.0, 0.0])
        assert transform_point(t)[0].item() == pytest.approx(1.235, abs=1e-6)
        assert transform_point(t, round=False)[0].item() == pytest.approx(1.23456, abs=1e-6)

    def test_output_shape(self, identity):
        assert transform_point(identity, [1.0, 2.0, 3.0]).shape == (3,)
