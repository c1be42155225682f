"""
Rigid displacements as dual quaternions.

A rotation of θ about a line with unit direction l and moment m = p × l
(p any point on the line) is

    R = (sin(θ/2) l, cos(θ/2)) + ε (sin(θ/2) m, 0)

and a translation by t is

    T = (0, 0, 0, 1) + ε (t/2, 0)

Displacements compose right to left, so ``R * T`` translates first and then
rotates. Angles are in radians.
"""

from __future__ import annotations
import logging
import math

import torch

from ..core.constants import ACCUMULATOR_DTYPE
from ..core.types import Angle, Matrix3Tensor, QuaternionLike, Vector3Like
from ..utils.quaternion import (
    as_quaternion,
    identity_quaternion,
    normalize_quaternion,
    quaternion_from_vector,
    quaternion_multiply,
)
from ..utils.vector import as_vector3, cross, vector_length
from .algebra import DualQuaternion, adjust

logger = logging.getLogger(__name__)


def create_rotation(angle: Angle, axis: Vector3Like, point: Vector3Like) -> DualQuaternion:
    """
    Create a pure rotation about the line through ``point`` along ``axis``.

    The line is converted to Plücker coordinates with moment = point × axis.

    Args:
        angle: Rotation angle in radians
        axis: Unit direction of the rotation axis, shape (3,)
        point: Any point on the rotation axis, shape (3,)

    Returns:
        Rotation dual quaternion
    """
    axis = as_vector3(axis, ACCUMULATOR_DTYPE)
    point = as_vector3(point, ACCUMULATOR_DTYPE)
    moment = cross(point, axis)
    return create_rotation_plucker(angle, axis, moment)


def create_rotation_plucker(angle: Angle, axis: Vector3Like, moment: Vector3Like) -> DualQuaternion:
    """
    Create a pure rotation about a line given in Plücker coordinates.

    Args:
        angle: Rotation angle in radians
        axis: Unit direction of the line, shape (3,)
        moment: Moment of the line, shape (3,)

    Returns:
        Rotation dual quaternion
    """
    axis = as_vector3(axis, ACCUMULATOR_DTYPE)
    moment = as_vector3(moment, ACCUMULATOR_DTYPE)

    half_angle = float(angle) / 2
    s = adjust(math.sin(half_angle))
    c = adjust(math.cos(half_angle))

    real = quaternion_from_vector(s * axis, c)
    dual = quaternion_from_vector(s * moment, 0.0)
    return DualQuaternion(real, dual)


def create_translation(vector: Vector3Like, *, amount: float = 1.0) -> DualQuaternion:
    """
    Create a pure translation, 1 + ε(amount·t/2).

    The vector comes first; ``amount`` is keyword-only, e.g.
    ``create_translation([0, 0, -1], amount=50.0)``.

    Args:
        vector: Translation direction (or full translation when amount is 1)
        amount: Scale applied to ``vector``

    Returns:
        Translation dual quaternion
    """
    vector = as_vector3(vector, ACCUMULATOR_DTYPE)
    real = identity_quaternion(dtype=ACCUMULATOR_DTYPE)
    dual = quaternion_from_vector(float(amount) * vector / 2.0, 0.0)
    return DualQuaternion(real, dual)


def create_rotation_matrix(rotation: Matrix3Tensor) -> DualQuaternion:
    """
    Recover a pure rotation from a 3x3 rotation matrix.

    Uses the Cayley transform B = (R - I)(R + I)⁻¹. B is skew-symmetric,

            0   -b_z   b_y
        B = b_z   0   -b_x
           -b_y  b_x    0

    with b = tan(θ/2)·axis, so the axis is b/|b| and the half angle is
    atan(|b|). A zero b gives the identity rotation.

    Args:
        rotation: Rotation matrix of shape (3, 3) in the column-vector
            convention (the convention of ``quaternion_to_matrix``)

    Returns:
        Rotation dual quaternion

    Raises:
        ValueError: If the matrix is not 3x3, or R + I is singular, which
            happens for rotations of exactly ±π
    """
    R = torch.as_tensor(rotation, dtype=ACCUMULATOR_DTYPE)
    if R.shape != (3, 3):
        raise ValueError(f"Expected rotation matrix of shape (3, 3), got {tuple(R.shape)}")

    I = torch.eye(3, dtype=ACCUMULATOR_DTYPE)
    try:
        r_plus_inv = torch.linalg.inv(R + I)
    except torch.linalg.LinAlgError as e:
        logger.warning("Cayley transform undefined: R + I is singular (rotation of ±π)")
        raise ValueError("Cannot recover a rotation of ±π with the Cayley transform") from e

    B = (R - I) @ r_plus_inv
    b = torch.stack([B[2, 1], B[0, 2], B[1, 0]])
    tz = vector_length(b)

    # Avoid normalizing zero vectors
    if tz > 0:
        b = b / tz

    half_angle = torch.atan(tz)
    real = quaternion_from_vector(torch.sin(half_angle) * b, torch.cos(half_angle))
    return DualQuaternion(real, torch.zeros(4))


def create_rotation_then_translation(
    rotation: QuaternionLike,
    translation: Vector3Like
) -> DualQuaternion:
    """
    Create the displacement that rotates by ``rotation``, then translates.

    Args:
        rotation: Rotation quaternion [x, y, z, w]; normalized first
        translation: Translation vector, shape (3,)

    Returns:
        Dual quaternion r + ε(t·r/2)
    """
    rotation = as_quaternion(rotation, ACCUMULATOR_DTYPE)
    translation = as_vector3(translation, ACCUMULATOR_DTYPE)

    factor = normalize_quaternion(rotation) * 0.5
    dual = quaternion_multiply(quaternion_from_vector(translation, 0.0), factor)
    return DualQuaternion(factor, dual)
