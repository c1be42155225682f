"""
Geometric primitives encoded as dual quaternions.

The eight-scalar layout is interpreted by convention, not by type:
- Points: real = (0, 0, 0, 1), dual = (x, y, z, 0)
- Lines: real = (direction, 0), dual = (moment, 0) (Plücker coordinates)
- Planes: real = (normal, 0), dual = (0, 0, 0, d) with d the signed distance
  from the origin

Points are moved with the F4G action, lines with F2G
(see ``dqkit.dq.transforms``).
"""

from __future__ import annotations

import torch

from ..core.constants import ACCUMULATOR_DTYPE
from ..core.types import Vector3Like, Vector3Tensor
from ..utils.config import get_config
from ..utils.quaternion import identity_quaternion, quaternion_from_vector
from ..utils.vector import as_vector3, cross, vector_length
from .algebra import DualQuaternion, round_coordinate


def create_point(point: Vector3Like) -> DualQuaternion:
    """
    Create a point.

    Args:
        point: Cartesian coordinates, shape (3,)

    Returns:
        Dual quaternion (0, 0, 0, 1) + ε(x, y, z, 0)
    """
    point = as_vector3(point, ACCUMULATOR_DTYPE)
    return DualQuaternion(
        identity_quaternion(dtype=ACCUMULATOR_DTYPE),
        quaternion_from_vector(point, 0.0),
    )


def origin_point() -> DualQuaternion:
    """The point (0, 0, 0)."""
    return create_point([0.0, 0.0, 0.0])


def create_line(vector: Vector3Like, point: Vector3Like) -> DualQuaternion:
    """
    Create a line from a direction and a point on it.

    Args:
        vector: Line direction, shape (3,)
        point: Any point on the line, shape (3,)

    Returns:
        Line dual quaternion with moment = point × vector
    """
    vector = as_vector3(vector, ACCUMULATOR_DTYPE)
    point = as_vector3(point, ACCUMULATOR_DTYPE)
    return create_line_plucker(vector, cross(point, vector))


def create_line_plucker(vector: Vector3Like, moment: Vector3Like) -> DualQuaternion:
    """
    Create a line from Plücker coordinates.

    The constructor normalizes the real part, so the stored direction has
    unit length while the moment is kept as given.

    Args:
        vector: Line direction, shape (3,)
        moment: Line moment, shape (3,)

    Returns:
        Dual quaternion (vector, 0) + ε(moment, 0)
    """
    vector = as_vector3(vector, ACCUMULATOR_DTYPE)
    moment = as_vector3(moment, ACCUMULATOR_DTYPE)
    return DualQuaternion(
        quaternion_from_vector(vector, 0.0),
        quaternion_from_vector(moment, 0.0),
    )


def create_plane(normal: Vector3Like, distance: float) -> DualQuaternion:
    """
    Create the plane of points p with n · p = distance.

    The normal need not be unit length. The stored normal is normalized and
    the stored distance is divided by the same length, so the plane itself
    is unchanged.

    Args:
        normal: Plane normal, shape (3,)
        distance: Right-hand side of n · p = distance

    Returns:
        Dual quaternion (n̂, 0) + ε(0, 0, 0, distance / |n|)
    """
    normal = as_vector3(normal, ACCUMULATOR_DTYPE)
    length = vector_length(normal).item()
    dual = torch.zeros(4, dtype=ACCUMULATOR_DTYPE)
    dual[3] = float(distance) / length if length > 0.0 else float(distance)
    return DualQuaternion(quaternion_from_vector(normal, 0.0), dual)


def get_point(value: DualQuaternion, round: bool = False) -> Vector3Tensor:
    """
    Read the point coordinates of a dual quaternion.

    Args:
        value: Dual quaternion interpreted as a point
        round: Round each coordinate to the configured number of digits

    Returns:
        Coordinates (dual.x, dual.y, dual.z), shape (3,)
    """
    result = value.dual[:3].clone()
    if round:
        result = round_coordinate(result)
    return result


def is_point_on_plane(point: DualQuaternion, plane: DualQuaternion) -> bool:
    """
    Test whether a point lies on a plane, within the zero tolerance.

    Args:
        point: Point dual quaternion (see :func:`create_point`)
        plane: Plane dual quaternion (see :func:`create_plane`)

    Returns:
        True when |n · p - d| is below the zero tolerance
    """
    normal = plane.real[:3].to(ACCUMULATOR_DTYPE)
    coordinates = point.dual[:3].to(ACCUMULATOR_DTYPE)
    residual = torch.dot(normal, coordinates) - float(plane.dual[3])
    return bool(residual.abs() < get_config().zero_tolerance)
