"""
Clifford conjugation actions of a transformation on a dual quaternion.

Each action sandwiches the operand B between the transformation A and a
partial conjugate ("star") of A. The star decides which kind of primitive
the action is meant for:

    F1G:  A * B * A
    F2G:  A * B * A*              full quaternion conjugate (lines)
    F3G:  A * B * (a, -a₀)        dual part negated
    F4G:  A * B * (a*, -ā₀)       real conjugated, dual w negated (points)

In F4G, a* = (-a.x, -a.y, -a.z, a.w) and -ā₀ = (a₀.x, a₀.y, a₀.z, -a₀.w).
"""

from __future__ import annotations
from typing import Optional

from ..core.types import Vector3Like, Vector3Tensor
from ..utils.quaternion import quaternion_conjugate
from .algebra import DualQuaternion
from .primitives import create_point, get_point


def clifford_conjugation_f1g(
    transformation: DualQuaternion,
    value: DualQuaternion
) -> DualQuaternion:
    """Apply A * B * A."""
    return (transformation * value) * transformation


def clifford_conjugation_f2g(
    transformation: DualQuaternion,
    value: DualQuaternion
) -> DualQuaternion:
    """Apply A * B * A* using the full conjugate of A. Used for lines."""
    return (transformation * value) * transformation.conjugate()


def clifford_conjugation_f3g(
    transformation: DualQuaternion,
    value: DualQuaternion
) -> DualQuaternion:
    """Apply A * B * (a, -a₀), keeping the real part and negating the dual part."""
    star = DualQuaternion._from_parts(transformation.real.clone(), -transformation.dual)
    return (transformation * value) * star


def clifford_conjugation_f4g(
    transformation: DualQuaternion,
    value: DualQuaternion,
    adjust: bool = False
) -> DualQuaternion:
    """
    Apply the point action A * B * (a*, -ā₀).

    Args:
        transformation: Transformation A
        value: Operand B, usually a point
        adjust: Snap near-zero components of the result to zero, cleaning up
            drift after repeated multiplication

    Returns:
        Transformed dual quaternion
    """
    star_dual = transformation.dual.clone()
    star_dual[3] = -star_dual[3]
    star = DualQuaternion._from_parts(quaternion_conjugate(transformation.real), star_dual)

    result = (transformation * value) * star
    if adjust:
        result.adjust_()
    return result


def transform_point(
    transformation: DualQuaternion,
    point: Optional[Vector3Like] = None,
    round: bool = True,
    adjust: Optional[bool] = None
) -> Vector3Tensor:
    """
    Move a point with a transformation.

    The point is lifted with ``create_point``, moved with the F4G action and
    read back from the dual part. Without a point, the origin is used, which
    gives where the transformation sends the origin (e.g. the end effector
    of a forward-kinematics chain).

    Args:
        transformation: Transformation to apply
        point: Cartesian coordinates, shape (3,); defaults to the origin
        round: Round the coordinates to the configured number of digits
        adjust: Snap near-zero components after the action; defaults to ``round``

    Returns:
        Transformed coordinates, shape (3,)
    """
    if point is None:
        point = [0.0, 0.0, 0.0]
    if adjust is None:
        adjust = round

    lifted = create_point(point)
    moved = clifford_conjugation_f4g(transformation, lifted, adjust=adjust)
    return get_point(moved, round=round)
