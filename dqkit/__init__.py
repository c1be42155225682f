"""
dqkit: Dual-quaternion algebra for rigid transformations

A PyTorch library for representing rigid spatial transformations, points,
lines and planes as dual quaternions, and for composing, inverting and
applying them.

Key Features:
- Dual-quaternion value type with the full algebra (+, -, *, scaling)
- Rotation, translation, Plücker line, point and plane factories
- Clifford conjugation actions (F1G..F4G) for applying transformations
- Chained composition for long kinematic chains, accumulated in float64
- Sign-agnostic tolerant comparison and near-zero snapping
- 32-byte binary record layout

Conventions:
- Quaternions are (x, y, z, w)
- Composition reads right to left: in A * B, B is applied first
- Angles are in radians

Example:
    >>> import math
    >>> from dqkit import create_rotation, create_translation, transform_point
    >>> r = create_rotation(math.pi / 2, [0, 0, 1], [0, 0, 0])
    >>> t = create_translation([5, 0, 0])
    >>> transform_point(r * t)
    tensor([0., 5., 0.])
"""

__version__ = "0.1.0"
__author__ = "dqkit Contributors"

from . import core
from . import utils
from . import dq
from . import data

from .dq import (
    DualQuaternion,
    compare,
    multiply,
    create_rotation,
    create_rotation_plucker,
    create_translation,
    create_rotation_matrix,
    create_rotation_then_translation,
    create_point,
    create_line,
    create_line_plucker,
    create_plane,
    transform_point,
)

__all__ = [
    "core",
    "utils",
    "dq",
    "data",
    "DualQuaternion",
    "compare",
    "multiply",
    "create_rotation",
    "create_rotation_plucker",
    "create_translation",
    "create_rotation_matrix",
    "create_rotation_then_translation",
    "create_point",
    "create_line",
    "create_line_plucker",
    "create_plane",
    "transform_point",
]
