"""
Dual-quaternion module.

Implements the dual-quaternion value type, its algebra, the rigid
displacement and primitive factories, and the Clifford conjugation actions
used to apply transformations.
"""

from .algebra import (
    DualQuaternion,
    adjust,
    round_coordinate,
    dot,
    normalize,
    conjugate,
    compare,
    multiply,
)

from .displacements import (
    create_rotation,
    create_rotation_plucker,
    create_translation,
    create_rotation_matrix,
    create_rotation_then_translation,
)

from .primitives import (
    create_point,
    origin_point,
    create_line,
    create_line_plucker,
    create_plane,
    get_point,
    is_point_on_plane,
)

from .transforms import (
    clifford_conjugation_f1g,
    clifford_conjugation_f2g,
    clifford_conjugation_f3g,
    clifford_conjugation_f4g,
    transform_point,
)

__all__ = [
    # Algebra
    "DualQuaternion",
    "adjust",
    "round_coordinate",
    "dot",
    "normalize",
    "conjugate",
    "compare",
    "multiply",
    # Displacements
    "create_rotation",
    "create_rotation_plucker",
    "create_translation",
    "create_rotation_matrix",
    "create_rotation_then_translation",
    # Primitives
    "create_point",
    "origin_point",
    "create_line",
    "create_line_plucker",
    "create_plane",
    "get_point",
    "is_point_on_plane",
    # Transforms
    "clifford_conjugation_f1g",
    "clifford_conjugation_f2g",
    "clifford_conjugation_f3g",
    "clifford_conjugation_f4g",
    "transform_point",
]
