"""
Utility functions for dqkit.

Includes quaternion operations, 3-vector helpers and configuration management.
"""

from .quaternion import (
    as_quaternion,
    normalize_quaternion,
    quaternion_conjugate,
    quaternion_length_squared,
    quaternion_dot,
    quaternion_inverse,
    quaternion_multiply,
    quaternion_from_vector,
    quaternion_to_matrix,
    quaternion_from_axis_angle,
    identity_quaternion,
    random_quaternion,
    rotate_vector,
)

from .vector import (
    as_vector3,
    cross,
    vector_length,
)

from .config import (
    Config,
    get_config,
    set_config,
    load_config,
    save_config,
)

__all__ = [
    # Quaternion
    "as_quaternion",
    "normalize_quaternion",
    "quaternion_conjugate",
    "quaternion_length_squared",
    "quaternion_dot",
    "quaternion_inverse",
    "quaternion_multiply",
    "quaternion_from_vector",
    "quaternion_to_matrix",
    "quaternion_from_axis_angle",
    "identity_quaternion",
    "random_quaternion",
    "rotate_vector",
    # Vector
    "as_vector3",
    "cross",
    "vector_length",
    # Config
    "Config",
    "get_config",
    "set_config",
    "load_config",
    "save_config",
]
