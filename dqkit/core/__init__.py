"""
Core module for dqkit.

Contains:
- Constants: Centralized default values, tolerances and component layout
- Types: Type aliases for quaternion, vector and matrix tensors
"""

from .constants import (
    # Numeric constants
    ZERO_TOLERANCE,
    ROUNDING_DIGITS,
    DEFAULT_EPS_NORM,
    DEFAULT_DTYPE,
    ACCUMULATOR_DTYPE,
    # Layout
    NUM_COMPONENTS,
    # Formatting
    FORMAT_TEMPLATE,
)

from .types import (
    QuaternionTensor,
    Vector3Tensor,
    Vector3Like,
    QuaternionLike,
    Matrix3Tensor,
    Matrix4Tensor,
    Angle,
    LengthPair,
)

__all__ = [
    # Constants
    "ZERO_TOLERANCE",
    "ROUNDING_DIGITS",
    "DEFAULT_EPS_NORM",
    "DEFAULT_DTYPE",
    "ACCUMULATOR_DTYPE",
    "NUM_COMPONENTS",
    "FORMAT_TEMPLATE",
    # Types
    "QuaternionTensor",
    "Vector3Tensor",
    "Vector3Like",
    "QuaternionLike",
    "Matrix3Tensor",
    "Matrix4Tensor",
    "Angle",
    "LengthPair",
]
