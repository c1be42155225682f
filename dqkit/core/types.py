"""
Type aliases and layout conventions for dqkit.

Layout Conventions:
===================

Quaternions are tensors of shape (..., 4) in (x, y, z, w) order, so that
the scalar part sits last:

    q = x*i + y*j + z*k + w

Vectors are tensors of shape (..., 3). A dual quaternion flattens to eight
scalars in the order

    [real.x, real.y, real.z, real.w, dual.x, dual.y, dual.z, dual.w]

which is both the index order and the binary layout.

Matrices produced by ``DualQuaternion.to_matrix`` use the row-vector
convention: the rotation block is the transpose of the column-vector
rotation matrix and the translation occupies the fourth row.
"""

from typing import Sequence, Tuple, Union
import torch


# =============================================================================
# Basic Type Aliases
# =============================================================================

# Quaternion: (4,) or (..., 4) as [x, y, z, w]
QuaternionTensor = torch.Tensor

# 3-vector: (3,) or (..., 3)
Vector3Tensor = torch.Tensor

# Anything that can be turned into a 3-vector
Vector3Like = Union[torch.Tensor, Sequence[float]]

# Anything that can be turned into a quaternion
QuaternionLike = Union[torch.Tensor, Sequence[float]]

# 3x3 rotation matrix (column-vector convention)
Matrix3Tensor = torch.Tensor

# 4x4 homogeneous matrix (row-vector convention)
Matrix4Tensor = torch.Tensor

# Angles are plain radians
Angle = Union[float, torch.Tensor]

# (real, dual) squared norms
LengthPair = Tuple[float, float]
