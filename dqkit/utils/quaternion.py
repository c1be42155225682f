"""
Quaternion operations backing the dual-quaternion algebra.

Quaternions are represented as (x, y, z, w) where w is the scalar part
and (x, y, z) is the vector part. This follows the convention:
    q = xi + yj + zk + w

All operations support batched inputs with shape (..., 4).
"""

from typing import Optional, Sequence, Union
import torch
import torch.nn.functional as F

from ..core.constants import DEFAULT_EPS_NORM


def as_quaternion(
    q: Union[torch.Tensor, Sequence[float]],
    dtype: Optional[torch.dtype] = None
) -> torch.Tensor:
    """
    Convert input to a quaternion tensor of shape (..., 4).

    Args:
        q: Tensor or sequence of four numbers as [x, y, z, w]
        dtype: Target dtype (keeps the tensor's floating dtype when None)

    Returns:
        Quaternion tensor

    Raises:
        ValueError: If the last dimension is not 4
    """
    q = torch.as_tensor(q, dtype=dtype)
    if not q.is_floating_point():
        q = q.to(torch.get_default_dtype())
    if q.dim() == 0 or q.shape[-1] != 4:
        raise ValueError(f"Expected quaternion with 4 components, got shape {tuple(q.shape)}")
    return q


def normalize_quaternion(q: torch.Tensor, eps: float = DEFAULT_EPS_NORM) -> torch.Tensor:
    """
    Normalize quaternion to unit length.

    A zero quaternion is returned unchanged.

    Args:
        q: Quaternion tensor of shape (..., 4) as [x, y, z, w]
        eps: Small constant for numerical stability

    Returns:
        Normalized quaternion of shape (..., 4)
    """
    return F.normalize(q, p=2, dim=-1, eps=eps)


def quaternion_conjugate(q: torch.Tensor) -> torch.Tensor:
    """
    Compute quaternion conjugate: q* = -xi - yj - zk + w

    Args:
        q: Quaternion tensor of shape (..., 4) as [x, y, z, w]

    Returns:
        Conjugate quaternion of shape (..., 4)
    """
    # Negate the vector part
    conj = q.clone()
    conj[..., :3] = -conj[..., :3]
    return conj


def quaternion_length_squared(q: torch.Tensor) -> torch.Tensor:
    """Squared norm |q|^2 of shape (...)."""
    return (q * q).sum(dim=-1)


def quaternion_dot(q1: torch.Tensor, q2: torch.Tensor) -> torch.Tensor:
    """Four-component dot product of shape (...)."""
    return (q1 * q2).sum(dim=-1)


def quaternion_inverse(q: torch.Tensor) -> torch.Tensor:
    """
    Compute quaternion inverse: q^{-1} = q* / |q|^2

    For unit quaternions, the inverse equals the conjugate. A zero quaternion
    has no inverse and yields non-finite components.

    Args:
        q: Quaternion tensor of shape (..., 4) as [x, y, z, w]

    Returns:
        Inverse quaternion of shape (..., 4)
    """
    conj = quaternion_conjugate(q)
    return conj / quaternion_length_squared(q).unsqueeze(-1)


def quaternion_multiply(q1: torch.Tensor, q2: torch.Tensor) -> torch.Tensor:
    """
    Compute quaternion product: q1 * q2

    Uses the Hamilton product formula with i^2 = j^2 = k^2 = ijk = -1.

    Args:
        q1: First quaternion of shape (..., 4) as [x, y, z, w]
        q2: Second quaternion of shape (..., 4) as [x, y, z, w]

    Returns:
        Product quaternion of shape (..., 4)
    """
    x1, y1, z1, w1 = q1.unbind(dim=-1)
    x2, y2, z2, w2 = q2.unbind(dim=-1)

    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2
    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2

    return torch.stack([x, y, z, w], dim=-1)


def quaternion_from_vector(
    vector: torch.Tensor,
    scalar: Union[float, torch.Tensor] = 0.0
) -> torch.Tensor:
    """
    Build a quaternion from its vector and scalar parts.

    Args:
        vector: Vector part of shape (..., 3)
        scalar: Scalar part, a number or tensor of shape (...)

    Returns:
        Quaternion of shape (..., 4) as [x, y, z, w]
    """
    w = torch.as_tensor(scalar, dtype=vector.dtype, device=vector.device)
    w = w.expand(vector.shape[:-1]).unsqueeze(-1)
    return torch.cat([vector, w], dim=-1)


def quaternion_to_matrix(q: torch.Tensor) -> torch.Tensor:
    """
    Convert unit quaternion to 3x3 rotation matrix (column-vector convention).

    Args:
        q: Unit quaternion of shape (..., 4) as [x, y, z, w]

    Returns:
        Rotation matrix of shape (..., 3, 3)
    """
    # Ensure unit quaternion
    q = normalize_quaternion(q)
    x, y, z, w = q.unbind(dim=-1)

    # Row 1
    r00 = 1 - 2 * (y * y + z * z)
    r01 = 2 * (x * y - z * w)
    r02 = 2 * (x * z + y * w)

    # Row 2
    r10 = 2 * (x * y + z * w)
    r11 = 1 - 2 * (x * x + z * z)
    r12 = 2 * (y * z - x * w)

    # Row 3
    r20 = 2 * (x * z - y * w)
    r21 = 2 * (y * z + x * w)
    r22 = 1 - 2 * (x * x + y * y)

    R = torch.stack([
        torch.stack([r00, r01, r02], dim=-1),
        torch.stack([r10, r11, r12], dim=-1),
        torch.stack([r20, r21, r22], dim=-1),
    ], dim=-2)

    return R


def quaternion_from_axis_angle(
    axis: torch.Tensor,
    angle: Union[float, torch.Tensor]
) -> torch.Tensor:
    """
    Create quaternion from axis-angle representation.

    q = sin(θ/2) * (ax*i + ay*j + az*k) + cos(θ/2)

    Args:
        axis: Rotation axis of shape (..., 3), will be normalized
        angle: Rotation angle in radians, scalar or shape (...)

    Returns:
        Unit quaternion of shape (..., 4) as [x, y, z, w]
    """
    axis = F.normalize(axis, p=2, dim=-1)
    angle = torch.as_tensor(angle, dtype=axis.dtype, device=axis.device)

    half_angle = angle / 2
    xyz = axis * torch.sin(half_angle).unsqueeze(-1)
    return quaternion_from_vector(xyz, torch.cos(half_angle))


def identity_quaternion(
    batch_size: Optional[int] = None,
    device: torch.device = None,
    dtype: torch.dtype = None
) -> torch.Tensor:
    """
    Create identity quaternion (no rotation).

    Args:
        batch_size: Number of identity quaternions, or None for a single (4,)
        device: Torch device
        dtype: Torch dtype

    Returns:
        Identity quaternion(s) of shape (4,) or (batch_size, 4)
    """
    shape = (4,) if batch_size is None else (batch_size, 4)
    q = torch.zeros(shape, device=device, dtype=dtype)
    q[..., 3] = 1.0  # w = 1, x = y = z = 0
    return q


def random_quaternion(
    batch_size: int,
    device: torch.device = None,
    dtype: torch.dtype = None,
    generator: Optional[torch.Generator] = None
) -> torch.Tensor:
    """
    Generate random unit quaternions uniformly distributed on S^3.

    Uses the Shoemake method for uniform random rotations.

    Args:
        batch_size: Number of random quaternions to generate
        device: Torch device
        dtype: Torch dtype
        generator: Optional random generator for reproducibility

    Returns:
        Random unit quaternions of shape (batch_size, 4)
    """
    u = torch.rand(batch_size, 3, device=device, dtype=dtype, generator=generator)

    u0, u1, u2 = u[:, 0], u[:, 1], u[:, 2]

    # Shoemake's method
    sqrt_1_minus_u0 = torch.sqrt(1 - u0)
    sqrt_u0 = torch.sqrt(u0)
    two_pi_u1 = 2 * torch.pi * u1
    two_pi_u2 = 2 * torch.pi * u2

    x = sqrt_1_minus_u0 * torch.cos(two_pi_u1)
    y = sqrt_u0 * torch.sin(two_pi_u2)
    z = sqrt_u0 * torch.cos(two_pi_u2)
    w = sqrt_1_minus_u0 * torch.sin(two_pi_u1)

    return torch.stack([x, y, z, w], dim=-1)


def rotate_vector(v: torch.Tensor, q: torch.Tensor) -> torch.Tensor:
    """
    Rotate a 3D vector by a quaternion.

    v' = q * v * q^{-1} (quaternion sandwich product)

    Args:
        v: Vector(s) of shape (..., 3)
        q: Unit quaternion(s) of shape (..., 4)

    Returns:
        Rotated vector(s) of shape (..., 3)
    """
    v_quat = quaternion_from_vector(v, 0.0)

    # For unit quaternions the inverse is the conjugate
    q_inv = quaternion_conjugate(q)
    result = quaternion_multiply(quaternion_multiply(q, v_quat), q_inv)

    return result[..., :3]
