"""
3-vector helpers used by the dual-quaternion factories.
"""

from typing import Optional, Sequence, Union
import torch


def as_vector3(
    v: Union[torch.Tensor, Sequence[float]],
    dtype: Optional[torch.dtype] = None
) -> torch.Tensor:
    """
    Convert input to a 3-vector tensor of shape (..., 3).

    Args:
        v: Tensor or sequence of three numbers
        dtype: Target dtype (keeps the tensor's floating dtype when None)

    Returns:
        Vector tensor

    Raises:
        ValueError: If the last dimension is not 3
    """
    v = torch.as_tensor(v, dtype=dtype)
    if not v.is_floating_point():
        v = v.to(torch.get_default_dtype())
    if v.dim() == 0 or v.shape[-1] != 3:
        raise ValueError(f"Expected 3-vector, got shape {tuple(v.shape)}")
    return v


def cross(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Cross product a × b over the last dimension."""
    a, b = torch.broadcast_tensors(a, b)
    return torch.linalg.cross(a, b, dim=-1)


def vector_length(v: torch.Tensor) -> torch.Tensor:
    """Euclidean length of shape (...)."""
    return torch.linalg.vector_norm(v, dim=-1)
