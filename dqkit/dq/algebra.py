"""
Dual-quaternion algebra.

A dual quaternion is an ordered pair of quaternions

    Q = q + εq₀,    ε² = 0

where q (the real part) carries the rotation and q₀ (the dual part) carries
the translation, scaled and rotated. Unit dual quaternions represent proper
rigid transformations; the same eight-scalar layout also encodes points,
lines and planes (see ``dqkit.dq.primitives``).

Multiplication follows from expanding the dual numbers:

    Q * P = q*p + ε(q*p₀ + q₀*p)

and is associative but not commutative. Composing transformations reads
right to left: in ``A * B`` the transformation B is applied first.

Component ordering:
[real.x, real.y, real.z, real.w, dual.x, dual.y, dual.z, dual.w]
   0       1       2       3       4       5       6       7
"""

from __future__ import annotations
import functools
import logging
import numbers
import operator
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from ..core.constants import (
    ACCUMULATOR_DTYPE,
    FORMAT_TEMPLATE,
    NUM_COMPONENTS,
)
from ..core.types import LengthPair, Matrix4Tensor, QuaternionLike
from ..utils.config import get_config
from ..utils.quaternion import (
    as_quaternion,
    identity_quaternion,
    normalize_quaternion,
    quaternion_conjugate,
    quaternion_dot,
    quaternion_inverse,
    quaternion_length_squared,
    quaternion_multiply,
)

logger = logging.getLogger(__name__)

Scalar = Union[int, float, torch.Tensor]


# =============================================================================
# Tolerance policy
# =============================================================================

def adjust(value: Scalar, tolerance: Optional[float] = None) -> Scalar:
    """
    Snap a near-zero value to exactly zero.

    Suppresses the floating-point noise left by trigonometric evaluation and
    repeated multiplication, e.g. cos(π/2) ≈ 6e-17.

    Args:
        value: Number or tensor (applied element-wise)
        tolerance: Magnitudes strictly below this become 0. Defaults to the
            active config's ``zero_tolerance``.

    Returns:
        Value of the same kind with near-zero entries replaced by 0
    """
    if tolerance is None:
        tolerance = get_config().zero_tolerance
    if isinstance(value, torch.Tensor):
        return torch.where(value.abs() < tolerance, torch.zeros_like(value), value)
    return 0.0 if abs(value) < tolerance else value


def round_coordinate(value: Scalar, digits: Optional[int] = None) -> Scalar:
    """
    Round to a fixed number of decimal digits.

    Args:
        value: Number or tensor
        digits: Decimal digits to keep. Defaults to the active config's
            ``rounding_digits``.
    """
    if digits is None:
        digits = get_config().rounding_digits
    if isinstance(value, torch.Tensor):
        return torch.round(value, decimals=digits)
    return round(value, digits)


def _format_quaternion(q: torch.Tensor, format_spec: str = '') -> str:
    return ", ".join(format(c, format_spec) for c in q.tolist())


# =============================================================================
# Dual quaternion
# =============================================================================

class DualQuaternion:
    """
    A dual quaternion ``real + ε·dual``.

    Both parts are tensors of shape (4,) in (x, y, z, w) order, stored in the
    active config's storage dtype (float32 by default).

    Construction from two quaternions normalizes the real part to unit length
    (a zero real part stays zero); the dual part is stored as given. Use
    :meth:`from_values` to set all eight components verbatim.

    The type behaves as a value: operators and factories return new
    instances. The trailing-underscore methods (``conjugate_``, ``invert_``,
    ``adjust_``) and item assignment mutate the receiver in place; call
    :meth:`copy` first when the original is still needed.
    """

    # NumPy scalars on the left defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __init__(self, real: QuaternionLike, dual: QuaternionLike):
        """
        Initialize a dual quaternion from its real and dual quaternions.

        Args:
            real: Real quaternion [x, y, z, w]; normalized on construction
            dual: Dual quaternion [x, y, z, w]; stored unmodified
        """
        dtype = get_config().storage_dtype
        self.real = normalize_quaternion(self._check_part(as_quaternion(real, dtype)))
        self.dual = self._check_part(as_quaternion(dual, dtype)).clone()

    @staticmethod
    def _check_part(q: torch.Tensor) -> torch.Tensor:
        if q.shape != (4,):
            raise ValueError(f"Expected a single quaternion of shape (4,), got {tuple(q.shape)}")
        return q

    @classmethod
    def _from_parts(cls, real: torch.Tensor, dual: torch.Tensor) -> 'DualQuaternion':
        """Wrap two tensors without normalization or copying."""
        result = cls.__new__(cls)
        result.real = real
        result.dual = dual
        return result

    @classmethod
    def from_values(cls, values: Sequence[float]) -> 'DualQuaternion':
        """
        Create a dual quaternion from eight scalars, taken verbatim.

        Args:
            values: [real.x, real.y, real.z, real.w, dual.x, dual.y, dual.z, dual.w]

        Raises:
            ValueError: If values is None or does not hold exactly eight numbers
        """
        if values is None:
            raise ValueError("values must be a sequence of eight numbers, got None")
        components = torch.as_tensor(values, dtype=get_config().storage_dtype)
        if components.shape != (NUM_COMPONENTS,):
            raise ValueError(
                f"There must be exactly eight values for a DualQuaternion, "
                f"got shape {tuple(components.shape)}"
            )
        return cls._from_parts(components[:4].clone(), components[4:].clone())

    @classmethod
    def zero(cls) -> 'DualQuaternion':
        """All eight components zero. Not a valid transformation."""
        dtype = get_config().storage_dtype
        return cls._from_parts(torch.zeros(4, dtype=dtype), torch.zeros(4, dtype=dtype))

    @classmethod
    def identity(cls) -> 'DualQuaternion':
        """Identity rotation with zero dual part: the identity transformation."""
        dtype = get_config().storage_dtype
        return cls._from_parts(identity_quaternion(dtype=dtype), torch.zeros(4, dtype=dtype))

    # === Properties ===

    @property
    def dtype(self) -> torch.dtype:
        return self.real.dtype

    @property
    def rotation(self) -> torch.Tensor:
        """The rotation quaternion (a copy of the real part)."""
        return self.real.clone()

    @property
    def translation(self) -> torch.Tensor:
        """
        Translation vector of shape (3,).

        Recovered as the vector part of 2 * dual * conj(real).
        """
        t = quaternion_multiply(self.dual * 2.0, quaternion_conjugate(self.real))
        return t[:3]

    @property
    def length(self) -> float:
        """
        Squared norm of the real part, ``dot(self, self)``.

        Note this is |real|², not |real|; ``normalize`` depends on it.
        """
        return dot(self, self)

    @property
    def is_unit(self) -> bool:
        """
        Whether |real|² = 1 and real · dual = 0, within the zero tolerance.
        """
        tolerance = get_config().zero_tolerance
        real_length_squared, _ = self.length_squared()
        orthogonality = float(quaternion_dot(self.real, self.dual))
        return abs(real_length_squared - 1) <= tolerance and abs(orthogonality) <= tolerance

    def length_squared(self) -> LengthPair:
        """Return (|real|², |dual|²)."""
        return (
            float(quaternion_length_squared(self.real)),
            float(quaternion_length_squared(self.dual)),
        )

    # === Component access ===

    def _locate(self, index) -> Tuple[torch.Tensor, int]:
        index = operator.index(index)
        if not 0 <= index < NUM_COMPONENTS:
            raise IndexError(
                f"Indices for DualQuaternion run from 0 to 7, inclusive, got {index}"
            )
        if index < 4:
            return self.real, index
        return self.dual, index - 4

    def __getitem__(self, index: int) -> float:
        part, offset = self._locate(index)
        return float(part[offset])

    def __setitem__(self, index: int, value: float) -> None:
        part, offset = self._locate(index)
        part[offset] = value

    def __len__(self) -> int:
        return NUM_COMPONENTS

    def __iter__(self) -> Iterator[float]:
        return iter(self.tolist())

    def tolist(self) -> List[float]:
        """The eight components as Python floats."""
        return self.real.tolist() + self.dual.tolist()

    def to_tensor(self) -> torch.Tensor:
        """The eight components as a tensor of shape (8,)."""
        return torch.cat([self.real, self.dual])

    def to_numpy(self) -> np.ndarray:
        """The eight components as a NumPy array of shape (8,)."""
        return self.to_tensor().detach().cpu().numpy()

    def copy(self) -> 'DualQuaternion':
        """Create an independent copy."""
        return self._from_parts(self.real.clone(), self.dual.clone())

    # === Unary operations ===

    def conjugate(self) -> 'DualQuaternion':
        """
        Quaternion conjugate of both parts: (q*, q₀*).

        This is not the dual-number conjugate (q, -q₀).
        """
        return self._from_parts(quaternion_conjugate(self.real), quaternion_conjugate(self.dual))

    def conjugate_(self) -> 'DualQuaternion':
        """In-place :meth:`conjugate`."""
        self.real[:3] = -self.real[:3]
        self.dual[:3] = -self.dual[:3]
        return self

    def inverse(self) -> 'DualQuaternion':
        """
        Multiplicative inverse: Q * Q⁻¹ = Q⁻¹ * Q = 1.

        Computed as Q⁻¹ = q⁻¹ - ε q⁻¹ q₀ q⁻¹, with every component passed
        through :func:`adjust`. For a unit dual quaternion this equals
        :meth:`conjugate`. A zero real part yields non-finite components.
        """
        return self.copy().invert_()

    def invert_(self) -> 'DualQuaternion':
        """In-place :meth:`inverse`."""
        real_inverse = quaternion_inverse(self.real)
        dual_inverse = -quaternion_multiply(quaternion_multiply(real_inverse, self.dual), real_inverse)
        self.real = adjust(real_inverse)
        self.dual = adjust(dual_inverse)
        return self

    def adjusted(self) -> 'DualQuaternion':
        """Copy with near-zero components snapped to zero."""
        return self._from_parts(adjust(self.real), adjust(self.dual))

    def adjust_(self) -> 'DualQuaternion':
        """In-place :meth:`adjusted`."""
        self.real = adjust(self.real)
        self.dual = adjust(self.dual)
        return self

    def normalize(self) -> 'DualQuaternion':
        """
        Scale by 1 / :attr:`length`.

        The scale factor goes through :func:`adjust` and the result is built
        with the normalizing constructor, so the real part comes out unit
        length. There is no zero check: a zero real part gives non-finite
        components.
        """
        scale = adjust(torch.reciprocal(quaternion_dot(self.real, self.real)))
        return DualQuaternion(self.real * scale, self.dual * scale)

    def __neg__(self) -> 'DualQuaternion':
        return self._from_parts(-self.real, -self.dual)

    # === Binary operations ===

    def __add__(self, other: 'DualQuaternion') -> 'DualQuaternion':
        if not isinstance(other, DualQuaternion):
            return NotImplemented
        return self._from_parts(self.real + other.real, self.dual + other.dual)

    def __sub__(self, other: 'DualQuaternion') -> 'DualQuaternion':
        if not isinstance(other, DualQuaternion):
            return NotImplemented
        return self._from_parts(self.real - other.real, self.dual - other.dual)

    def __mul__(self, other: Union['DualQuaternion', Scalar]) -> 'DualQuaternion':
        """Dual-quaternion product, or scaling by a number."""
        if isinstance(other, DualQuaternion):
            q, q0 = self.real, self.dual
            p, p0 = other.real, other.dual
            return self._from_parts(
                quaternion_multiply(q, p),
                quaternion_multiply(q, p0) + quaternion_multiply(q0, p),
            )
        if isinstance(other, numbers.Real):
            other = float(other)
        if isinstance(other, float) or (isinstance(other, torch.Tensor) and other.dim() == 0):
            return self._from_parts(self.real * other, self.dual * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> 'DualQuaternion':
        """Scaling by a number on the left."""
        if isinstance(other, DualQuaternion):
            return NotImplemented
        return self.__mul__(other)

    def __eq__(self, other: object) -> bool:
        """Exact component-wise equality; see :func:`compare` for tolerance."""
        if not isinstance(other, DualQuaternion):
            return NotImplemented
        return self.tolist() == other.tolist()

    # === Chained composition ===

    @staticmethod
    def multiply(*values: 'DualQuaternion') -> 'DualQuaternion':
        """
        Compose transformations right to left in one pass.

        ``multiply(a, b, c)`` equals ``a * (b * c)``: the rightmost argument
        is applied first. The fold runs in float64 and the result is cast to
        the widest input dtype only once at the end, which keeps long
        kinematic chains free of intermediate rounding.

        Args:
            *values: One or more dual quaternions

        Returns:
            The composed dual quaternion

        Raises:
            ValueError: If no values are given
        """
        if not values:
            raise ValueError("Must define one or more transformations")
        logger.debug(f"Composing chain of {len(values)} dual quaternions")

        dtype = functools.reduce(torch.promote_types, (v.real.dtype for v in values))
        real = values[-1].real.to(ACCUMULATOR_DTYPE, copy=True)
        dual = values[-1].dual.to(ACCUMULATOR_DTYPE, copy=True)

        for value in reversed(values[:-1]):
            q = value.real.to(ACCUMULATOR_DTYPE)
            q0 = value.dual.to(ACCUMULATOR_DTYPE)
            # Q * P = q*p + ε(q*p0 + q0*p), with P the running product
            real, dual = (
                quaternion_multiply(q, real),
                quaternion_multiply(q, dual) + quaternion_multiply(q0, real),
            )

        return DualQuaternion._from_parts(real.to(dtype), dual.to(dtype))

    # === Conversions ===

    def to_matrix(self) -> Matrix4Tensor:
        """
        Convert to a 4x4 homogeneous matrix in the row-vector convention.

        The dual quaternion is normalized first. The upper 3x3 block holds the
        transpose of the column-vector rotation matrix and the translation is
        placed in the fourth row.

        Returns:
            Matrix of shape (4, 4)
        """
        q = self.normalize()
        x, y, z, w = q.real.unbind(dim=-1)

        # Extract rotational information
        M = torch.eye(4, dtype=q.dtype)
        M[0, 0] = w * w + x * x - y * y - z * z
        M[0, 1] = 2 * x * y + 2 * w * z
        M[0, 2] = 2 * x * z - 2 * w * y
        M[1, 0] = 2 * x * y - 2 * w * z
        M[1, 1] = w * w + y * y - x * x - z * z
        M[1, 2] = 2 * y * z + 2 * w * x
        M[2, 0] = 2 * x * z + 2 * w * y
        M[2, 1] = 2 * y * z - 2 * w * x
        M[2, 2] = w * w + z * z - x * x - y * y

        # Extract translation information
        M[3, :3] = q.translation
        return M

    # === Formatting ===

    def __str__(self) -> str:
        return FORMAT_TEMPLATE.format(_format_quaternion(self.real), _format_quaternion(self.dual))

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return FORMAT_TEMPLATE.format(
            _format_quaternion(self.real, format_spec),
            _format_quaternion(self.dual, format_spec),
        )

    def __repr__(self) -> str:
        return f"DualQuaternion(real={self.real.tolist()}, dual={self.dual.tolist()})"


# =============================================================================
# Functional API
# =============================================================================

multiply = DualQuaternion.multiply


def dot(left: DualQuaternion, right: DualQuaternion) -> float:
    """
    Dot product of the two real parts.

    The dual parts do not contribute; this is the length proxy used by
    :attr:`DualQuaternion.length`.
    """
    return float(quaternion_dot(left.real, right.real))


def normalize(value: DualQuaternion) -> DualQuaternion:
    """Functional form of :meth:`DualQuaternion.normalize`."""
    return value.normalize()


def conjugate(value: DualQuaternion) -> DualQuaternion:
    """Functional form of :meth:`DualQuaternion.conjugate`."""
    return value.conjugate()


def compare(
    left: DualQuaternion,
    right: DualQuaternion,
    precision: Optional[float] = None
) -> int:
    """
    Count mismatching components, up to the sign of the whole value.

    Q and -Q encode the same transformation, so components are compared both
    directly (|l - r|) and against the negation (|l + r|). The smaller number
    of components exceeding ``precision`` is returned; 0 means equal up to
    sign.

    Args:
        left: First dual quaternion
        right: Second dual quaternion
        precision: Per-component tolerance. Defaults to the active config's
            ``compare_precision``.

    Returns:
        Mismatch count in 0..8
    """
    if precision is None:
        precision = get_config().compare_precision

    l = left.to_tensor().to(ACCUMULATOR_DTYPE)
    r = right.to_tensor().to(ACCUMULATOR_DTYPE)

    direct = int(((l - r).abs() > precision).sum())
    flipped = int(((l + r).abs() > precision).sum())
    return min(direct, flipped)
