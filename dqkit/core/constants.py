"""
Centralized constants for dqkit.

This module defines the default values and numeric constants used throughout
the library. The active :class:`~dqkit.utils.config.Config` starts from these
values, so changing a default here changes it everywhere.

Usage:
    from dqkit.core.constants import ZERO_TOLERANCE, ROUNDING_DIGITS

    def my_function(tolerance: float = ZERO_TOLERANCE):
        ...
"""

import torch

# =============================================================================
# Numeric Constants
# =============================================================================

# Magnitudes below this are snapped to exactly zero
ZERO_TOLERANCE: float = 1e-6

# Decimal digits kept when point coordinates are rounded
ROUNDING_DIGITS: int = 3

# Epsilon for quaternion normalization (zero quaternions stay zero)
DEFAULT_EPS_NORM: float = 1e-12

# Storage width of the eight components (matches the 4-byte binary layout)
DEFAULT_DTYPE: torch.dtype = torch.float32

# Accumulator width for chained composition
ACCUMULATOR_DTYPE: torch.dtype = torch.float64


# =============================================================================
# Component Layout
# =============================================================================

# Number of scalars in a dual quaternion
NUM_COMPONENTS: int = 8


# =============================================================================
# Formatting
# =============================================================================

FORMAT_TEMPLATE: str = "({0}) + ε({1})"
