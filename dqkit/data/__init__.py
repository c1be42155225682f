"""
Data module for dqkit.

Binary (de)serialization of dual quaternions.
"""

from .serialization import (
    RECORD_SIZE,
    to_bytes,
    from_bytes,
    write_dual_quaternion,
    read_dual_quaternion,
    save_dual_quaternions,
    load_dual_quaternions,
)

__all__ = [
    "RECORD_SIZE",
    "to_bytes",
    "from_bytes",
    "write_dual_quaternion",
    "read_dual_quaternion",
    "save_dual_quaternions",
    "load_dual_quaternions",
]
