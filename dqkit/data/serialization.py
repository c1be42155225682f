"""
Binary persistence for dual quaternions.

A record is eight little-endian IEEE-754 float32 values, 32 bytes in total,
in the order

    real.x, real.y, real.z, real.w, dual.x, dual.y, dual.z, dual.w

with no padding and no length prefix. Files hold records back to back.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, List, Union

import numpy as np

from ..core.constants import NUM_COMPONENTS
from ..dq.algebra import DualQuaternion

logger = logging.getLogger(__name__)

RECORD_DTYPE = np.dtype('<f4')
RECORD_SIZE: int = NUM_COMPONENTS * RECORD_DTYPE.itemsize


def to_bytes(value: DualQuaternion) -> bytes:
    """Encode one dual quaternion as a 32-byte record."""
    return value.to_numpy().astype(RECORD_DTYPE).tobytes()


def from_bytes(buffer: bytes) -> DualQuaternion:
    """
    Decode one 32-byte record.

    Args:
        buffer: Exactly one record

    Returns:
        Dual quaternion with the eight stored components, taken verbatim

    Raises:
        ValueError: If the buffer is not exactly one record long
    """
    if len(buffer) != RECORD_SIZE:
        raise ValueError(f"Expected {RECORD_SIZE} bytes, got {len(buffer)}")
    components = np.frombuffer(buffer, dtype=RECORD_DTYPE)
    return DualQuaternion.from_values(components.tolist())


def write_dual_quaternion(stream: BinaryIO, value: DualQuaternion) -> None:
    """Write one record to a binary stream."""
    stream.write(to_bytes(value))


def read_dual_quaternion(stream: BinaryIO) -> DualQuaternion:
    """
    Read one record from a binary stream.

    Raises:
        EOFError: If the stream ends before a full record
    """
    buffer = stream.read(RECORD_SIZE)
    if len(buffer) < RECORD_SIZE:
        raise EOFError(f"Expected {RECORD_SIZE} bytes, stream ended after {len(buffer)}")
    return from_bytes(buffer)


def save_dual_quaternions(
    filepath: Union[str, Path],
    values: Iterable[DualQuaternion]
) -> int:
    """
    Save dual quaternions as consecutive records.

    Args:
        filepath: Output file path
        values: Dual quaternions to write

    Returns:
        Number of records written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(filepath, 'wb') as f:
        for value in values:
            write_dual_quaternion(f, value)
            count += 1

    logger.info(f"Saved {count} dual quaternions to {filepath}")
    return count


def load_dual_quaternions(filepath: Union[str, Path]) -> List[DualQuaternion]:
    """
    Load every record of a file written by :func:`save_dual_quaternions`.

    Args:
        filepath: Input file path

    Returns:
        Dual quaternions in file order

    Raises:
        ValueError: If the file size is not a whole number of records
    """
    filepath = Path(filepath)
    data = filepath.read_bytes()
    if len(data) % RECORD_SIZE:
        raise ValueError(
            f"{filepath} holds {len(data)} bytes, not a multiple of the {RECORD_SIZE}-byte record"
        )

    records = np.frombuffer(data, dtype=RECORD_DTYPE).reshape(-1, NUM_COMPONENTS)
    values = [DualQuaternion.from_values(record.tolist()) for record in records]

    logger.info(f"Loaded {len(values)} dual quaternions from {filepath}")
    return values
