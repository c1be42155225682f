"""
Configuration management for dqkit.

Provides the numeric policy (zero tolerance, rounding, comparison precision
and storage width) as a dataclass, JSON persistence, and the process-wide
active configuration consulted by the algebra.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Any
from pathlib import Path

import torch

from ..core.constants import ZERO_TOLERANCE, ROUNDING_DIGITS, DEFAULT_DTYPE

logger = logging.getLogger(__name__)

_DTYPES = {
    'float32': torch.float32,
    'float64': torch.float64,
}
_DTYPE_NAMES = {v: k for k, v in _DTYPES.items()}


@dataclass
class Config:
    """
    Numeric policy for dual-quaternion computations.

    Attributes:
        zero_tolerance: Magnitudes below this are snapped to zero by ``adjust``
        rounding_digits: Decimal digits kept when rounding point coordinates
        compare_precision: Default per-component precision for ``compare``
        dtype: Storage dtype name for new dual quaternions ('float32', 'float64')
    """

    zero_tolerance: float = ZERO_TOLERANCE
    rounding_digits: int = ROUNDING_DIGITS
    compare_precision: float = ZERO_TOLERANCE
    dtype: str = _DTYPE_NAMES[DEFAULT_DTYPE]

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def storage_dtype(self) -> torch.dtype:
        """Torch dtype matching ``dtype``."""
        try:
            return _DTYPES[self.dtype]
        except KeyError:
            raise ValueError(
                f"Unsupported dtype '{self.dtype}', expected one of {sorted(_DTYPES)}"
            ) from None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        # Extract known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra.update(extra_kwargs)
        # Fail early on a bad dtype name
        config.storage_dtype
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)


_active_config = Config()


def get_config() -> Config:
    """Return the active configuration."""
    return _active_config


def set_config(config: Config) -> Config:
    """
    Replace the active configuration.

    Args:
        config: New configuration

    Returns:
        The previously active configuration, so callers can restore it
    """
    global _active_config
    previous = _active_config
    _active_config = config
    logger.debug(f"Active config set to {config}")
    return previous


def load_config(filepath: str) -> Config:
    """
    Load configuration from JSON file.

    Args:
        filepath: Path to JSON config file

    Returns:
        Config object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        config_dict = json.load(f)
    return Config.from_dict(config_dict)


def save_config(config: Config, filepath: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Config object to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
