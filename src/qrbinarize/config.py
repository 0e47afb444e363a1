"""
QrBinarize - Configuration Module

This module contains the configuration constants, paths and the binarizer
configuration dataclass used by the package.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Final

from qrbinarize.constants import (
    DEFAULT_MEAN_BIAS,
    DEFAULT_SAMPLE_STRIDE,
    DEFAULT_WINDOW_RADIUS,
    MAX_LUMINANCE,
)
from qrbinarize.utils.exceptions import ConfigurationError

if TYPE_CHECKING:
    from qrbinarize.utils.config_manager import ConfigManager

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "QrBinarize"
APP_VERSION: Final[str] = "1.0.0"

# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/qrbinarize")
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")

# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "qrbinarize"

# ============================================================================
# Binarizer Selection
# ============================================================================

DEFAULT_METHOD: Final[str] = "global_histogram"


@dataclass
class BinarizerConfig:
    """Configuration shared by every binarizer created from it.

    Attributes:
        method: Registered binarizer name (see binarizer.create_binarizer)
        window_radius: Half-width of the adaptive sampling window
        sample_stride: Step between sampled pixels inside the window
        mean_bias: Constant subtracted from the local mean
        inverted: Binarize the inverted luminance (light codes on dark)
    """

    method: str = DEFAULT_METHOD
    window_radius: int = DEFAULT_WINDOW_RADIUS
    sample_stride: int = DEFAULT_SAMPLE_STRIDE
    mean_bias: int = DEFAULT_MEAN_BIAS
    inverted: bool = False

    def __post_init__(self) -> None:
        if self.window_radius < 0:
            raise ConfigurationError("window_radius", "must not be negative")
        if self.sample_stride < 1:
            raise ConfigurationError("sample_stride", "must be at least 1")
        if not -MAX_LUMINANCE <= self.mean_bias <= MAX_LUMINANCE:
            raise ConfigurationError("mean_bias", f"must be within ±{MAX_LUMINANCE}")

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a JSON-friendly dictionary."""
        return asdict(self)

    @classmethod
    def from_manager(cls, manager: ConfigManager, **overrides: Any) -> BinarizerConfig:
        """Build a configuration from the "binarizer" settings section.

        Args:
            manager: Loaded settings
            **overrides: Values taking precedence over the stored ones;
                None values are ignored

        Returns:
            A validated BinarizerConfig
        """
        values: dict[str, Any] = {}
        for name, default in cls().to_dict().items():
            values[name] = manager.get(f"binarizer.{name}", default)

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(
                method=str(values["method"]),
                window_radius=int(values["window_radius"]),
                sample_stride=int(values["sample_stride"]),
                mean_bias=int(values["mean_bias"]),
                inverted=bool(values["inverted"]),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError("binarizer", str(e)) from e
