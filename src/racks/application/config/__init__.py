"""Layout file loading and validation.

Public API:
    - LayoutConfiguration: Root file model
    - RackConfig, DeviceTypeConfig, PlacedDeviceConfig, LayoutSettingsConfig
    - load_layout_file: Load a layout from a JSON file
    - load_layout_from_dict: Load a layout from a dictionary
    - ConfigError: Exception for load failures
    - config_to_layout / layout_to_config: Convert to and from domain entities
    - validate_layout: Audit a domain layout

Example:
    >>> from pathlib import Path
    >>> from racks.application.config import load_layout_file, config_to_layout
    >>>
    >>> layout = config_to_layout(load_layout_file(Path("homelab.json")))
"""

from racks.application.config.adapter import config_to_layout, layout_to_config
from racks.application.config.loader import (
    ConfigError,
    load_layout_file,
    load_layout_from_dict,
)
from racks.application.config.schema import (
    DeviceTypeConfig,
    LayoutConfiguration,
    LayoutSettingsConfig,
    PlacedDeviceConfig,
    RackConfig,
)
from racks.application.config.validators import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    DEFAULT_VALIDATORS,
    validate_layout,
)

__all__ = [
    # Schema
    "DeviceTypeConfig",
    "LayoutConfiguration",
    "LayoutSettingsConfig",
    "PlacedDeviceConfig",
    "RackConfig",
    # Loading
    "ConfigError",
    "load_layout_file",
    "load_layout_from_dict",
    # Conversion
    "config_to_layout",
    "layout_to_config",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "DEFAULT_VALIDATORS",
    "validate_layout",
]
