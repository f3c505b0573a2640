"""Contracts module - protocols shared across layers.

By depending on protocols rather than the concrete LayoutStore, commands and
validators stay loosely coupled and testable.
"""

# Store protocols
from .protocols import (
    CommandProtocol as CommandProtocol,
    DeviceCommandStore as DeviceCommandStore,
    DeviceTypeCommandStore as DeviceTypeCommandStore,
    RackCommandStore as RackCommandStore,
)

# Validator protocol
from .validators import Validator as Validator
