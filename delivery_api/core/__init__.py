"""
Core module initialization.
Exports configuration, logging utilities and the error hierarchy.
"""

from delivery_api.core.config import get_settings, Settings, EnvironmentMode
from delivery_api.core.exceptions import (
    DeliveryError,
    NotFoundError,
    ValidationError,
    PersistenceError,
    InvalidStatusTransitionError,
)

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "DeliveryError",
    "NotFoundError",
    "ValidationError",
    "PersistenceError",
    "InvalidStatusTransitionError",
]
