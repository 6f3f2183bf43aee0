"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures outside a single frame: bad startup
configuration or a sink that cannot accept intents.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Invalid configuration that prevents a session from starting."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class DeliveryError(SystemFailureError):
    """Order intent delivery failures."""

    def __init__(self, message: str, delivery_method: Optional[str] = None,
                 side: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delivery_method = delivery_method
        self.side = side
