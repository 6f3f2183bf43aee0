"""
Error classification system for the price trigger pipeline.

Data quality errors are recoverable: the offending frame is dropped and the
session continues. System failures need intervention before a session can run.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    DeliveryError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "DeliveryError",
]
