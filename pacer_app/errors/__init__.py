"""
Error classification for the planning system.

The planning core never raises for numeric input; it reports PlanDiagnostic
values instead. These exceptions are raised only at the edges: order payload
ingestion and configuration loading.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
]
