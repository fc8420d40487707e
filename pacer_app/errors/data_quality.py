"""
Data quality error classifications for order payload ingestion.

These exceptions categorize problems found while turning a raw order payload
into an Order. They are recoverable: the caller keeps its previous order.
"""

from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for order data issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """A required order field is missing."""

    def __init__(self, message: str, field_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_name = field_name


class MalformedDataError(DataQualityError):
    """A field exists but cannot be interpreted."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 raw_value: Optional[Any] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_name = field_name
        self.raw_value = raw_value
        self.expected_format = expected_format
