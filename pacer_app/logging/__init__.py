"""
Logging configuration and utilities for the execution pacer.
"""
from .config import configure_logging, get_logger, get_pacing_logger

__all__ = ["configure_logging", "get_logger", "get_pacing_logger"]
