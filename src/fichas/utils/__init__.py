"""Utility functions for fichas.

Provides:
- logger: get_logger for package logging, get_trace_logger for token tracing
"""

from fichas.utils.logger import get_logger, get_trace_logger

__all__ = [
    "get_logger",
    "get_trace_logger",
]
