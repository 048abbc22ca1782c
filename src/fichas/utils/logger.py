"""Logger helpers for fichas.

Every module logs under the ``fichas`` namespace, so one
``logging.getLogger("fichas")`` call tunes the whole package. Per-token
tracing (``TokenizerConfig.trace_tokens``) goes to the separate
``fichas.trace`` logger, which can be silenced or sent to its own handler
without touching the rest.

Example:
    >>> from fichas.utils.logger import get_logger, get_trace_logger
    >>> get_logger("lexer.core").name
    'fichas.lexer.core'
    >>> get_trace_logger().name
    'fichas.trace'
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER_NAME = "fichas"
TRACE_LOGGER_NAME = f"{PACKAGE_LOGGER_NAME}.trace"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``fichas``.

    Args:
        name: Logger name (typically __name__); bare names get the prefix

    Returns:
        logging.Logger instance
    """
    if not (name == PACKAGE_LOGGER_NAME or name.startswith(f"{PACKAGE_LOGGER_NAME}.")):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def get_trace_logger() -> logging.Logger:
    """Logger that receives one DEBUG record per token when tracing is on."""
    return logging.getLogger(TRACE_LOGGER_NAME)
