"""
Logging utilities for the Receipt Ledger backend.

Provides standardized logger configuration following privacy rules.

PRIVACY RULES:
- NEVER log raw receipt images or binary data
- NEVER log OAuth2 tokens, API keys or the refresh token
- NEVER log payment amounts read from receipts

Acceptable logging:
- High-level events (e.g., "Receipt classified", "Ledger cell written")
- Payer name, period label, cell addresses and Drive file ids
- Error messages from Google APIs (no credentials in them)
"""

import logging
from typing import Optional, Union


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level, as an int or a name like "DEBUG"
            (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from receipt_ledger.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO
    elif isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
