"""Utility functions for planarize.

This module provides utility functions including:

- Logging setup and configuration
- Import progress and statistics tracking
"""

from planarize.utils.logging import (
    ImportLogger,
    ImportStats,
    configure_logging,
)

__all__ = [
    "ImportLogger",
    "ImportStats",
    "configure_logging",
]
