"""Utility functions for gerberkit.

This module provides utility functions including:

- Logging setup and configuration
- Font compilation statistics
"""

from gerberkit.utils.logging import (
    CompileLogger,
    CompileStats,
    configure_logging,
)

__all__ = [
    "CompileLogger",
    "CompileStats",
    "configure_logging",
]
