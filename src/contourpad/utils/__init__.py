"""Utility functions for contourpad.

This module provides utility functions including:

- Logging setup and configuration
- Pipeline statistics and stage reporting
"""

from contourpad.utils.logging import (
    PipelineLogger,
    PipelineStats,
    configure_logging,
)

__all__ = [
    "PipelineLogger",
    "PipelineStats",
    "configure_logging",
]
