"""
Core Utilities Package

This package contains utility functions and helpers used throughout the oracle core.

Modules:
    - time: Timestamp conversion and observation-age utilities
"""

from core.utils.time import age_ms, current_utc_timestamp, seconds_to_ms, to_utc_datetime

__all__ = ["age_ms", "current_utc_timestamp", "seconds_to_ms", "to_utc_datetime"]
