"""
Validation Framework for the Segment-to-Box Distance Strategies.

This module provides property checks usable against any strategy bundle.
"""

from validation.property_checks import (
    SegmentBoxPropertyChecker,
    ValidationResult,
)

__all__ = [
    "SegmentBoxPropertyChecker",
    "ValidationResult",
]
