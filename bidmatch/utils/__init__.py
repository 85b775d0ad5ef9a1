"""
Shared utilities for BIDMATCH.

Common functionality used across contexts:
- Logger setup
- Timestamps
- Text report formatting
"""

from bidmatch.utils.timestamp import from_iso, now, to_iso

__all__ = ["from_iso", "now", "to_iso"]
