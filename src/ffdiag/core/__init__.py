"""Core utilities package.

Pure helpers with no dependencies on the rest of ffdiag.
"""

from ffdiag.core.timemark import timemark_to_seconds

__all__ = [
    "timemark_to_seconds",
]
