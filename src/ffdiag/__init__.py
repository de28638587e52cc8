"""ffdiag - ffmpeg diagnostic text processing.

Builds ffmpeg argument lists and filter strings, and recovers structured
status (input codec data, progress, error messages) from ffmpeg's stderr.
"""

__version__ = "0.1.0"
