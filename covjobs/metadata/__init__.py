"""
Run metadata for covjobs.

Provides the stopwatch used to report elapsed time and peak memory for a
jobs command run.
"""

from .performance import RunStopwatch, RunEvent

__all__ = ["RunStopwatch", "RunEvent"]
