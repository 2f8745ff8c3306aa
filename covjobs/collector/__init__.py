"""
Coverage payload collection.

Builds the Jobs API payload from clover logs, CI environment variables and
git repository information.
"""

from .clover import CloverCollector
from .ci_environment import CIEnvironment, CIEnvironmentDetector
from .git import GitInfoCollector
from .payload import PayloadBuilder

__all__ = [
    "CloverCollector",
    "CIEnvironment",
    "CIEnvironmentDetector",
    "GitInfoCollector",
    "PayloadBuilder",
]
