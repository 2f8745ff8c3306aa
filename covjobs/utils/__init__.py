"""
Utility modules for covjobs.

Provides the shared exception hierarchy used by configuration loading,
coverage collection and Jobs API submission.
"""

from .exceptions import (
    CovJobsError,
    ConfigurationError,
    CoverageCollectionError,
    RequirementsNotSatisfiedError,
    OutputWriteError,
    TransportError,
    APITimeoutError,
    APIConnectionError,
    APIResponseError,
)

__all__ = [
    "CovJobsError",
    "ConfigurationError",
    "CoverageCollectionError",
    "RequirementsNotSatisfiedError",
    "OutputWriteError",
    "TransportError",
    "APITimeoutError",
    "APIConnectionError",
    "APIResponseError",
]
