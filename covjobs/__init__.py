"""
covjobs - coverage report submission client for the Coveralls Jobs API.
"""

__version__ = "0.1.0"
