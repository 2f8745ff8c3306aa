"""
CLI module for covjobs.

Provides the command-line interface for submitting coverage to the Jobs API.
"""
from covjobs.cli.app import app as _app

# Export app function for pyproject.toml entry point
def app():
    """Entry point function for pyproject.toml scripts."""
    _app()

__all__ = ['app']
