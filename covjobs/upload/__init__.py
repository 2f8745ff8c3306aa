"""
covjobs Jobs API upload module.

This module submits a coverage payload to the Coveralls Jobs API:

Transport: requests session honouring the TLS verification setting
Client: multipart POST of the payload to {entry_point}/api/v1/jobs
Repository: collect, dump, dry-run gate and submit, returning success
"""

from .models import JsonFile, SourceFile, GitInfo, GitHead, GitRemote
from .transport import build_transport
from .api_client import JobsAPIClient
from .repository import JobsRepository

__all__ = [
    'JsonFile',
    'SourceFile',
    'GitInfo',
    'GitHead',
    'GitRemote',
    'build_transport',
    'JobsAPIClient',
    'JobsRepository',
]
