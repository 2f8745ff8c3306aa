"""
HTTP transport construction for the Jobs API client.
"""
import requests

from covjobs import __version__
from covjobs.core.configuration import DEFAULT_TIMEOUT


USER_AGENT = f"covjobs/{__version__}"


def build_transport(verify_tls: bool = True, timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """Create the session used for the single Jobs API request.

    No retry adapter is mounted: one submission is one network attempt.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    session.verify = verify_tls

    # Not a requests.Session setting; read back by the client per request
    session.timeout = timeout

    return session
