"""
Coveralls Jobs API Client

Posts the coverage payload to the Jobs API as a multipart upload and maps
transport failures and non-2xx answers onto TransportError subclasses.
"""

import warnings
from typing import Optional

import requests
import urllib3

from covjobs.core.configuration import Configuration
from covjobs.utils.exceptions import (
    APIConnectionError,
    APIResponseError,
    APITimeoutError,
    TransportError,
)
from .models import JsonFile


JOBS_ENDPOINT = "api/v1/jobs"
UPLOAD_FILENAME = "coveralls-upload.json"


class JobsAPIClient:
    """Handles the Jobs API interaction"""

    def __init__(self, config: Configuration, session: requests.Session):
        self.config = config
        self.session = session

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    @property
    def url(self) -> str:
        return f"{self.config.entry_point.rstrip('/')}/{JOBS_ENDPOINT}"

    def submit(self, json_file: JsonFile) -> requests.Response:
        """POST /api/v1/jobs"""
        files = {
            "json_file": (UPLOAD_FILENAME, json_file.to_json(), "application/json"),
        }
        timeout = getattr(self.session, "timeout", self.config.timeout)

        try:
            with warnings.catch_warnings():
                if self.session.verify is False:
                    warnings.simplefilter("ignore", urllib3.exceptions.InsecureRequestWarning)
                response = self.session.post(self.url, files=files, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise APITimeoutError(
                "Timeout while submitting to the Jobs API",
                endpoint=self.url,
                timeout_duration=timeout,
                original_exception=e,
            )
        except requests.exceptions.SSLError as e:
            raise APIConnectionError(
                "TLS failure while submitting to the Jobs API",
                endpoint=self.url,
                original_exception=e,
                tls_failure=True,
            )
        except requests.exceptions.ConnectionError as e:
            raise APIConnectionError(
                "Connection to the Jobs API failed",
                endpoint=self.url,
                original_exception=e,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                "Request to the Jobs API failed",
                endpoint=self.url,
                original_exception=e,
            )

        self._handle_response_errors(response)
        return response

    def _handle_response_errors(self, response: requests.Response):
        """Raise APIResponseError for any non-2xx answer"""
        if 200 <= response.status_code < 300:
            return

        server_message = extract_message(response)
        error_msg = f"Jobs API error {response.status_code}"
        if server_message:
            error_msg = f"{error_msg}: {server_message}"

        raise APIResponseError(
            error_msg,
            endpoint=self.url,
            status_code=response.status_code,
            server_message=server_message,
        )


def extract_message(response: requests.Response) -> Optional[str]:
    """Pull the human-readable message out of a Jobs API response body."""
    try:
        data = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text[:200] or None

    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        return str(message) if message else None
    return None
