"""
Tests for the Jobs API client and transport construction.
"""

import json
import warnings
from unittest.mock import Mock

import pytest
import requests
import urllib3

from covjobs.core.configuration import Configuration
from covjobs.upload.api_client import JobsAPIClient, extract_message
from covjobs.upload.models import JsonFile, SourceFile
from covjobs.upload.transport import build_transport
from covjobs.utils.exceptions import (
    APIConnectionError,
    APIResponseError,
    APITimeoutError,
    TransportError,
)


def make_response(status_code, body=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class TestBuildTransport:
    """Test transport construction"""

    def test_verifies_certificates_by_default(self):
        session = build_transport()
        assert isinstance(session, requests.Session)
        assert session.verify is True
        assert session.timeout == 30.0

    def test_insecure_transport(self):
        session = build_transport(verify_tls=False, timeout=5)
        assert session.verify is False
        assert session.timeout == 5

    def test_no_retry_adapter(self):
        session = build_transport()
        assert session.get_adapter("https://coveralls.io").max_retries.total == 0


class TestJobsAPIClient:
    """Test cases for Jobs API submission"""

    def setup_method(self):
        self.config = Configuration(root_dir="/project", entry_point="https://coveralls.example.com")
        self.session = Mock()
        self.session.timeout = 7
        self.client = JobsAPIClient(self.config, self.session)
        self.json_file = JsonFile(
            source_files=[SourceFile(name="src/a.py", source="x = 1\n", coverage=[1])],
            repo_token="token",
        )

    def test_url(self):
        assert self.client.url == "https://coveralls.example.com/api/v1/jobs"

    def test_submit_posts_multipart_json_file(self):
        self.session.post.return_value = make_response(200, {"message": "Job #1.1", "url": "https://x/jobs/1"})

        response = self.client.submit(self.json_file)

        assert response.status_code == 200
        args, kwargs = self.session.post.call_args
        assert args[0] == "https://coveralls.example.com/api/v1/jobs"
        assert kwargs["timeout"] == 7
        filename, content, content_type = kwargs["files"]["json_file"]
        assert filename == "coveralls-upload.json"
        assert content_type == "application/json"
        assert json.loads(content)["repo_token"] == "token"

    def test_non_2xx_raises_response_error(self):
        self.session.post.return_value = make_response(422, {"message": "Couldn't find a repository"})

        with pytest.raises(APIResponseError) as excinfo:
            self.client.submit(self.json_file)

        assert excinfo.value.status_code == 422
        assert excinfo.value.server_message == "Couldn't find a repository"
        assert isinstance(excinfo.value, TransportError)

    def test_server_error_without_json(self):
        self.session.post.return_value = make_response(500, text="Internal Server Error")

        with pytest.raises(APIResponseError) as excinfo:
            self.client.submit(self.json_file)

        assert excinfo.value.server_message == "Internal Server Error"

    def test_timeout(self):
        self.session.post.side_effect = requests.exceptions.Timeout("timed out")

        with pytest.raises(APITimeoutError) as excinfo:
            self.client.submit(self.json_file)

        assert excinfo.value.timeout_duration == 7

    def test_tls_failure(self):
        self.session.post.side_effect = requests.exceptions.SSLError("certificate verify failed")

        with pytest.raises(APIConnectionError) as excinfo:
            self.client.submit(self.json_file)

        assert excinfo.value.tls_failure is True
        assert "--insecure" in str(excinfo.value)

    def test_connection_failure(self):
        self.session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(APIConnectionError) as excinfo:
            self.client.submit(self.json_file)

        assert excinfo.value.tls_failure is False

    def test_generic_request_failure(self):
        self.session.post.side_effect = requests.exceptions.TooManyRedirects("loop")

        with pytest.raises(TransportError):
            self.client.submit(self.json_file)

    def test_context_manager_closes_session(self):
        with self.client:
            pass
        self.session.close.assert_called_once()

    def test_insecure_warning_silenced_only_during_request(self):
        self.session.verify = False

        def post(*args, **kwargs):
            warnings.warn("Unverified HTTPS request", urllib3.exceptions.InsecureRequestWarning)
            return make_response(200, {})

        self.session.post.side_effect = post

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            filters_before = list(warnings.filters)
            self.client.submit(self.json_file)
            filters_after = list(warnings.filters)

        assert caught == []
        assert filters_after == filters_before

    def test_insecure_warning_kept_when_verifying(self):
        self.session.verify = True

        def post(*args, **kwargs):
            warnings.warn("Unverified HTTPS request", urllib3.exceptions.InsecureRequestWarning)
            return make_response(200, {})

        self.session.post.side_effect = post

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.client.submit(self.json_file)

        assert len(caught) == 1


class TestExtractMessage:
    """Test response message extraction"""

    def test_message_key(self):
        assert extract_message(make_response(422, {"message": "bad"})) == "bad"

    def test_error_key(self):
        assert extract_message(make_response(401, {"error": "denied"})) == "denied"

    def test_empty_body(self):
        assert extract_message(make_response(502)) is None
