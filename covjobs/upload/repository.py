"""
Jobs repository.

Turns a Configuration into a completed or failed Jobs API submission. Every
ordinary failure (unparseable clover log, unmet requirements, transport
error, non-2xx answer) is logged and reported as False; nothing raised while
submitting escapes persist().
"""
import logging
from typing import Optional

import requests
from rich.markup import escape

from covjobs.core.configuration import Configuration
from covjobs.rich_utils.ui_helpers import build_null_logger
from covjobs.utils.exceptions import (
    APIResponseError,
    CoverageCollectionError,
    OutputWriteError,
    RequirementsNotSatisfiedError,
    TransportError,
)
from .api_client import JobsAPIClient
from .models import JsonFile


TOKENLESS_SERVICES = {"travis-ci"}


class JobsRepository:
    """Collects, dumps and submits the coverage payload."""

    def __init__(
        self,
        api: JobsAPIClient,
        config: Configuration,
        payload_builder,
        logger: Optional[logging.Logger] = None,
    ):
        self.api = api
        self.config = config
        self.payload_builder = payload_builder
        self.logger = logger or build_null_logger()

    def set_logger(self, logger: logging.Logger):
        self.logger = logger

    def persist(self) -> bool:
        """Run the submission and return whether it succeeded."""
        try:
            json_file = self._collect()
        except CoverageCollectionError as e:
            self.logger.error(f"Failed to collect coverage: {escape(str(e))}")
            return False

        self._dump_json_file(json_file)

        if self.config.dry_run:
            self.logger.info("Dry run, not sending json_file to Jobs API")
            return True

        try:
            self._ensure_requirements(json_file)
            response = self._send(json_file)
        except RequirementsNotSatisfiedError as e:
            self.logger.error(f"Requirements are not satisfied: {escape(str(e))}")
            return False
        except APIResponseError as e:
            self.logger.error(
                f"Response: [red]{e.status_code}[/red] {escape(e.server_message or 'no message')}"
            )
            return False
        except TransportError as e:
            self.logger.error(f"Submission failed: {escape(str(e))}")
            return False

        self._log_response(response)
        return True

    def _collect(self) -> JsonFile:
        self.logger.info(f"Load coverage clover log: {escape(', '.join(self.config.clover_files)) or 'none'}")
        json_file = self.payload_builder.build()

        self.logger.info(f"Found [green]{len(json_file.source_files)}[/green] source files")
        if json_file.service_name:
            self.logger.info(f"Service: {escape(json_file.service_name)}")
        if json_file.git is not None:
            git = json_file.git
            self.logger.info(f"Git head: {escape(git.head.id)} ({escape(git.branch or 'detached')})")
        return json_file

    def _dump_json_file(self, json_file: JsonFile):
        if not self.config.has_json_path():
            return

        self.logger.info(f"Dump uploading json file: {escape(self.config.json_path)}")
        try:
            self._write_json_file(json_file)
        except OutputWriteError as e:
            self.logger.warning(escape(str(e)))

    def _write_json_file(self, json_file: JsonFile):
        try:
            with open(self.config.json_path, "w") as f:
                f.write(json_file.to_json())
        except OSError as e:
            raise OutputWriteError(
                "Could not write json file", path=self.config.json_path, original_exception=e
            )

    def _ensure_requirements(self, json_file: JsonFile):
        if not json_file.has_source_files():
            raise RequirementsNotSatisfiedError("No source files found in coverage clover logs")

        if not json_file.repo_token and json_file.service_name not in TOKENLESS_SERVICES:
            raise RequirementsNotSatisfiedError(
                "repo_token is required outside Travis CI; set it in the configuration "
                "file or COVERALLS_REPO_TOKEN"
            )

    def _send(self, json_file: JsonFile) -> requests.Response:
        self.logger.info(f"Submitting to {escape(self.api.url)}")
        return self.api.submit(json_file)

    def _log_response(self, response: requests.Response):
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        message = data.get("message", "")
        self.logger.info(f"Accepted {escape(str(message))}".rstrip())
        if data.get("url"):
            self.logger.info(f"You can see the build on {escape(str(data['url']))}")
