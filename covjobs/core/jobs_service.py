"""
Jobs service for covjobs.

Drives one run of the jobs command: resolves the project root, builds the
configuration, selects the logger, wires transport, client and repository,
and maps the submission outcome to a process exit code.
"""
import logging
import os
from typing import Callable, Mapping, Optional

import requests
from rich.console import Console

from covjobs.collector.payload import PayloadBuilder
from covjobs.core.config_manager import ConfigManager
from covjobs.core.configuration import Configuration, DEFAULT_ROOT_DIR
from covjobs.core.options import JobsOptions
from covjobs.core.path_resolver import to_absolute_path
from covjobs.metadata.performance import RunStopwatch
from covjobs.rich_utils.ui_helpers import get_console, select_logger
from covjobs.upload.api_client import JobsAPIClient
from covjobs.upload.repository import JobsRepository
from covjobs.upload.transport import build_transport
from covjobs.utils.exceptions import ConfigurationError


class JobsService:
    """Service for submitting coverage to the Jobs API."""

    def __init__(
        self,
        console: Optional[Console] = None,
        environ: Optional[Mapping[str, str]] = None,
        base_dir: Optional[str] = None,
        transport_factory: Callable[..., requests.Session] = build_transport,
    ):
        self.console = console or get_console()
        self.environ = os.environ if environ is None else environ
        self.base_dir = base_dir or os.getcwd()
        self.config_manager = ConfigManager(self.environ)
        self.transport_factory = transport_factory

    def resolve_root_dir(self, options: JobsOptions) -> str:
        """Project root: the base directory unless --root_dir names another."""
        if options.root_dir and options.root_dir != DEFAULT_ROOT_DIR:
            return to_absolute_path(options.root_dir, self.base_dir)
        return self.base_dir

    def load_configuration(self, options: JobsOptions, root_dir: str) -> Configuration:
        """Load the configuration file and apply the CLI flag overrides."""
        if not options.config:
            raise ConfigurationError("Configuration file path must not be empty")
        config_path = to_absolute_path(options.config, root_dir)

        return (
            self.config_manager
            .load(config_path, root_dir, options)
            .with_dry_run(options.dry_run)
            .with_exclude_no_statements_unless_false(options.exclude_no_stmt)
            .with_verbose(options.verbose)
            .with_env(options.env)
        )

    def execute_api(self, config: Configuration, logger: logging.Logger) -> bool:
        """Build transport, client and repository, then persist."""
        session = self.transport_factory(verify_tls=not config.insecure, timeout=config.timeout)

        with JobsAPIClient(config, session) as api:
            payload_builder = PayloadBuilder(config, environ=self.environ, logger=logger)
            repository = JobsRepository(api, config, payload_builder)
            repository.set_logger(logger)
            return repository.persist()

    def execute_jobs(self, options: JobsOptions) -> int:
        """Execute the jobs command and return its exit code.

        ConfigurationError propagates; submission failures become exit code 1.
        """
        stopwatch = RunStopwatch(self.__class__.__name__)
        stopwatch.start()

        root_dir = self.resolve_root_dir(options)
        config = self.load_configuration(options, root_dir)
        logger = select_logger(config, self.console)
        stopwatch.checkpoint()

        execution_status = self.execute_api(config, logger)

        event = stopwatch.stop()
        logger.info(event.format_summary())

        return 0 if execution_status else 1
