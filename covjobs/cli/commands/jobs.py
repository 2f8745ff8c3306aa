"""
Jobs command implementation.

Thin wrapper around JobsService that handles CLI argument parsing
and delegates business logic to the service layer.
"""
import sys
from typing import List, Optional

import typer

from covjobs.core.jobs_service import JobsService
from covjobs.core.options import JobsOptions
from covjobs.rich_utils.ui_helpers import get_console
from covjobs.utils.exceptions import ConfigurationError


CONFIGURATION_ERROR_EXIT_CODE = 2


def jobs_command(
    config: str = typer.Option(".coveralls.yml", "-c", "--config", help=".coveralls.yml path, relative to the root directory"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not send json_file to Jobs API"),
    exclude_no_stmt: bool = typer.Option(False, "--exclude-no-stmt", help="Exclude source files that have no executable statements"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show progress and the run summary"),
    env: str = typer.Option("prod", "-e", "--env", help="Runtime environment name: test, dev, prod"),
    coverage_clover: Optional[List[str]] = typer.Option(None, "-x", "--coverage_clover", help="Coverage clover xml files (allowing multiple values)"),
    json_path: Optional[str] = typer.Option(None, "-o", "--json_path", help="Coveralls output json file"),
    entry_point: Optional[str] = typer.Option(None, "--entry_point", help="Coveralls entry point [default: https://coveralls.io]"),
    root_dir: str = typer.Option(".", "-r", "--root_dir", help="Root directory of the project"),
    insecure: bool = typer.Option(False, "-k", "--insecure", help="Skip SSL certificate check"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Jobs API request timeout in seconds [default: 30]"),
):
    """Submit coverage to the Coveralls Jobs API v1."""

    options = JobsOptions(
        config=config,
        dry_run=dry_run,
        exclude_no_stmt=exclude_no_stmt,
        verbose=verbose,
        env=env,
        coverage_clover=list(coverage_clover or []),
        json_path=json_path,
        entry_point=entry_point,
        root_dir=root_dir,
        insecure=insecure,
        timeout=timeout,
    )

    # Delegate to service layer
    console = get_console()
    jobs_service = JobsService(console=console)
    try:
        exit_code = jobs_service.execute_jobs(options)
    except ConfigurationError as e:
        console.print(f"❌ Configuration error: {e}", style="bold red", markup=False)
        sys.exit(CONFIGURATION_ERROR_EXIT_CODE)

    # Exit with appropriate code
    if exit_code != 0:
        sys.exit(exit_code)
