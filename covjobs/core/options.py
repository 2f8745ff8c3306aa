"""
Command line input for the jobs command.

The typer layer resolves argv into a JobsOptions value; everything below the
CLI works from this plain structure.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from covjobs.core.configuration import DEFAULT_CONFIG_FILE, DEFAULT_ROOT_DIR


@dataclass
class JobsOptions:
    """Options accepted by the jobs command."""
    config: str = DEFAULT_CONFIG_FILE
    dry_run: bool = False
    exclude_no_stmt: bool = False
    verbose: bool = False
    env: str = "prod"
    coverage_clover: List[str] = field(default_factory=list)
    json_path: Optional[str] = None
    entry_point: Optional[str] = None
    root_dir: str = DEFAULT_ROOT_DIR
    insecure: bool = False
    timeout: Optional[float] = None
