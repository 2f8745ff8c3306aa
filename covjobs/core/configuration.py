"""
Run configuration for covjobs.

A Configuration is built once per invocation from the configuration file,
environment variables and command line options. It is immutable: the
``with_*`` methods return a new value, so nothing downstream of the loader
can change what a run was configured with.
"""
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from covjobs.utils.exceptions import ConfigurationError


DEFAULT_CONFIG_FILE = ".coveralls.yml"
DEFAULT_ENTRY_POINT = "https://coveralls.io"
DEFAULT_ROOT_DIR = "."
DEFAULT_TIMEOUT = 30.0


class RuntimeEnvironment(Enum):
    """Runtime environment names accepted by --env."""
    TEST = "test"
    DEV = "dev"
    PROD = "prod"

    @classmethod
    def parse(cls, value) -> "RuntimeEnvironment":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(env.value for env in cls)
            raise ConfigurationError(
                f"Invalid runtime environment '{value}' (expected one of: {allowed})"
            )


@dataclass(frozen=True)
class Configuration:
    """Single source of truth for one submission run."""
    root_dir: str
    clover_files: Tuple[str, ...] = field(default_factory=tuple)
    json_path: Optional[str] = None
    entry_point: str = DEFAULT_ENTRY_POINT
    repo_token: Optional[str] = None
    service_name: Optional[str] = None
    dry_run: bool = False
    exclude_no_statements: bool = False
    verbose: bool = False
    env: RuntimeEnvironment = RuntimeEnvironment.PROD
    insecure: bool = False
    timeout: float = DEFAULT_TIMEOUT
    parallel: bool = False
    flag_name: Optional[str] = None
    run_locally: bool = False

    def __post_init__(self):
        if not os.path.isabs(self.root_dir):
            raise ConfigurationError("Root directory must be absolute", self.root_dir)
        # Lists from YAML or the CLI are frozen into tuples
        object.__setattr__(self, "clover_files", tuple(self.clover_files))

    def is_test_env(self) -> bool:
        return self.env is RuntimeEnvironment.TEST

    def is_dev_env(self) -> bool:
        return self.env is RuntimeEnvironment.DEV

    def is_prod_env(self) -> bool:
        return self.env is RuntimeEnvironment.PROD

    def is_logging_enabled(self) -> bool:
        """Verbose output is only produced outside the test environment."""
        return self.verbose and not self.is_test_env()

    def has_json_path(self) -> bool:
        return bool(self.json_path)

    def with_dry_run(self, dry_run: bool) -> "Configuration":
        return replace(self, dry_run=bool(dry_run))

    def with_exclude_no_statements_unless_false(self, exclude: bool) -> "Configuration":
        """Turn statement-less file exclusion on; never turn it off.

        --exclude-no-stmt is additive: an absent or false flag leaves a value
        loaded from the configuration file untouched.
        """
        if exclude:
            return replace(self, exclude_no_statements=True)
        return self

    def with_verbose(self, verbose: bool) -> "Configuration":
        return replace(self, verbose=bool(verbose))

    def with_env(self, env) -> "Configuration":
        return replace(self, env=RuntimeEnvironment.parse(env))
