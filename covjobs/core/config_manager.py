"""
Configuration management for covjobs.

Handles loading the YAML configuration file and merging it with environment
variables and CLI options into one Configuration value.

Precedence, highest first:
1. CLI options (clover files, json path, entry point, timeout, insecure)
2. Environment variables (COVERALLS_REPO_TOKEN and friends)
3. Configuration file values
4. Built-in defaults
"""
import glob
import os
from typing import List, Mapping, Optional
from urllib.parse import urlparse

import yaml

from covjobs.core.configuration import (
    Configuration,
    DEFAULT_ENTRY_POINT,
    DEFAULT_TIMEOUT,
)
from covjobs.core.options import JobsOptions
from covjobs.core.path_resolver import to_absolute_path
from covjobs.utils.exceptions import ConfigurationError


TRUTHY_VALUES = {"1", "true", "yes", "on"}


class ConfigManager:
    """Loads the configuration file and builds a Configuration."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        if not os.path.isfile(path):
            raise ConfigurationError("Configuration file not found", path)

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Configuration file is not valid YAML ({e})", path)
        except OSError as e:
            raise ConfigurationError(f"Configuration file is not readable ({e})", path)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping", path)
        return data

    def load(self, config_path: str, root_dir: str, options: JobsOptions) -> Configuration:
        """Build a Configuration from the file at config_path and CLI options.

        The dry-run, exclude-no-stmt, verbose and env flags are not applied
        here; callers chain the ``with_*`` overrides on the result.
        """
        yml = self.load_config(config_path)

        return Configuration(
            root_dir=root_dir,
            clover_files=self._resolve_clover_files(yml, root_dir, options),
            json_path=self._resolve_json_path(yml, root_dir, options),
            entry_point=self._resolve_entry_point(yml, options),
            repo_token=self.environ.get("COVERALLS_REPO_TOKEN") or yml.get("repo_token"),
            service_name=yml.get("service_name"),
            exclude_no_statements=self._read_bool(yml, "exclude_no_stmt"),
            insecure=bool(options.insecure),
            timeout=self._resolve_timeout(yml, options),
            parallel=self._env_flag("COVERALLS_PARALLEL"),
            flag_name=self.environ.get("COVERALLS_FLAG_NAME") or None,
            run_locally=self._env_flag("COVERALLS_RUN_LOCALLY"),
        )

    def _resolve_clover_files(self, yml: dict, root_dir: str, options: JobsOptions) -> List[str]:
        patterns = options.coverage_clover or yml.get("coverage_clover") or []
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list):
            raise ConfigurationError("'coverage_clover' must be a string or a list of strings")

        clover_files = []
        for pattern in patterns:
            if not isinstance(pattern, str) or not pattern:
                raise ConfigurationError(f"Invalid coverage clover entry: {pattern!r}")

            absolute = to_absolute_path(pattern, root_dir)
            matches = sorted(glob.glob(absolute))
            if not matches:
                raise ConfigurationError("Coverage clover file not found", absolute)

            for match in matches:
                if match not in clover_files:
                    clover_files.append(match)
        return clover_files

    def _resolve_json_path(self, yml: dict, root_dir: str, options: JobsOptions) -> Optional[str]:
        json_path = options.json_path or yml.get("json_path")
        if not json_path:
            return None
        if not isinstance(json_path, str):
            raise ConfigurationError(f"'json_path' must be a string, got {json_path!r}")

        absolute = to_absolute_path(json_path, root_dir)
        if not os.path.isdir(os.path.dirname(absolute)):
            raise ConfigurationError("Directory for json_path does not exist", os.path.dirname(absolute))
        return absolute

    def _resolve_entry_point(self, yml: dict, options: JobsOptions) -> str:
        entry_point = options.entry_point or yml.get("entry_point") or DEFAULT_ENTRY_POINT
        parsed = urlparse(str(entry_point))
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid entry point URL: {entry_point}")
        return str(entry_point).rstrip("/")

    def _resolve_timeout(self, yml: dict, options: JobsOptions) -> float:
        timeout = options.timeout if options.timeout is not None else yml.get("timeout", DEFAULT_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError(f"'timeout' must be a positive number, got {timeout!r}")
        return float(timeout)

    def _read_bool(self, yml: dict, key: str) -> bool:
        value = yml.get(key, False)
        if not isinstance(value, bool):
            raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")
        return value

    def _env_flag(self, name: str) -> bool:
        return str(self.environ.get(name, "")).strip().lower() in TRUTHY_VALUES
