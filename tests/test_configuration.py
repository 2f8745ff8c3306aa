"""Test the Configuration value and its overrides."""

from dataclasses import FrozenInstanceError

import pytest

from covjobs.core.configuration import (
    Configuration,
    DEFAULT_ENTRY_POINT,
    RuntimeEnvironment,
)
from covjobs.utils.exceptions import ConfigurationError


class TestConfiguration:
    """Test the Configuration class."""

    def setup_method(self):
        self.config = Configuration(root_dir="/project")

    def test_defaults(self):
        assert self.config.entry_point == DEFAULT_ENTRY_POINT
        assert self.config.env is RuntimeEnvironment.PROD
        assert self.config.dry_run is False
        assert self.config.exclude_no_statements is False
        assert self.config.clover_files == ()
        assert self.config.json_path is None

    def test_relative_root_dir_is_rejected(self):
        with pytest.raises(ConfigurationError):
            Configuration(root_dir="project")

    def test_clover_files_are_frozen(self):
        config = Configuration(root_dir="/project", clover_files=["/project/a.xml"])
        assert config.clover_files == ("/project/a.xml",)

    def test_configuration_is_immutable(self):
        with pytest.raises(FrozenInstanceError):
            self.config.dry_run = True

    def test_with_dry_run_returns_new_value(self):
        updated = self.config.with_dry_run(True)
        assert updated.dry_run is True
        assert self.config.dry_run is False

    def test_chained_overrides(self):
        updated = (
            self.config
            .with_dry_run(True)
            .with_exclude_no_statements_unless_false(True)
            .with_verbose(True)
            .with_env("dev")
        )
        assert updated.dry_run is True
        assert updated.exclude_no_statements is True
        assert updated.verbose is True
        assert updated.env is RuntimeEnvironment.DEV


class TestExcludeNoStatementsUnlessFalse:
    """The exclude flag can only switch the option on."""

    @pytest.mark.parametrize("loaded", [True, False])
    def test_true_always_enables(self, loaded):
        config = Configuration(root_dir="/project", exclude_no_statements=loaded)
        assert config.with_exclude_no_statements_unless_false(True).exclude_no_statements is True

    def test_false_does_not_clear_loaded_true(self):
        config = Configuration(root_dir="/project", exclude_no_statements=True)
        assert config.with_exclude_no_statements_unless_false(False).exclude_no_statements is True

    def test_false_keeps_loaded_false(self):
        config = Configuration(root_dir="/project", exclude_no_statements=False)
        assert config.with_exclude_no_statements_unless_false(False).exclude_no_statements is False

    def test_false_is_a_no_op(self):
        config = Configuration(root_dir="/project", exclude_no_statements=True)
        assert config.with_exclude_no_statements_unless_false(False) is config


class TestRuntimeEnvironment:
    """Test environment parsing and the logging gate."""

    @pytest.mark.parametrize("name,expected", [
        ("test", RuntimeEnvironment.TEST),
        ("dev", RuntimeEnvironment.DEV),
        ("PROD", RuntimeEnvironment.PROD),
    ])
    def test_parse(self, name, expected):
        assert RuntimeEnvironment.parse(name) is expected

    def test_invalid_environment(self):
        with pytest.raises(ConfigurationError) as excinfo:
            Configuration(root_dir="/project").with_env("staging")
        assert "staging" in str(excinfo.value)

    def test_test_env_disables_logging_even_when_verbose(self):
        config = Configuration(root_dir="/project").with_verbose(True).with_env("test")
        assert config.is_test_env() is True
        assert config.is_logging_enabled() is False

    def test_verbose_enables_logging_outside_test_env(self):
        config = Configuration(root_dir="/project").with_verbose(True).with_env("dev")
        assert config.is_logging_enabled() is True

    def test_logging_disabled_without_verbose(self):
        assert Configuration(root_dir="/project").is_logging_enabled() is False
