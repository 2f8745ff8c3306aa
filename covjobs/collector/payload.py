"""
Payload assembly for the Jobs API.
"""
import logging
from typing import Mapping, Optional

from covjobs.core.configuration import Configuration
from covjobs.upload.models import JsonFile
from .ci_environment import CIEnvironmentDetector
from .clover import CloverCollector
from .git import GitInfoCollector


class PayloadBuilder:
    """Builds the JsonFile for one run from its Configuration."""

    def __init__(
        self,
        config: Configuration,
        environ: Optional[Mapping[str, str]] = None,
        clover_collector: Optional[CloverCollector] = None,
        git_collector: Optional[GitInfoCollector] = None,
        ci_detector: Optional[CIEnvironmentDetector] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.clover_collector = clover_collector or CloverCollector(config.root_dir, logger=logger)
        self.git_collector = git_collector or GitInfoCollector(config.root_dir)
        self.ci_detector = ci_detector or CIEnvironmentDetector(environ)

    def build(self) -> JsonFile:
        """Collect coverage, CI and git details into a payload.

        Raises CoverageCollectionError when a clover file cannot be parsed.
        """
        source_files = self.clover_collector.collect(
            self.config.clover_files,
            exclude_no_statements=self.config.exclude_no_statements,
        )

        ci = self.ci_detector.detect(run_locally=self.config.run_locally)

        json_file = JsonFile(
            source_files=source_files,
            repo_token=self.config.repo_token,
            service_name=self.config.service_name or ci.service_name,
            service_job_id=ci.service_job_id,
            service_number=ci.service_number,
            service_pull_request=ci.service_pull_request,
            service_branch=ci.service_branch,
            parallel=self.config.parallel,
            flag_name=self.config.flag_name,
            git=self.git_collector.collect(),
        )
        json_file.stamp_run_at()
        return json_file
