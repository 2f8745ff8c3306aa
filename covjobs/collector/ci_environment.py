"""
CI environment detection for the Jobs API payload.

Maps the environment variables exported by common CI services onto the
service_* fields Coveralls expects.
"""
import os
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional


@dataclass
class CIEnvironment:
    """Service fields detected from the environment."""
    service_name: Optional[str] = None
    service_job_id: Optional[str] = None
    service_number: Optional[str] = None
    service_pull_request: Optional[str] = None
    service_branch: Optional[str] = None


class CIEnvironmentDetector:
    """Detects the CI service the run executes in."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        self.detectors: List[Callable[[], Optional[CIEnvironment]]] = [
            self._detect_travis,
            self._detect_circleci,
            self._detect_jenkins,
            self._detect_appveyor,
            self._detect_github_actions,
        ]

    def detect(self, run_locally: bool = False) -> CIEnvironment:
        """Detect the CI environment.

        With run_locally the job id is dropped so the service records the job
        as a local run, matching COVERALLS_RUN_LOCALLY.
        """
        for detector in self.detectors:
            detected = detector()
            if detected is not None:
                if run_locally:
                    detected.service_job_id = None
                return detected

        if run_locally:
            return CIEnvironment(service_name="local")
        return CIEnvironment()

    def _get(self, name: str) -> Optional[str]:
        value = self.environ.get(name)
        return value if value else None

    def _detect_travis(self) -> Optional[CIEnvironment]:
        if not self._get("TRAVIS") or not self._get("TRAVIS_JOB_ID"):
            return None
        pull_request = self._get("TRAVIS_PULL_REQUEST")
        return CIEnvironment(
            service_name="travis-ci",
            service_job_id=self._get("TRAVIS_JOB_ID"),
            service_pull_request=None if pull_request == "false" else pull_request,
            service_branch=self._get("TRAVIS_BRANCH"),
        )

    def _detect_circleci(self) -> Optional[CIEnvironment]:
        if not self._get("CIRCLECI") or not self._get("CIRCLE_BUILD_NUM"):
            return None
        return CIEnvironment(
            service_name="circleci",
            service_number=self._get("CIRCLE_BUILD_NUM"),
            service_branch=self._get("CIRCLE_BRANCH"),
        )

    def _detect_jenkins(self) -> Optional[CIEnvironment]:
        if not self._get("JENKINS_URL") or not self._get("BUILD_NUMBER"):
            return None
        return CIEnvironment(
            service_name="jenkins",
            service_number=self._get("BUILD_NUMBER"),
            service_pull_request=self._get("CHANGE_ID"),
            service_branch=self._get("BRANCH_NAME"),
        )

    def _detect_appveyor(self) -> Optional[CIEnvironment]:
        if not self._get("APPVEYOR") or not self._get("APPVEYOR_JOB_ID"):
            return None
        return CIEnvironment(
            service_name="appveyor",
            service_job_id=self._get("APPVEYOR_JOB_ID"),
            service_number=self._get("APPVEYOR_BUILD_NUMBER"),
            service_pull_request=self._get("APPVEYOR_PULL_REQUEST_NUMBER"),
            service_branch=self._get("APPVEYOR_REPO_BRANCH"),
        )

    def _detect_github_actions(self) -> Optional[CIEnvironment]:
        if not self._get("GITHUB_ACTIONS") or not self._get("GITHUB_RUN_ID"):
            return None
        pull_request = None
        ref = self._get("GITHUB_REF") or ""
        if self._get("GITHUB_EVENT_NAME") == "pull_request" and ref.startswith("refs/pull/"):
            pull_request = ref.split("/")[2]
        branch = self._get("GITHUB_HEAD_REF")
        if branch is None and ref.startswith("refs/heads/"):
            branch = ref[len("refs/heads/"):]
        return CIEnvironment(
            service_name="github",
            service_job_id=self._get("GITHUB_RUN_ID"),
            service_number=self._get("GITHUB_RUN_NUMBER"),
            service_pull_request=pull_request,
            service_branch=branch,
        )
