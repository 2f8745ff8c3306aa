"""Test CI environment detection."""

from covjobs.collector.ci_environment import CIEnvironmentDetector


class TestCIEnvironmentDetector:
    """Test cases for CI service detection"""

    def test_local_without_ci(self):
        detected = CIEnvironmentDetector(environ={}).detect()
        assert detected.service_name is None
        assert detected.service_job_id is None

    def test_run_locally_without_ci(self):
        detected = CIEnvironmentDetector(environ={}).detect(run_locally=True)
        assert detected.service_name == "local"

    def test_travis(self):
        detected = CIEnvironmentDetector(environ={
            "TRAVIS": "true",
            "TRAVIS_JOB_ID": "1234",
            "TRAVIS_PULL_REQUEST": "false",
            "TRAVIS_BRANCH": "main",
        }).detect()

        assert detected.service_name == "travis-ci"
        assert detected.service_job_id == "1234"
        assert detected.service_pull_request is None
        assert detected.service_branch == "main"

    def test_run_locally_drops_job_id(self):
        detected = CIEnvironmentDetector(environ={
            "TRAVIS": "true",
            "TRAVIS_JOB_ID": "1234",
        }).detect(run_locally=True)

        assert detected.service_name == "travis-ci"
        assert detected.service_job_id is None

    def test_circleci(self):
        detected = CIEnvironmentDetector(environ={
            "CIRCLECI": "true",
            "CIRCLE_BUILD_NUM": "77",
        }).detect()
        assert detected.service_name == "circleci"
        assert detected.service_number == "77"

    def test_jenkins(self):
        detected = CIEnvironmentDetector(environ={
            "JENKINS_URL": "https://jenkins.example.com",
            "BUILD_NUMBER": "12",
            "CHANGE_ID": "5",
        }).detect()
        assert detected.service_name == "jenkins"
        assert detected.service_number == "12"
        assert detected.service_pull_request == "5"

    def test_appveyor(self):
        detected = CIEnvironmentDetector(environ={
            "APPVEYOR": "True",
            "APPVEYOR_JOB_ID": "abc",
            "APPVEYOR_BUILD_NUMBER": "3",
        }).detect()
        assert detected.service_name == "appveyor"
        assert detected.service_job_id == "abc"

    def test_github_actions_pull_request(self):
        detected = CIEnvironmentDetector(environ={
            "GITHUB_ACTIONS": "true",
            "GITHUB_RUN_ID": "999",
            "GITHUB_RUN_NUMBER": "4",
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_REF": "refs/pull/42/merge",
            "GITHUB_HEAD_REF": "feature",
        }).detect()

        assert detected.service_name == "github"
        assert detected.service_job_id == "999"
        assert detected.service_pull_request == "42"
        assert detected.service_branch == "feature"

    def test_github_actions_push(self):
        detected = CIEnvironmentDetector(environ={
            "GITHUB_ACTIONS": "true",
            "GITHUB_RUN_ID": "999",
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_REF": "refs/heads/release/1.x",
        }).detect()

        assert detected.service_pull_request is None
        assert detected.service_branch == "release/1.x"
