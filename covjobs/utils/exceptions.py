"""
Exception hierarchy for covjobs.

Only configuration-time errors are meant to reach the top of the process.
Everything raised while collecting coverage or talking to the Jobs API is
caught by the jobs repository and turned into a failed submission.

Each transport exception includes:
- Clear error message
- Endpoint context
- Suggested user action
- Original exception preserved for debugging
"""

from typing import Optional


class CovJobsError(Exception):
    """Base exception for all covjobs errors."""


class ConfigurationError(CovJobsError):
    """
    Raised when the run configuration cannot be built.

    This is fatal: the run aborts before any network activity. Typical causes:
    - Configuration file missing, unreadable or not valid YAML
    - Unknown runtime environment name
    - Coverage clover pattern that matches no file
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message}: {path}"
        super().__init__(message)


class CoverageCollectionError(CovJobsError):
    """Raised when a coverage clover file cannot be parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class RequirementsNotSatisfiedError(CovJobsError):
    """Raised when a payload is not acceptable for submission."""


class OutputWriteError(CovJobsError):
    """Raised when the payload JSON file cannot be written. Non-fatal."""

    def __init__(self, message: str, path: Optional[str] = None,
                 original_exception: Optional[Exception] = None):
        self.path = path
        self.original_exception = original_exception
        if original_exception:
            message = f"{message} | Original error: {original_exception}"
        super().__init__(message)


class TransportError(CovJobsError):
    """
    Base exception for failed Jobs API submissions.

    Raised for connection failures, TLS failures, timeouts and non-2xx
    responses. Never propagates past the jobs repository.
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        original_exception: Optional[Exception] = None,
        suggested_action: Optional[str] = None,
    ):
        """
        Initialize TransportError.

        Args:
            message: Human-readable error message
            endpoint: URL that failed
            status_code: HTTP status code, when a response was received
            original_exception: The original exception that was caught
            suggested_action: Suggested action for the user to resolve the issue
        """
        self.message = message
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_exception = original_exception
        self.suggested_action = suggested_action

        error_parts = [message]

        if endpoint:
            error_parts.append(f"Endpoint: {endpoint}")

        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        if original_exception:
            error_parts.append(f"Original error: {str(original_exception)}")

        super().__init__(" | ".join(error_parts))


class APITimeoutError(TransportError):
    """Raised when the Jobs API request times out."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        timeout_duration: Optional[float] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.timeout_duration = timeout_duration

        suggested_action = "Check network connectivity and retry"
        if timeout_duration:
            suggested_action += f" (timeout after {timeout_duration}s)"

        super().__init__(
            message=message,
            endpoint=endpoint,
            original_exception=original_exception,
            suggested_action=suggested_action,
        )


class APIConnectionError(TransportError):
    """
    Raised when unable to establish a connection to the Jobs API.

    Covers DNS failures, refused connections and TLS handshake or
    certificate verification failures.
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        tls_failure: bool = False,
    ):
        self.tls_failure = tls_failure
        if tls_failure:
            suggested_action = (
                "Certificate verification failed. Pass --insecure to skip "
                "the check if the endpoint uses a self-signed certificate"
            )
        else:
            suggested_action = (
                "Check network connectivity and verify the entry point is accessible"
            )

        super().__init__(
            message=message,
            endpoint=endpoint,
            original_exception=original_exception,
            suggested_action=suggested_action,
        )


class APIResponseError(TransportError):
    """Raised when the Jobs API answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        self.server_message = server_message
        super().__init__(
            message=message,
            endpoint=endpoint,
            status_code=status_code,
        )
