"""Project-native typed exceptions for Acrolinx workflow failures."""

from __future__ import annotations


class AcrolinxError(Exception):
    """Base exception for workflow gateway failures."""


class AcrolinxValidationError(AcrolinxError, ValueError):
    """Caller input rejected before any network call."""


class AcrolinxTransportError(AcrolinxError, ConnectionError):
    """One failed remote call attempt.

    Attributes:
        status_code: HTTP status code when a response was received.
        response_body: Response body text when a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None, response_body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class OperationFailedError(AcrolinxError, RuntimeError):
    """Retried operation failed on every attempt.

    Attributes:
        label: Operation label used in logs.
        attempts: Number of attempts made.
        last_error: Failure raised by the final attempt.
    """

    def __init__(self, message: str, label: str, attempts: int, last_error: BaseException | None = None):
        super().__init__(message)
        self.label = label
        self.attempts = attempts
        self.last_error = last_error


class AcrolinxRemoteError(OperationFailedError):
    """Remote call failed on every attempt.

    Attributes:
        status_code: HTTP status code of the last response, if any.
        response_body: Body of the last response, if any.
    """

    def __init__(
        self,
        message: str,
        label: str,
        attempts: int,
        last_error: BaseException | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message=message, label=label, attempts=attempts, last_error=last_error)
        self.status_code = status_code
        self.response_body = response_body


class WorkflowTimeoutError(AcrolinxError, TimeoutError):
    """Polling exceeded the workflow deadline; the remote job may still run."""

    def __init__(self, message: str, workflow_id: str, elapsed_ms: int):
        super().__init__(message)
        self.workflow_id = workflow_id
        self.elapsed_ms = elapsed_ms


class WorkflowFailedError(AcrolinxError, RuntimeError):
    """Remote service reported the workflow as failed."""

    def __init__(self, message: str, reason: str, workflow_id: str | None = None):
        super().__init__(message)
        self.reason = reason
        self.workflow_id = workflow_id
