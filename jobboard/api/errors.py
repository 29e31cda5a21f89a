"""
Errors raised while talking to the job-board backend.

Transport failures are not wrapped: callers catch ``httpx.TransportError``
directly, since only that class of failure triggers the submission fallback.
"""
from typing import Optional


class JobBoardError(Exception):
    """Base class for job-board client errors."""

class ProtocolError(JobBoardError):
    """Response had the wrong content type or an unparsable body."""

class ServerError(JobBoardError):
    """Backend answered with a failure status or a malformed payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class AuthenticationRequired(JobBoardError):
    """No bearer credential is available for an authenticated call."""
