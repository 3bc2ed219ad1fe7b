"""
Client error taxonomy

Every failure a screen can show maps to one of these:
- ValidationError: local form check failed, no request was sent
- AuthenticationError: backend rejected the login or the OTP
- AuthorizationError: backend answered 401, the session was dropped
- BackendError: any other non-2xx answer
- TransportError: network failure or timeout
"""
from contextlib import contextmanager
from typing import Any, Optional

GENERIC_BACKEND_MESSAGE = "Request failed. Please try again."


class TaskboardError(Exception):
    """Base class for all client errors"""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError, ValueError):
    """Raised when a form fails local validation (no network call made)"""
    pass


class AuthenticationError(TaskboardError):
    """Raised when login returns false or an OTP is rejected"""

    default_message = "Invalid username or password"


class SessionStateError(TaskboardError):
    """Raised when an operation is not allowed in the current session state"""
    pass


class AuthorizationError(TaskboardError):
    """Raised after the backend answered 401 and the session was invalidated"""

    default_message = "Your session has expired. Please sign in again."

    def __init__(self, message: Optional[str] = None, redirect_to: str = "/login"):
        super().__init__(message)
        self.redirect_to = redirect_to


class BackendError(TaskboardError):
    """Raised for non-2xx responses other than 401"""

    def __init__(
        self,
        status_code: Optional[int],
        message: Optional[str] = None,
        payload: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        # True when the text came from the backend instead of the fallback
        self.has_backend_message = message is not None
        # Screen-specific text shown when the backend sent no message
        self.fallback: Optional[str] = None

    @property
    def user_message(self) -> str:
        if self.has_backend_message:
            return self.message
        return self.fallback or GENERIC_BACKEND_MESSAGE


class TransportError(TaskboardError):
    """Raised when the backend could not be reached (network error, timeout)"""

    default_message = "Unable to reach the server. Please check your connection."


@contextmanager
def backend_fallback(message: str):
    """
    Attach a fallback message to any BackendError raised in the block.

    The innermost block wins, so a nested step can keep its own wording.
    """
    try:
        yield
    except BackendError as e:
        if e.fallback is None:
            e.fallback = message
        raise
