"""
Unit tests for the error taxonomy helpers
"""
import pytest

from taskboard.core.exceptions import (
    BackendError,
    GENERIC_BACKEND_MESSAGE,
    ValidationError,
    backend_fallback,
)


class TestBackendErrorMessage:

    def test_backend_message_wins(self):
        error = BackendError(409, "Username already exists")
        error.fallback = "Registration failed. Please try again."
        assert error.user_message == "Username already exists"

    def test_generic_when_nothing_attached(self):
        assert BackendError(500).user_message == GENERIC_BACKEND_MESSAGE


class TestBackendFallback:

    def test_attaches_fallback(self):
        with pytest.raises(BackendError) as exc_info:
            with backend_fallback("Login failed. Please try again."):
                raise BackendError(500)

        assert exc_info.value.user_message == "Login failed. Please try again."

    def test_innermost_block_wins(self):
        with pytest.raises(BackendError) as exc_info:
            with backend_fallback("Login failed. Please try again."):
                with backend_fallback("Failed to send OTP. Please try again."):
                    raise BackendError(503)

        assert exc_info.value.fallback == "Failed to send OTP. Please try again."

    def test_other_errors_untouched(self):
        with pytest.raises(ValidationError):
            with backend_fallback("Login failed. Please try again."):
                raise ValidationError("Please enter your username and password")
