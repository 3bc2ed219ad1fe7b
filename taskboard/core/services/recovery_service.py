"""
Password Recovery Service

Two stateless steps: request a reset link, then consume the emailed token
with a new password. Neither touches the session or the credential store.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from ..backend_routes import BackendRoutes
from ..domain.user import check_new_password
from ..exceptions import ValidationError, backend_fallback
from ..gateway import HttpGateway

logger = logging.getLogger(__name__)

RESET_LINK_SENT = (
    "Password reset link has been sent to your email address. "
    "Please check your inbox and follow the instructions."
)
PASSWORD_RESET_DONE = "Password has been reset successfully! Redirecting to login..."


@dataclass
class RecoveryResult:
    message: str
    redirect_to: Optional[str] = None


def token_from_url(url: str) -> Optional[str]:
    """Pull the `token` query parameter out of a reset link"""
    values = parse_qs(urlsplit(url or "").query).get("token")
    if not values or not values[0].strip():
        return None
    return values[0].strip()


class PasswordRecoveryService:
    """Service cho forgot / reset password"""

    def __init__(self, gateway: HttpGateway):
        self.gateway = gateway

    async def request_reset(self, identifier: str) -> RecoveryResult:
        """
        Ask the backend to email a reset link.

        The same message is returned whether or not the account exists;
        the backend decides what it reveals.

        Raises:
            ValidationError: Blank email/username (no call made)
        """
        identifier = (identifier or "").strip()
        if not identifier:
            raise ValidationError("Please enter your email address or username")

        logger.info("[RESET] Requesting password reset link")
        with backend_fallback("Failed to send reset instructions. Please try again."):
            await self.gateway.post(BackendRoutes.FORGET_PASSWORD, params={"input": identifier})
        return RecoveryResult(message=RESET_LINK_SENT)

    async def consume_reset(
        self,
        token: Optional[str],
        new_password: str,
        confirm_password: str
    ) -> RecoveryResult:
        """
        Set a new password with the emailed token.

        Raises:
            ValidationError: Mismatch, too short, or missing token (no call made)
        """
        check_new_password(new_password, confirm_password)
        if not token or not token.strip():
            raise ValidationError("Invalid reset token. Please request a new password reset.")

        logger.info("[RESET] Submitting new password")
        with backend_fallback("Failed to reset password. The token may be expired or invalid."):
            await self.gateway.post(
                BackendRoutes.RESET_PASSWORD,
                params={"token": token.strip()},
                json={"newPassword": new_password}
            )
        logger.info("[OK] [RESET] Password changed")
        return RecoveryResult(
            message=PASSWORD_RESET_DONE,
            redirect_to=BackendRoutes.LOGIN_ENTRY_POINT
        )
