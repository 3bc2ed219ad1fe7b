"""
Session Service - client-side login / OTP state machine

States: UNAUTHENTICATED (initial) -> PENDING_VERIFICATION -> AUTHENTICATED.
This service is the only writer of the session state. The gateway reports
401s through force_logout().
"""
import asyncio
import logging
from contextlib import contextmanager
from typing import Optional

from ..backend_routes import BackendRoutes
from ..credential_store import CredentialStore
from ..domain.session import SessionState
from ..exceptions import (
    AuthenticationError,
    BackendError,
    SessionStateError,
    TaskboardError,
    ValidationError,
    backend_fallback,
)
from ..gateway import HttpGateway

logger = logging.getLogger(__name__)


def _expect_bool(payload, endpoint: str) -> bool:
    """The login and is-verified endpoints answer a bare JSON boolean"""
    if isinstance(payload, bool):
        return payload
    if isinstance(payload, str) and payload.strip().lower() in ("true", "false"):
        return payload.strip().lower() == "true"
    logger.warning(f"[SESSION] Unexpected response from {endpoint}: {payload!r}")
    raise BackendError(200, payload=payload)


class SessionService:
    """Service xử lý login, OTP verification, logout and startup restore"""

    def __init__(self, gateway: HttpGateway, credential_store: CredentialStore):
        self.gateway = gateway
        self.credential_store = credential_store

        self._state = SessionState.UNAUTHENTICATED
        self._username: Optional[str] = None
        # Bumped on every logout; a pending operation that sees a new epoch
        # after an await drops its result.
        self._epoch = 0
        self._in_flight = 0
        # Username of the login currently waiting on the backend
        self._login_in_flight: Optional[str] = None
        self._lock = asyncio.Lock()

        gateway.add_unauthorized_listener(self.force_logout)

    # ========== Read-only view ==========

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        """True while a login / verify / resend / restore call is running"""
        return self._in_flight > 0

    def snapshot(self) -> dict:
        return {
            "state": self._state.value,
            "username": self._username,
            "authenticated": self.is_authenticated,
            "loading": self.is_loading,
        }

    # ========== Internal helpers ==========

    @contextmanager
    def _loading(self):
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    def _transition(self, new_state: SessionState, username: Optional[str] = None):
        if new_state != self._state:
            logger.info(f"[SESSION] {self._state.value} -> {new_state.value}")
        self._state = new_state
        self._username = username if new_state.has_credentials() else None

    def _is_stale(self, epoch: int) -> bool:
        return epoch != self._epoch

    def _drop_credentials(self):
        self.credential_store.clear()
        self._transition(SessionState.UNAUTHENTICATED)

    # ========== Operations ==========

    async def restore(self) -> SessionState:
        """
        Startup restoration.

        Stored credentials are only trusted once the backend confirms the
        email is verified. A `false` answer or any failure clears them.
        """
        async with self._lock:
            with self._loading():
                epoch = self._epoch
                credentials = self.credential_store.load()
                if not credentials:
                    self._transition(SessionState.UNAUTHENTICATED)
                    return self._state

                logger.info(f"[SESSION] Restoring saved session for {credentials.username}")
                try:
                    verified = _expect_bool(
                        await self.gateway.get(BackendRoutes.IS_VERIFIED),
                        BackendRoutes.IS_VERIFIED
                    )
                except TaskboardError as e:
                    logger.warning(f"[SESSION] Verification check failed on startup: {e.message}")
                    verified = False

                if self._is_stale(epoch):
                    logger.info("[SESSION] Restore superseded by logout, ignoring result")
                    return self._state

                if verified:
                    self._transition(SessionState.AUTHENTICATED, credentials.username)
                else:
                    logger.info("[SESSION] Saved session not verified, clearing it")
                    self._drop_credentials()
                return self._state

    async def login(self, username: str, password: str) -> SessionState:
        """
        Sign in with explicit credentials.

        A second submit for the username already being signed in waits for
        the first attempt and reports its outcome instead of calling the
        backend again.

        Returns:
            AUTHENTICATED for a verified account, PENDING_VERIFICATION after an
            OTP was sent to an unverified one

        Raises:
            ValidationError: Blank username or password
            SessionStateError: A session is already open
            AuthenticationError: Backend answered false
            AuthorizationError / BackendError / TransportError: Call failed
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Please enter your username and password")

        if username == self._login_in_flight:
            logger.info(f"[LOGIN] Duplicate submit for {username}, waiting for the first attempt")
            async with self._lock:
                return self._state

        async with self._lock:
            if self._state != SessionState.UNAUTHENTICATED:
                raise SessionStateError(
                    f"Already signed in as {self._username}. Please sign out first."
                )

            self._login_in_flight = username
            try:
                with self._loading(), backend_fallback("Login failed. Please try again."):
                    return await self._login(username, password)
            finally:
                self._login_in_flight = None

    async def _login(self, username: str, password: str) -> SessionState:
        epoch = self._epoch
        logger.info(f"[LOGIN] Attempting login for user: {username}")

        ok = _expect_bool(
            await self.gateway.post(
                BackendRoutes.LOGIN,
                params={"userName": username, "password": password}
            ),
            BackendRoutes.LOGIN
        )
        if self._is_stale(epoch):
            logger.info("[LOGIN] Login superseded by logout, discarding response")
            return self._state
        if not ok:
            logger.info(f"[LOGIN] Rejected for user: {username}")
            raise AuthenticationError("Invalid username or password")

        self.credential_store.save(username, password)

        try:
            verified = _expect_bool(
                await self.gateway.get(BackendRoutes.IS_VERIFIED),
                BackendRoutes.IS_VERIFIED
            )
        except TaskboardError:
            # Never leave credentials behind when verification is unknown
            if not self._is_stale(epoch):
                self._drop_credentials()
            raise

        if self._is_stale(epoch):
            logger.info("[LOGIN] Login superseded by logout, discarding response")
            self.credential_store.clear()
            return self._state

        if verified:
            self._transition(SessionState.AUTHENTICATED, username)
            logger.info(f"[OK] [LOGIN] {username} signed in")
            return self._state

        self._transition(SessionState.PENDING_VERIFICATION, username)
        logger.info(f"[LOGIN] Email not verified for {username}, sending OTP")
        with backend_fallback("Failed to send OTP. Please try again."):
            await self.gateway.post(BackendRoutes.SEND_OTP)
        return self._state

    async def verify_otp(self, code: str) -> SessionState:
        """
        Confirm the emailed OTP.

        Raises:
            SessionStateError: No verification in progress
            ValidationError: Blank code
            AuthenticationError: Backend rejected the code (state unchanged)
        """
        code = (code or "").strip()
        if not code:
            raise ValidationError("Please enter the code we sent to your email")

        async with self._lock:
            if self._state == SessionState.AUTHENTICATED:
                logger.info("[OTP] Ignored, already verified")
                return self._state
            if self._state != SessionState.PENDING_VERIFICATION:
                raise SessionStateError("No email verification in progress. Please sign in.")

            with self._loading():
                epoch = self._epoch
                rejection = None
                try:
                    result = await self.gateway.post(BackendRoutes.VERIFY_OTP, params={"otp": code})
                except BackendError as e:
                    rejection = e
                    result = False

                if self._is_stale(epoch):
                    logger.info("[OTP] Verification superseded by logout, ignoring result")
                    return self._state

                if result is False:
                    status = rejection.status_code if rejection else 200
                    logger.info(f"[OTP] Code rejected ({status})")
                    raise AuthenticationError("Invalid OTP. Please try again.") from rejection

                self._transition(SessionState.AUTHENTICATED, self._username)
                logger.info(f"[OK] [OTP] Email verified for {self._username}")
                return self._state

    async def resend_otp(self) -> None:
        """
        Ask the backend to email a new OTP. Never changes state.

        Raises:
            SessionStateError: No verification in progress
            BackendError / TransportError: Send failed (session kept)
        """
        async with self._lock:
            if self._state != SessionState.PENDING_VERIFICATION:
                raise SessionStateError("No email verification in progress. Please sign in.")

            with self._loading():
                try:
                    with backend_fallback("Failed to resend OTP. Please try again."):
                        await self.gateway.post(BackendRoutes.SEND_OTP)
                except BackendError as e:
                    logger.warning(f"[OTP] Resend failed ({e.status_code}): {e.user_message}")
                    raise
                logger.info(f"[OTP] New code sent to {self._username}")

    def logout(self) -> None:
        """Local sign-out: no backend call, always succeeds"""
        self._epoch += 1
        self.credential_store.clear()
        self._transition(SessionState.UNAUTHENTICATED)
        logger.info("[SESSION] Logged out")

    def force_logout(self) -> None:
        """
        401 listener. The gateway already cleared the store; this moves the
        state back to UNAUTHENTICATED and invalidates pending operations.
        """
        self._epoch += 1
        self._transition(SessionState.UNAUTHENTICATED)
        logger.warning("[SESSION] Session rejected by backend (401), logged out")
