"""
Session Domain Models

Value Objects:
- Credentials: username/password pair saved after a successful login
- SessionState: where the client is in the login / OTP flow

The raw password is kept because every authenticated request carries it
as HTTP Basic auth; see DESIGN.md for the known weakness.
"""

import base64
from dataclasses import dataclass, field
from enum import Enum


class SessionState(str, Enum):
    """
    Client session states

    Transitions:
        UNAUTHENTICATED -> PENDING_VERIFICATION -> AUTHENTICATED
        UNAUTHENTICATED -> AUTHENTICATED (already verified account)
        AUTHENTICATED -> UNAUTHENTICATED (logout or 401)
        PENDING_VERIFICATION -> UNAUTHENTICATED (logout or 401)
    """
    UNAUTHENTICATED = "UNAUTHENTICATED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    AUTHENTICATED = "AUTHENTICATED"

    def has_credentials(self) -> bool:
        """Credentials must be stored in every state but UNAUTHENTICATED"""
        return self != SessionState.UNAUTHENTICATED


@dataclass(frozen=True)
class Credentials:
    """
    Value Object cho saved login
    Immutable; the password never shows up in repr()
    """
    username: str
    password: str = field(repr=False)
    session_marker: bool = True

    def __post_init__(self):
        if not self.username:
            raise ValueError("Username cannot be empty")
        if not self.password:
            raise ValueError("Password cannot be empty")

    def basic_auth_token(self) -> str:
        """base64 of 'username:password'"""
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def authorization_header(self) -> str:
        """Value of the Authorization header for authenticated calls"""
        return f"Basic {self.basic_auth_token()}"
