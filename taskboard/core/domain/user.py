"""
User Domain Models

UserRegistration mirrors the create-account form.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6
DEFAULT_ROLE = "USER"


def check_new_password(password: str, confirm_password: str) -> None:
    """
    Shared rule for registration and password reset

    Raises:
        ValidationError: On mismatch or when shorter than MIN_PASSWORD_LENGTH
    """
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


@dataclass(frozen=True)
class UserRegistration:
    """Value Object cho a new account request"""
    name: str
    user_name: str
    email: str
    password: str = field(repr=False)
    confirm_password: str = field(repr=False)

    def validate(self) -> None:
        """
        Run the form checks before anything is sent

        Raises:
            ValidationError: First failing rule
        """
        if not self.name.strip():
            raise ValidationError("Please enter your full name")
        if not self.user_name.strip():
            raise ValidationError("Please choose a username")
        check_new_password(self.password, self.confirm_password)
        if "@" not in self.email:
            raise ValidationError("Please enter a valid email address")

    def to_api(self) -> Dict[str, Any]:
        """Request body for /auth/create-user"""
        return {
            "name": self.name.strip(),
            "userName": self.user_name.strip(),
            "email": self.email.strip(),
            "password": self.password,
            "roles": [DEFAULT_ROLE],
            "emailVerified": False
        }
