"""
Domain Models Package

Value objects and entities of the client, independent of storage and HTTP.
"""

from .session import (
    Credentials,
    SessionState
)

from .task import (
    Task,
    TaskStatus
)

from .user import (
    UserRegistration,
    MIN_PASSWORD_LENGTH
)

__all__ = [
    # Session
    "Credentials",
    "SessionState",

    # Task
    "Task",
    "TaskStatus",

    # User
    "UserRegistration",
    "MIN_PASSWORD_LENGTH"
]
