"""
Services Package

Use cases of the client, orchestrating the gateway and the credential store.
"""

from .session_service import SessionService
from .recovery_service import PasswordRecoveryService
from .account_service import AccountService
from .task_service import TaskService

__all__ = [
    'SessionService',
    'PasswordRecoveryService',
    'AccountService',
    'TaskService',
]
