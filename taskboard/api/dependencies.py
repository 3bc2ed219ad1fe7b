"""
FastAPI Dependencies

Endpoints depend on services; the container supplies the implementations.
Tests swap them via app.dependency_overrides.

Usage in endpoints:
    @router.get("/tasks")
    async def list_tasks(
        service: TaskService = Depends(get_task_service)
    ):
        return await service.list_tasks()
"""

from fastapi import Depends
from ..core.container import container
from ..core.exceptions import AuthorizationError
from ..core.backend_routes import BackendRoutes
from ..core.services.session_service import SessionService
from ..core.services.recovery_service import PasswordRecoveryService
from ..core.services.account_service import AccountService
from ..core.services.task_service import TaskService


# ========== Services ==========
def get_session_service() -> SessionService:
    """Process-wide session state machine"""
    return container.session_service()


def get_recovery_service() -> PasswordRecoveryService:
    return container.recovery_service()


def get_account_service() -> AccountService:
    return container.account_service()


def get_task_service() -> TaskService:
    return container.task_service()


# ========== Guards ==========
def require_authenticated(
    session: SessionService = Depends(get_session_service)
) -> SessionService:
    """
    Gate for dashboard endpoints

    Raises:
        AuthorizationError: Not signed in (answered as 401 + redirect to login)
    """
    if not session.is_authenticated:
        raise AuthorizationError(
            "Please sign in to continue.",
            redirect_to=BackendRoutes.LOGIN_ENTRY_POINT
        )
    return session
