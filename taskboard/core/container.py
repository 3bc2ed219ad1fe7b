"""
Dependency Injection Container

Central place to configure dependencies. Tests override providers
(e.g. the gateway's session factory or the database URL).

Uses dependency-injector library for IoC container
"""

from dependency_injector import containers, providers
from typing import Any, Dict, Optional

from ..database import build_engine, build_session_factory
from .credential_store import CredentialStore
from .gateway import HttpGateway
from .services.session_service import SessionService
from .services.recovery_service import PasswordRecoveryService
from .services.account_service import AccountService
from .services.task_service import TaskService


class Container(containers.DeclarativeContainer):
    """
    Main DI Container

    Singletons: engine, credential store, gateway, session service; they
    share the one session state for the whole process.
    Factories: the stateless services.
    """

    # ========== Configuration ==========
    config = providers.Configuration()

    # ========== Local store ==========
    engine = providers.Singleton(
        build_engine,
        url=config.database.url
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine
    )

    credential_store = providers.Singleton(
        CredentialStore,
        session_factory=session_factory
    )

    # ========== Backend ==========
    gateway = providers.Singleton(
        HttpGateway,
        credential_store=credential_store,
        base_url=config.api.base_url,
        timeout=config.api.timeout,
        impersonate=config.api.impersonate
    )

    # ========== Services ==========
    session_service = providers.Singleton(
        SessionService,
        gateway=gateway,
        credential_store=credential_store
    )

    recovery_service = providers.Factory(
        PasswordRecoveryService,
        gateway=gateway
    )

    account_service = providers.Factory(
        AccountService,
        gateway=gateway
    )

    task_service = providers.Factory(
        TaskService,
        gateway=gateway
    )


# Global container instance
container = Container()


def init_container(settings: Optional[Dict[str, Any]] = None) -> Container:
    """
    Load settings into the container

    Call this on app startup
    """
    from ..config import load_settings

    container.config.from_dict(settings or load_settings())
    return container
