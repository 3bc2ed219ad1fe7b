"""
Credential Store

Keeps the saved login in the local settings table. The three entries
(userName, password, authToken marker) are written and removed together
in one transaction; a partial set is never returned.
"""
import logging
import threading
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .domain.session import Credentials
from .repositories.setting_repo import SettingRepository

logger = logging.getLogger(__name__)

USERNAME_KEY = "userName"
PASSWORD_KEY = "password"
MARKER_KEY = "authToken"
MARKER_VALUE = "basic-auth-active"

CREDENTIAL_KEYS = (USERNAME_KEY, PASSWORD_KEY, MARKER_KEY)


class CredentialStore:
    """Atomic save / load / clear of the client credentials"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory
        # Routers run sync code in a threadpool, so writes are serialized here
        self._lock = threading.Lock()

    def save(self, username: str, password: str) -> Credentials:
        """
        Persist username + password and set the session marker.
        Saving the same pair twice leaves the store unchanged.

        Raises:
            SQLAlchemyError: If the local store can't be written
        """
        credentials = Credentials(username=username, password=password)
        with self._lock:
            db = self.session_factory()
            repo = SettingRepository(db)
            try:
                repo.put_many({
                    USERNAME_KEY: credentials.username,
                    PASSWORD_KEY: credentials.password,
                    MARKER_KEY: MARKER_VALUE
                })
                repo.commit()
            except SQLAlchemyError:
                repo.rollback()
                raise
            finally:
                db.close()

        logger.info(f"[STORE] Credentials saved for {credentials.username}")
        return credentials

    def load(self) -> Optional[Credentials]:
        """
        Return the saved Credentials, or None.

        Partial entries (e.g. marker without password) count as absent and
        are wiped. An unreadable store also counts as absent.
        """
        with self._lock:
            db = self.session_factory()
            repo = SettingRepository(db)
            try:
                values = repo.get_many(CREDENTIAL_KEYS)
                username = values.get(USERNAME_KEY)
                password = values.get(PASSWORD_KEY)
                marker = values.get(MARKER_KEY)

                if username and password and marker:
                    return Credentials(username=username, password=password)

                if values:
                    logger.warning(
                        f"[STORE] Partial credentials found ({sorted(values)}), clearing"
                    )
                    repo.delete_many(CREDENTIAL_KEYS)
                    repo.commit()
                return None
            except SQLAlchemyError as e:
                repo.rollback()
                logger.error(f"[STORE] Local store unavailable, treating as logged out: {e}")
                return None
            finally:
                db.close()

    def clear(self) -> None:
        """
        Remove all three entries. Safe to call when nothing is stored.

        Raises:
            SQLAlchemyError: If the local store can't be written
        """
        with self._lock:
            db = self.session_factory()
            repo = SettingRepository(db)
            try:
                removed = repo.delete_many(CREDENTIAL_KEYS)
                repo.commit()
            except SQLAlchemyError:
                repo.rollback()
                raise
            finally:
                db.close()

        if removed:
            logger.info("[STORE] Credentials cleared")
