"""
Base Repository

Abstract key-value repository over a SQLAlchemy session.
The credential store depends on this interface, not on the ORM.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional
from sqlalchemy.orm import Session


class KeyValueRepository(ABC):
    """
    Abstract key-value repository

    Subclasses must implement:
    - get
    - get_many
    - put_many
    - delete_many

    Writes are not committed until commit() is called, so a group of
    put/delete calls lands in one transaction.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session

        Args:
            session: SQLAlchemy session
        """
        self.session = session

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read one value

        Returns:
            Stored value or None if key is absent
        """
        pass

    @abstractmethod
    def get_many(self, keys: Iterable[str]) -> Dict[str, str]:
        """
        Read several values at once

        Returns:
            Mapping of the keys that exist (missing keys are left out)
        """
        pass

    @abstractmethod
    def put_many(self, values: Dict[str, str]) -> None:
        """Insert or overwrite values"""
        pass

    @abstractmethod
    def delete_many(self, keys: Iterable[str]) -> int:
        """
        Delete keys; missing keys are ignored

        Returns:
            Number of rows removed
        """
        pass

    def commit(self):
        """Commit transaction"""
        self.session.commit()

    def rollback(self):
        """Rollback transaction (call on error)"""
        self.session.rollback()
