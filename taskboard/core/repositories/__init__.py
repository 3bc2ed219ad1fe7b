"""
Repository Pattern Implementation

Services and the credential store depend on the repository interface;
SQLAlchemy stays behind it.
"""

from .base import KeyValueRepository
from .setting_repo import SettingRepository

__all__ = [
    "KeyValueRepository",
    "SettingRepository"
]
