"""
Setting Repository

Key-value access to the local `settings` table
"""

from typing import Dict, Iterable, Optional
from .base import KeyValueRepository
from ...models import Setting


class SettingRepository(KeyValueRepository):
    """Repository cho Setting rows"""

    def get(self, key: str) -> Optional[str]:
        row = self.session.query(Setting).filter_by(key=key).first()
        return row.value if row else None

    def get_many(self, keys: Iterable[str]) -> Dict[str, str]:
        keys = list(keys)
        if not keys:
            return {}
        rows = self.session.query(Setting).filter(Setting.key.in_(keys)).all()
        return {row.key: row.value for row in rows}

    def put_many(self, values: Dict[str, str]) -> None:
        for key, value in values.items():
            # merge() = INSERT or UPDATE by primary key
            self.session.merge(Setting(key=key, value=value))

    def delete_many(self, keys: Iterable[str]) -> int:
        keys = list(keys)
        if not keys:
            return 0
        return (
            self.session.query(Setting)
            .filter(Setting.key.in_(keys))
            .delete(synchronize_session=False)
        )
