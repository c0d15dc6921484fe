"""Site setting repository."""

from typing import Optional

from ..models import Setting


class SettingRepository:
    """Key/value access to the settings table. Callers own the transaction."""

    def __init__(self, db):
        self.db = db

    def get_all(self) -> list[Setting]:
        return self.db.query(Setting).order_by(Setting.key).all()

    def get_by_key(self, key: str) -> Optional[Setting]:
        return self.db.query(Setting).filter(Setting.key == key).first()

    def upsert(self, key: str, value: str) -> Setting:
        row = self.get_by_key(key)
        if row is None:
            row = Setting(key=key, value=value)
            self.db.add(row)
        else:
            row.value = value
        self.db.flush()
        return row

    def update_multiple(self, values: dict[str, str]) -> None:
        """Upsert every key in *values*. Nothing is committed here."""
        for key, value in values.items():
            self.upsert(key, value)
