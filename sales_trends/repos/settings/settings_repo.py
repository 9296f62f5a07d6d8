from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import text, bindparam, DateTime


class SettingsRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> Optional[str]:
        """
        Fetches the value stored under ``key`` in the settings table.
        """
        query_str = """
            SELECT value
            FROM settings
            WHERE key = :key
            LIMIT 1
        """

        result = self.db.execute(text(query_str), {"key": key})

        return result.scalar_one_or_none()

    def upsert_value(self, key: str, value: str) -> None:
        """
        Updates the row for ``key`` or inserts it when missing, then commits.
        """
        params = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc),
        }
        updated_at = bindparam("updated_at", type_=DateTime(timezone=True))

        result = self.db.execute(
            text("UPDATE settings SET value = :value, updated_at = :updated_at WHERE key = :key")
            .bindparams(updated_at),
            params,
        )
        if result.rowcount == 0:
            self.db.execute(
                text("INSERT INTO settings (key, value, updated_at) VALUES (:key, :value, :updated_at)")
                .bindparams(updated_at),
                params,
            )
        self.db.commit()
