from typing import Optional
from sqlalchemy.orm import Session
from sales_trends.repos.sales.sales_repo import SalesRepo
from sales_trends.repos.settings.settings_repo import SettingsRepo
from sales_trends.schemas.trends import SalesRecord
from sales_trends.services.storage.base import IStorage
from sales_trends.lib.logger import log

class SqlStorage(IStorage):
    """
    Storage backed by the application's relational database.
    """
    def __init__(self, db: Session):
        self.sales_repo = SalesRepo(db)
        self.settings_repo = SettingsRepo(db)

    def get_sales(self) -> list[SalesRecord]:
        rows = self.sales_repo.get_all_sales()
        log.info(f"Loaded {len(rows)} sales rows from the database")
        return [SalesRecord(**row) for row in rows]

    def get_setting(self, key: str) -> Optional[str]:
        return self.settings_repo.get_value(key)

    def set_setting(self, key: str, value: str) -> None:
        self.settings_repo.upsert_value(key, value)
