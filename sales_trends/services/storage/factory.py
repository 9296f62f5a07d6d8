from typing import Generator
from sales_trends.core.config import settings
from sales_trends.lib.database import db_manager
from sales_trends.lib.logger import log
from sales_trends.services.storage.base import IStorage
from sales_trends.services.storage.json_storage import JsonFileStorage
from sales_trends.services.storage.sql_storage import SqlStorage

def get_storage() -> Generator[IStorage, None, None]:
    """
    Yields the storage configured by STORAGE_BACKEND.
    Use with FastAPI: Depends(get_storage), or as a context manager via contextlib.
    """
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "json":
        yield JsonFileStorage(settings.JSON_STORAGE_PATH)
        return
    if backend != "sql":
        log.warning(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
        raise NotImplementedError(f"Storage backend {settings.STORAGE_BACKEND} is not implemented.")

    db = db_manager.get_session()
    try:
        yield SqlStorage(db)
    finally:
        db.close()
