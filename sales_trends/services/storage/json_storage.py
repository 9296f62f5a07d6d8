import json
from pathlib import Path
from typing import Any, Optional
from sales_trends.lib.exceptions import StorageError
from sales_trends.lib.logger import log
from sales_trends.schemas.trends import SalesRecord
from sales_trends.services.storage.base import IStorage

class JsonFileStorage(IStorage):
    """
    File-backed store for installations without a database.

    The file holds ``{"sales": [...], "settings": {...}}``; a missing file is an
    empty store. Settings writes rewrite the whole file.
    """
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: Optional[dict[str, Any]] = None

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            if not self.path.exists():
                log.warning(f"Storage file {self.path} not found, starting empty")
                self._data = {"sales": [], "settings": {}}
            else:
                try:
                    self._data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
                except (OSError, json.JSONDecodeError) as e:
                    raise StorageError(f"Could not read storage file {self.path}: {e}") from e
        return self._data

    def get_sales(self) -> list[SalesRecord]:
        rows = self._load().get("sales") or []
        return [SalesRecord.model_validate(row) for row in rows]

    def get_setting(self, key: str) -> Optional[str]:
        return (self._load().get("settings") or {}).get(key)

    def set_setting(self, key: str, value: str) -> None:
        data = self._load()
        data.setdefault("settings", {})[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
