from abc import ABC, abstractmethod
from typing import Optional
from sales_trends.schemas.trends import SalesRecord

class IStorage(ABC):
    @abstractmethod
    def get_sales(self) -> list[SalesRecord]:
        pass

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        pass
