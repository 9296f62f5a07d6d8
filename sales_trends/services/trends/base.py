from abc import ABC, abstractmethod
from sales_trends.schemas.trends import TrendsRequest, ResultPayload

class ITrendsService(ABC):
    @abstractmethod
    def predict_trends(self, params: TrendsRequest) -> ResultPayload:
        pass
