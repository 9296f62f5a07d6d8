from typing import List, Optional
from fastapi import APIRouter, Body, Depends
from sales_trends.schemas.trends import TrendsRequest, ForecastPoint
from sales_trends.services.storage.base import IStorage
from sales_trends.services.storage.factory import get_storage
from sales_trends.services.trends.base import ITrendsService
from sales_trends.services.trends.factory import TrendsServiceFactory
from sales_trends.lib.logger import log

router = APIRouter(prefix="/v1/predict", tags=["Predictions"])

def get_service(storage: IStorage = Depends(get_storage)) -> ITrendsService:
    """
    Dependency to get a TrendsService bound to the request's storage.
    """
    return TrendsServiceFactory.get_service(storage)

@router.post("/trends", response_model=List[ForecastPoint])
def predict_trends(
    params: Optional[TrendsRequest] = Body(None),
    service: ITrendsService = Depends(get_service)
):
    """
    Runs the daily revenue forecast and returns the predictions.
    The full payload is persisted by the service. A missing body means all defaults.
    """
    params = params or TrendsRequest()
    log.info(f"Trends prediction requested: {params.model_dump(by_alias=True, exclude_unset=True)}")
    result = service.predict_trends(params)
    return result.predictions
