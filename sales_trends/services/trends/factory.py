from sales_trends.core.config import settings
from sales_trends.lib.logger import log
from sales_trends.lib.s3_client import S3Client
from sales_trends.services.storage.base import IStorage
from sales_trends.services.trends.base import ITrendsService
from sales_trends.services.trends.sinks import ISink, FileSink, S3Sink
from sales_trends.services.trends.trends_service import TrendsService

class TrendsServiceFactory:
    """
    Factory to create the TrendsService with the sinks enabled in the settings.
    """

    @staticmethod
    def get_sinks() -> list[ISink]:
        sinks: list[ISink] = [FileSink(settings.PREDICTIONS_DIR)]
        if settings.AWS_S3_BUCKET:
            log.info(f"Mirroring predictions to s3://{settings.AWS_S3_BUCKET}/{settings.PREDICTIONS_S3_PREFIX}")
            sinks.append(S3Sink(S3Client(), settings.AWS_S3_BUCKET, settings.PREDICTIONS_S3_PREFIX))
        return sinks

    @staticmethod
    def get_service(storage: IStorage) -> ITrendsService:
        """
        Returns a service reading from ``storage`` and writing to the configured sinks.
        """
        return TrendsService(storage, TrendsServiceFactory.get_sinks())
