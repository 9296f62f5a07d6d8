import json
from datetime import datetime, timezone
from typing import Optional
from sales_trends.core.config import settings
from sales_trends.lib.exceptions import PersistenceError
from sales_trends.lib.logger import log
from sales_trends.schemas.trends import TrendsRequest, ResultPayload
from sales_trends.services.storage.base import IStorage
from sales_trends.services.trends.base import ITrendsService
from sales_trends.services.trends.pipeline import forecast_trends, resolve_zone
from sales_trends.services.trends.sinks import ISink, SettingsSink, payload_filename

class TrendsService(ITrendsService):
    """
    Loads the sales history, runs the forecast and persists the result.
    """

    def __init__(self, storage: IStorage, sinks: list[ISink], timezone_name: Optional[str] = None):
        self.storage = storage
        self.sinks = sinks
        self.timezone_name = timezone_name or settings.TIMEZONE

    def predict_trends(self, params: TrendsRequest) -> ResultPayload:
        """
        Main entry point: read, forecast, persist. Storage and sink failures propagate.
        """
        zone = resolve_zone(self.timezone_name)
        try:
            sales = self.storage.get_sales()
        except Exception as e:
            log.exception(f"Failed to load sales history: {e}")
            raise e

        payload = forecast_trends(sales, params, zone=zone)
        self._persist(payload, params)
        return payload

    def _persist(self, payload: ResultPayload, params: TrendsRequest) -> None:
        sinks = list(self.sinks)
        if params.store_db:
            sinks.append(SettingsSink(self.storage))

        for sink in sinks:
            location = sink.save(payload)
            log.info(f"Predictions saved to {location}")

        if params.notify:
            self._record_notification(payload)

    def _record_notification(self, payload: ResultPayload) -> None:
        # Marker only, nothing is delivered
        key = f"predictions-notify:{payload_filename(payload)}"
        marker = {
            "notifiedAt": datetime.now(timezone.utc).isoformat(),
            "note": "notify flag set (implementation: console/logging only)",
        }
        try:
            self.storage.set_setting(key, json.dumps(marker))
        except Exception as e:
            log.error(f"Error recording notification marker {key}: {str(e)}")
            raise PersistenceError(f"Could not record notification marker {key}: {e}") from e
        log.info(f"Notification marker recorded under {key}")
