from contextlib import contextmanager
import json
from typing import Dict, Any
from sales_trends.schemas.trends import TrendsRequest
from sales_trends.services.storage.factory import get_storage
from sales_trends.services.trends.factory import TrendsServiceFactory
from sales_trends.lib.logger import log

class TrendsTools:
    @contextmanager
    def _service(self):
        with contextmanager(get_storage)() as storage:
            yield TrendsServiceFactory.get_service(storage)

    def predict_trends(self, request: Dict[str, Any]) -> Dict[str, Any]:
        log.info(f"Request received for trends prediction: {request}")
        try:
            req_model = TrendsRequest.model_validate(request)
            with self._service() as service:
                result = service.predict_trends(req_model)

            predictions = [p.model_dump(mode="json") for p in result.predictions]
            json_output = json.dumps(predictions, indent=2)
            log.info(f"Trends prediction produced {len(predictions)} points")

            return {
                "content": [{"type": "text", "text": json_output}],
                "structuredContent": {"predictions": predictions},
            }
        except Exception as e:
            log.error(f"Error calling trends prediction: {str(e)}")
            error_output = {"error": f"Unexpected error: {str(e)}"}
            return {
                "content": [{"type": "text", "text": json.dumps(error_output, indent=2)}],
                "structuredContent": error_output,
            }

trends_tools = TrendsTools()
