import boto3
import json
from typing import Any, Optional
from sales_trends.lib.logger import log
from sales_trends.core.config import settings

class S3Client:
    """
    S3 Client for reading and writing prediction artifacts from/to AWS S3 using boto3.
    """
    def __init__(self, region: Optional[str] = None):
        self.region = region or settings.AWS_REGION
        self.client = boto3.client(
            "s3",
            region_name=self.region,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )

    def write_json(self, bucket: str, key: str, data: Any) -> str:
        """
        Serializes ``data`` to JSON and uploads it to s3://bucket/key.
        Returns the object URI.
        """
        uri = f"s3://{bucket}/{key}"
        try:
            log.info(f"Writing json to {uri} using boto3")

            body = json.dumps(data, indent=2, default=str).encode("utf-8")
            self.client.put_object(Bucket=bucket, Key=key, Body=body, ContentType="application/json")

            log.info(f"Successfully wrote {len(body)} bytes to {uri}")
            return uri
        except Exception as e:
            log.error(f"Error writing json to {uri}: {str(e)}")
            raise e
