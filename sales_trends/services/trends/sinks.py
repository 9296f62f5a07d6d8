import json
from abc import ABC, abstractmethod
from datetime import timezone
from pathlib import Path
from sales_trends.lib.exceptions import PersistenceError
from sales_trends.lib.logger import log
from sales_trends.lib.s3_client import S3Client
from sales_trends.schemas.trends import ResultPayload
from sales_trends.services.storage.base import IStorage


def payload_filename(payload: ResultPayload) -> str:
    """``trends_<YYYY-MM-DD>.json`` for the UTC day the payload was generated."""
    generated = payload.generated_at
    if generated.tzinfo is not None:
        generated = generated.astimezone(timezone.utc)
    return f"trends_{generated.date().isoformat()}.json"


class ISink(ABC):
    @abstractmethod
    def save(self, payload: ResultPayload) -> str:
        """Persists the payload and returns where it was written."""


class FileSink(ISink):
    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def save(self, payload: ResultPayload) -> str:
        path = self.directory / payload_filename(payload)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload.to_json_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            log.error(f"Error writing predictions to {path}: {str(e)}")
            raise PersistenceError(f"Could not write predictions file {path}: {e}") from e
        return str(path)


class SettingsSink(ISink):
    """Stores the payload in the settings table under ``predictions:<filename>``."""
    def __init__(self, storage: IStorage):
        self.storage = storage

    def save(self, payload: ResultPayload) -> str:
        key = f"predictions:{payload_filename(payload)}"
        try:
            self.storage.set_setting(key, json.dumps(payload.to_json_dict()))
        except Exception as e:
            log.error(f"Error storing predictions under setting {key}: {str(e)}")
            raise PersistenceError(f"Could not store predictions setting {key}: {e}") from e
        return f"settings:{key}"


class S3Sink(ISink):
    def __init__(self, client: S3Client, bucket: str, prefix: str = ""):
        self.client = client
        self.bucket = bucket
        self.prefix = prefix.strip("/")

    def save(self, payload: ResultPayload) -> str:
        filename = payload_filename(payload)
        key = f"{self.prefix}/{filename}" if self.prefix else filename
        try:
            return self.client.write_json(self.bucket, key, payload.to_json_dict())
        except Exception as e:
            raise PersistenceError(f"Could not upload predictions to s3://{self.bucket}/{key}: {e}") from e
