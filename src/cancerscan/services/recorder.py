"""Persistence of prediction records in Firestore."""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Optional

from google.api_core import exceptions as gcloud_exceptions
from google.auth.exceptions import GoogleAuthError
from google.cloud import firestore

from ..utils.logger import get_logger
from .errors import PersistenceError

logger = get_logger(__name__)


@dataclass(frozen=True)
class PredictionRecord:
    id: str
    result: str
    suggestion: str
    createdAt: str

    def to_dict(self) -> dict:
        return asdict(self)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PredictionRecorder:
    """Writes one document per prediction, keyed by its generated id.

    The store client is created on first use so that requests rejected before
    inference never touch credentials.
    """

    def __init__(self, client_factory: Callable[[], Any], collection: str = "predictions") -> None:
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self.collection = collection

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def record(self, result: str, suggestion: str) -> PredictionRecord:
        """Write a new record under a fresh id and return it."""
        record = PredictionRecord(
            id=str(uuid.uuid4()),
            result=result,
            suggestion=suggestion,
            createdAt=utc_timestamp(),
        )
        try:
            self.client.collection(self.collection).document(record.id).set(record.to_dict())
        except (gcloud_exceptions.GoogleAPIError, GoogleAuthError, OSError, ValueError) as exc:
            raise PersistenceError(f"Failed to store prediction {record.id}: {exc}") from exc
        logger.info(f"Stored prediction {record.id} in {self.collection}")
        return record


@lru_cache(maxsize=4)
def get_firestore_client(credentials_path: str, project: Optional[str] = None) -> firestore.Client:
    return firestore.Client.from_service_account_json(credentials_path, project=project)
