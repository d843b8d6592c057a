import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from google.api_core.datetime_helpers import from_rfc3339
from google.cloud.logging_v2 import DESCENDING, Client
from starlette.concurrency import run_in_threadpool

from log_endpoint.core.config import get_settings
from log_endpoint.core.exceptions import BackendError
from log_endpoint.schemas.logs import LogEntry, QueryLogsRequest

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "cloud_run_revision"

ENTRIES_LIST_PATH = "/entries:list"

PAYLOAD_KEYS = ("textPayload", "jsonPayload", "protoPayload")


def build_filter(service: str, extra_filter: str = "") -> str:
    """
    Scope a Cloud Logging query to one Cloud Run service.

    The service name is interpolated as-is and the extra filter is appended
    verbatim; neither is escaped nor validated here.
    """
    return (
        f'resource.type="{RESOURCE_TYPE}" '
        f'resource.labels.service_name="{service}" '
        f"{extra_filter}"
    )


@lru_cache(maxsize=None)
def get_logging_client() -> Client:
    settings = get_settings()
    return Client(project=settings.GOOGLE_CLOUD_PROJECT)


def _payload_of(entry: Dict[str, Any]) -> Any:
    for key in PAYLOAD_KEYS:
        if key in entry:
            return entry[key]
    return None


def project_entry(entry: Dict[str, Any]) -> LogEntry:
    """Keep only the fields exposed to callers."""
    timestamp = entry.get("timestamp")
    return LogEntry(
        timestamp=from_rfc3339(timestamp) if timestamp else None,
        severity=entry.get("severity"),
        message=_payload_of(entry),
        resource=entry.get("resource"),
        insert_id=entry.get("insertId"),
    )


def backend_error_message(exc: Exception) -> str:
    # google.api_core errors carry the server text in .message
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


class LogsService:
    """Queries Cloud Logging for entries emitted by a Cloud Run service."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_logging_client()
        return self._client

    def _fetch_page(self, log_filter: str, page_size: int) -> List[Dict[str, Any]]:
        # One entries.list call; Client.list_entries would keep following
        # nextPageToken until page_size entries arrive.
        response = self.client._connection.api_request(
            method="POST",
            path=ENTRIES_LIST_PATH,
            data={
                "resourceNames": [f"projects/{self.client.project}"],
                "filter": log_filter,
                "orderBy": DESCENDING,
                "pageSize": page_size,
            },
        )
        return response.get("entries", [])

    async def query_logs(self, request: QueryLogsRequest) -> List[LogEntry]:
        """
        Fetch a single page of entries, newest first.

        Args:
            request: validated query parameters, `service` must be set

        Returns:
            List[LogEntry]: projected entries in backend order

        Raises:
            BackendError: the backend call failed for any reason
        """
        log_filter = build_filter(request.service, request.filter)
        logger.info(f"Querying logs with filter: {log_filter}")

        try:
            entries = await run_in_threadpool(self._fetch_page, log_filter, request.limit)
        except Exception as e:
            logger.error(f"Error fetching logs: {e}", exc_info=True)
            raise BackendError(backend_error_message(e)) from e

        return [project_entry(entry) for entry in entries]
