"""Shared fixtures: a real Cloud Logging client over a stubbed HTTP transport."""

import os
from typing import Any, Dict, List, Optional

import pytest

os.environ.setdefault("API_KEY", "test-api-key")

from fastapi.testclient import TestClient  # noqa: E402
from google.auth.credentials import AnonymousCredentials  # noqa: E402
from google.cloud.logging_v2 import Client  # noqa: E402

from log_endpoint.api.deps import get_logs_service  # noqa: E402
from log_endpoint.core.config import get_settings  # noqa: E402
from log_endpoint.main import app  # noqa: E402
from log_endpoint.services.logs_service import LogsService  # noqa: E402

API_KEY = "test-api-key"
PROJECT = "test-project"

RESOURCE = {
    "type": "cloud_run_revision",
    "labels": {"service_name": "backend", "revision_name": "backend-00042"},
}


class EntriesListStub:
    """Replaces Connection.api_request: records calls and replays response pages."""

    def __init__(self, pages: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.pages = pages if pages is not None else [{}]
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, method: str, path: str, data: Optional[Dict[str, Any]] = None, **kwargs):
        self.calls.append({"method": method, "path": path, "data": data, **kwargs})
        if self.error is not None:
            raise self.error
        return self.pages[min(len(self.calls), len(self.pages)) - 1]


def make_entries() -> List[Dict[str, Any]]:
    """Entries as returned by the entries.list REST call, newest first."""
    log_name = f"projects/{PROJECT}/logs/run.googleapis.com%2Fstderr"
    return [
        {
            "logName": log_name,
            "textPayload": "upstream timed out",
            "timestamp": "2024-05-01T12:00:02.123456789Z",
            "receiveTimestamp": "2024-05-01T12:00:02.200000000Z",
            "severity": "ERROR",
            "resource": RESOURCE,
            "insertId": "insert-3",
            "labels": {"instanceId": "abc"},
        },
        {
            "logName": log_name,
            "jsonPayload": {"message": "request failed", "status": 502},
            "timestamp": "2024-05-01T12:00:01Z",
            "severity": "ERROR",
            "resource": RESOURCE,
            "insertId": "insert-2",
            "trace": f"projects/{PROJECT}/traces/0123",
        },
        {
            "logName": f"projects/{PROJECT}/logs/cloudaudit.googleapis.com%2Factivity",
            "protoPayload": {
                "@type": "type.googleapis.com/google.cloud.audit.AuditLog",
                "methodName": "google.cloud.run.v1.Services.ReplaceService",
            },
            "timestamp": "2024-05-01T12:00:00Z",
            "severity": "NOTICE",
            "resource": RESOURCE,
            "insertId": "insert-1",
        },
    ]


def make_logging_client(stub: EntriesListStub) -> Client:
    client = Client(project=PROJECT, credentials=AnonymousCredentials(), _use_grpc=False)
    client._connection.api_request = stub
    return client


@pytest.fixture(autouse=True)
def api_key_env(monkeypatch):
    monkeypatch.setenv("API_KEY", API_KEY)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend() -> EntriesListStub:
    return EntriesListStub(pages=[{"entries": make_entries()}])


@pytest.fixture
def client(backend):
    logging_client = make_logging_client(backend)
    app.dependency_overrides[get_logs_service] = lambda: LogsService(logging_client)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"x-api-key": API_KEY}
