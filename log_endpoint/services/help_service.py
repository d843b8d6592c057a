import logging
import os
from typing import Any, Dict, Optional

from log_endpoint.core.usage import (
    API_KEY_HEADER,
    AVAILABLE_ENDPOINTS,
    EXAMPLE_BODY,
    QUERY_LOGS_PATH,
)
from log_endpoint.schemas.logs import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


class HelpService:
    """Serves the usage guide for the API"""

    def __init__(self, guide_path: str):
        self.guide_path = guide_path

    def read_guide(self) -> Optional[str]:
        """Markdown guide contents, or None when no guide is installed.

        Raises OSError if the guide exists but cannot be read.
        """
        if not os.path.isfile(self.guide_path):
            logger.debug(f"Usage guide not found at {self.guide_path}")
            return None

        with open(self.guide_path, "r", encoding="utf-8") as f:
            return f.read()

    @staticmethod
    def describe_api(service_name: str) -> Dict[str, Any]:
        return {
            "service": service_name,
            "description": "Query Google Cloud Logging entries for a Cloud Run service",
            "endpoints": {
                "GET /": "Service status and available endpoints",
                "GET /help": "This documentation",
                f"POST {QUERY_LOGS_PATH}": {
                    "authentication": f"Header '{API_KEY_HEADER}' must match the configured API key",
                    "body": {
                        "service": "string, required. Cloud Run service name",
                        "filter": "string, optional. Cloud Logging filter appended to the query",
                        "limit": f"integer, optional. Maximum entries returned (default {DEFAULT_PAGE_SIZE})",
                    },
                    "response": {
                        "service": "string",
                        "count": "integer",
                        "logs": "array of {timestamp, severity, message, resource, insertId}",
                    },
                    "example": dict(EXAMPLE_BODY),
                },
            },
            "availableEndpoints": list(AVAILABLE_ENDPOINTS),
        }
