from typing import Optional

from log_endpoint.schemas.common import UsageExample, UsageHint

API_KEY_HEADER = "x-api-key"

QUERY_LOGS_PATH = "/query-logs"
HELP_PATH = "/help"

AVAILABLE_ENDPOINTS = [
    "GET /",
    f"GET {HELP_PATH}",
    f"POST {QUERY_LOGS_PATH}",
]

EXAMPLE_BODY = {
    "service": "backend",
    "filter": "severity>=ERROR",
    "limit": 10,
}


def build_usage(hint: Optional[str] = None) -> UsageHint:
    """Usage block attached to every error envelope except not-found."""
    return UsageHint(
        endpoint=QUERY_LOGS_PATH,
        method="POST",
        authentication=f"Include header '{API_KEY_HEADER}: <your-api-key>'",
        documentation=f"GET {HELP_PATH} for full documentation",
        example=UsageExample(
            headers={
                API_KEY_HEADER: "<your-api-key>",
                "Content-Type": "application/json",
            },
            body=dict(EXAMPLE_BODY),
        ),
        hint=hint,
    )
