import logging
from typing import Optional

from fastapi import Security
from fastapi.security.api_key import APIKeyHeader

from log_endpoint.core.config import get_settings
from log_endpoint.core.exceptions import AuthError
from log_endpoint.core.usage import API_KEY_HEADER
from log_endpoint.services.help_service import HelpService
from log_endpoint.services.logs_service import LogsService

logger = logging.getLogger(__name__)

api_key_header_auth_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


async def verify_api_key(
    api_key: Optional[str] = Security(api_key_header_auth_scheme),
) -> str:
    """
    Checks the x-api-key header against the configured shared secret.
    """
    settings = get_settings()

    if not api_key:
        logger.warning(f"Request without {API_KEY_HEADER} header rejected.")
        raise AuthError("Missing API key")

    if not settings.API_KEY or api_key != settings.API_KEY:
        logger.warning(f"Request with invalid API key rejected: {api_key[:4]}...")
        raise AuthError("Invalid API key")

    return api_key


def get_logs_service() -> LogsService:
    return LogsService()


def get_help_service() -> HelpService:
    return HelpService(get_settings().HELP_GUIDE_PATH)
