import logging

from fastapi import APIRouter, Depends, Response

from log_endpoint.api.deps import get_help_service
from log_endpoint.core.config import get_settings
from log_endpoint.core.exceptions import LogEndpointError
from log_endpoint.core.usage import AVAILABLE_ENDPOINTS, HELP_PATH
from log_endpoint.schemas.common import ServiceInfo
from log_endpoint.services.help_service import HelpService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public"])


@router.get(
    "/",
    response_model=ServiceInfo,
    summary="Service Status",
    description="Service identity and list of available endpoints",
)
async def root():
    settings = get_settings()
    return ServiceInfo(
        service=settings.PROJECT_NAME,
        status="running",
        version=settings.PROJECT_VERSION,
        endpoints=list(AVAILABLE_ENDPOINTS),
    )


@router.get(
    HELP_PATH,
    summary="Usage Guide",
    description="Markdown usage guide, or a JSON description of the API when no guide is installed",
)
async def help_endpoint(help_service: HelpService = Depends(get_help_service)):
    try:
        guide = help_service.read_guide()
    except OSError as e:
        logger.error(f"Could not read usage guide {help_service.guide_path}: {e}")
        raise LogEndpointError(
            "Could not load documentation", error="Failed to load documentation"
        ) from e

    if guide is None:
        return help_service.describe_api(get_settings().PROJECT_NAME)

    return Response(content=guide, media_type="text/markdown; charset=utf-8")
