import logging

from fastapi import APIRouter, Depends

from log_endpoint.api.deps import get_logs_service, verify_api_key
from log_endpoint.core.exceptions import SERVICE_REQUIRED_MESSAGE, RequestValidationFailed
from log_endpoint.core.usage import QUERY_LOGS_PATH
from log_endpoint.schemas.common import ErrorResponse
from log_endpoint.schemas.logs import QueryLogsRequest, QueryLogsResponse
from log_endpoint.services.logs_service import LogsService

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Logs"],
    dependencies=[Depends(verify_api_key)],
)


@router.post(
    QUERY_LOGS_PATH,
    response_model=QueryLogsResponse,
    summary="Query Service Logs",
    description="Fetch the most recent Cloud Logging entries of a Cloud Run service",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def query_logs_endpoint(
    request: QueryLogsRequest,
    logs_service: LogsService = Depends(get_logs_service),
):
    """
    Query logs of one service.

    - **service**: Cloud Run service name (required)
    - **filter**: extra Cloud Logging filter, appended verbatim
    - **limit**: page size, defaults to 1000
    """
    if not request.service:
        raise RequestValidationFailed(error=SERVICE_REQUIRED_MESSAGE)

    logs = await logs_service.query_logs(request)
    logger.info(f"Returning {len(logs)} log entries for service {request.service}")

    return QueryLogsResponse(
        service=request.service,
        count=len(logs),
        logs=logs,
    )
