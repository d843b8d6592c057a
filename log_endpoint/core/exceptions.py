import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from log_endpoint.core.usage import AVAILABLE_ENDPOINTS, build_usage
from log_endpoint.schemas.common import ErrorResponse, UsageHint

logger = logging.getLogger(__name__)

SERVICE_REQUIRED_MESSAGE = "Service name is required"


class LogEndpointError(Exception):
    """Base error converted to a JSON envelope at the handler boundary."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"
    hint: Optional[str] = None
    with_usage: bool = True

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        error: Optional[str] = None,
        hint: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message or error or self.error)
        self.message = message
        if error is not None:
            self.error = error
        if hint is not None:
            self.hint = hint
        self.details = details
        self.headers = headers

    def usage(self) -> Optional[UsageHint]:
        return build_usage(self.hint) if self.with_usage else None

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.error,
            message=self.message,
            details=self.details,
            usage=self.usage(),
        )


class AuthError(LogEndpointError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    hint = "Provide a valid API key in the x-api-key header"


class RequestValidationFailed(LogEndpointError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid request"
    hint = "The 'service' field is required; 'filter' and 'limit' are optional"


class MalformedInputError(LogEndpointError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid JSON"
    hint = "Request body must be a valid JSON object sent with Content-Type: application/json"


class BackendError(LogEndpointError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Failed to retrieve logs"
    hint = "Check that the filter uses valid Cloud Logging query syntax"


class NotFoundError(LogEndpointError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"
    with_usage = False

    def to_response(self) -> ErrorResponse:
        response = super().to_response()
        response.available_endpoints = list(AVAILABLE_ENDPOINTS)
        return response


def error_response(exc: LogEndpointError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(by_alias=True, exclude_none=True),
        headers=exc.headers,
    )


def _is_missing_body(errors: List[Dict[str, Any]]) -> bool:
    return bool(errors) and all(
        err.get("type") == "missing" and tuple(err.get("loc", ())) == ("body",)
        for err in errors
    )


async def log_endpoint_error_handler(request: Request, exc: LogEndpointError):
    return error_response(exc)


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = list(exc.errors())

    if any(err.get("type") == "json_invalid" for err in errors):
        logger.warning(f"Malformed JSON body on {request.method} {request.url.path}")
        return error_response(MalformedInputError("Request body could not be parsed as JSON"))

    if _is_missing_body(errors):
        return error_response(RequestValidationFailed(error=SERVICE_REQUIRED_MESSAGE))

    details = jsonable_encoder(
        [{"loc": err.get("loc"), "msg": err.get("msg"), "type": err.get("type")} for err in errors]
    )
    return error_response(
        RequestValidationFailed("Request body failed validation", details=details)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # a known path with the wrong method counts as an unmatched route
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(
            NotFoundError(f"Route {request.method} {request.url.path} not found")
        )

    generic = LogEndpointError(error=str(exc.detail), headers=getattr(exc, "headers", None))
    generic.status_code = exc.status_code
    return error_response(generic)


async def unhandled_exception_handler(request: Request, exc: Exception):
    # ServerErrorMiddleware re-raises afterwards, the server logs the traceback
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        LogEndpointError("An unexpected error occurred while processing the request")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LogEndpointError, log_endpoint_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
