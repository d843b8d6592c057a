import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from log_endpoint.api.routes import api_router
from log_endpoint.core.config import get_settings
from log_endpoint.core.exceptions import register_exception_handlers
from log_endpoint.core.middleware import register_middleware

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("--- Application startup ---")
    logger.info(f"Project Name: {settings.PROJECT_NAME}")
    logger.info(f"API Version: {settings.PROJECT_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if not settings.API_KEY:
        logger.warning("API_KEY is not set: every request to the query endpoint will be rejected.")

    yield

    logger.info("--- Application shutdown ---")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    register_middleware(app, settings)
    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


def run():
    logger.info(f"Log endpoint service listening on port {settings.PORT}")
    uvicorn.run(
        "log_endpoint.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
