from fastapi import APIRouter

from log_endpoint.api.routers import logs, public

api_router = APIRouter()

api_router.include_router(public.router)
api_router.include_router(logs.router)
