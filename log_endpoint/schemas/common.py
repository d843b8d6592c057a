from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UsageExample(BaseModel):
    headers: Dict[str, str]
    body: Dict[str, Any]


class UsageHint(BaseModel):
    endpoint: str
    method: str
    authentication: str
    documentation: str
    example: UsageExample
    hint: Optional[str] = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    message: Optional[str] = None
    details: Optional[List[Dict[str, Any]]] = None
    usage: Optional[UsageHint] = None
    available_endpoints: Optional[List[str]] = Field(None, alias="availableEndpoints")


class ServiceInfo(BaseModel):
    service: str
    status: str
    version: str
    endpoints: List[str]
