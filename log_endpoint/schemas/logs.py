from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE_SIZE = 1000


class QueryLogsRequest(BaseModel):
    service: Optional[str] = Field(
        None, description="Cloud Run service name whose logs are queried"
    )
    filter: str = Field(
        "", description="Extra Cloud Logging filter appended verbatim (e.g. severity>=ERROR)"
    )
    limit: int = Field(
        DEFAULT_PAGE_SIZE, description="Maximum number of entries returned", ge=1
    )


class LogEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: Optional[datetime] = None
    severity: Optional[str] = None
    message: Any = None
    resource: Optional[Dict[str, Any]] = None
    insert_id: Optional[str] = Field(None, alias="insertId")


class QueryLogsResponse(BaseModel):
    service: str
    count: int
    logs: List[LogEntry]
