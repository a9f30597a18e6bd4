from pydantic import BaseModel, ConfigDict
from typing import List


class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str  # ISO-8601, UTC
    message: str


class ActivityLogResponse(BaseModel):
    recent_logs: List[LogEntry]
    total_logs: int
