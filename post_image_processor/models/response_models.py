# Models for per-record outcomes and handler responses
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RecordStatus(str, Enum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


class RecordResult(BaseModel):
    """Outcome of running the pipeline on one event record"""
    status: RecordStatus
    post_id: Optional[str] = None
    point_id: Optional[str] = None
    stage: Optional[str] = None
    error: Optional[str] = None
    execution_time: Optional[float] = None


class BatchReport(BaseModel):
    """Accumulates record results for one invocation"""
    results: List[RecordResult] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def add(self, result: RecordResult) -> None:
        self.results.append(result)
        if result.status == RecordStatus.FAILED:
            self.error = result.error

    def fail(self, message: str) -> None:
        self.error = message

    def count(self, status: RecordStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    def to_response(self) -> Dict[str, Any]:
        """Binary handler response: full success or failure with the triggering message"""
        if self.failed:
            return {"statusCode": 500, "body": {"error": self.error}}
        return {"statusCode": 200, "body": {"success": True}}
