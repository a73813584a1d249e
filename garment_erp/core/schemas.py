from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field
from datetime import datetime, timezone

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope for batch endpoints. ``success`` describes the call as a whole;
    items that failed inside the batch are reported in ``data`` and
    summarised in ``warnings``.
    """
    success: bool = True
    data: Optional[T] = None
    warnings: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(
        cls,
        data: T,
        metadata: Optional[Dict[str, Any]] = None,
        warnings: Optional[List[str]] = None,
    ) -> "ApiResponse[T]":
        return cls(data=data, metadata=metadata or {}, warnings=warnings or [])
