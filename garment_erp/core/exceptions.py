from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            message=f"{entity} {entity_id} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"entity": entity, "id": str(entity_id)}
        )

class ValidationFailed(AppException):
    """Input rejected before any write was attempted."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=422,
            error_code="VALIDATION_FAILED",
            details=details
        )

class ConflictError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details
        )

class DataStoreError(AppException):
    """A query against the backing store failed (connection, SQL or constraint error)."""
    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=503,
            error_code="DATA_STORE_ERROR",
            details={"table": table} if table else None
        )
        self.table = table

class UniqueViolation(DataStoreError):
    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(message, table=table)
        self.status_code = 409
        self.error_code = "UNIQUE_VIOLATION"
