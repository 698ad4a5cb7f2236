from fastapi import status
from typing import Any, Dict, Optional


class ProviderError(Exception):
    """Raised by store clients when a provider answers with an error or unusable data."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the flat error envelope returned to callers."""
        return {"error": self.detail}


class ValidationError(APIException):
    """Exception raised when a request is missing or carries an invalid field."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            context=merged_context
        )
        self.field = field

    @classmethod
    def required(cls, field: str) -> "ValidationError":
        """Build the error for an absent required field."""
        return cls(detail=f"{field} is required", code="missing_field", field=field)


class UpstreamError(APIException):
    """Exception raised when a catalog provider call fails."""

    def __init__(
        self,
        detail: str = "Upstream catalog error",
        code: str = "upstream_error",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        merged_context = {"operation": operation} if operation else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=code,
            context=merged_context
        )
        self.operation = operation
        self.original_exception = original_exception

        # Add original exception info to context if available
        if original_exception is not None:
            self.context["original_error"] = type(original_exception).__name__

    @classmethod
    def from_exception(cls, operation: str, exc: Exception) -> "UpstreamError":
        """Wrap an adapter failure, keeping its message as the error detail."""
        return cls(detail=str(exc) or type(exc).__name__, operation=operation, original_exception=exc)
