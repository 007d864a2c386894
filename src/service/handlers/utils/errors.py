"""
Error handling utilities for the items Lambda handler.

Every failure raised by the handler, logic and data access layers is a
BaseServiceError carrying a reason string. The handler layer maps the error
code to an HTTP status and serializes only the reason, never the exception.
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from service.handlers.utils.observability import logger, metrics, tracer
from service.models.output import ErrorOutput, OperationName, ResultMessage


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        result_message: ResultMessage = ResultMessage.FAILED,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.result_message = result_message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        # "message" is a reserved LogRecord attribute
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "result_message": self.result_message.value,
        }


class RequestValidationError(BaseServiceError):
    """Raised when the request payload cannot be parsed or lacks required fields."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="VALIDATION_ERROR")


class ItemNotFoundError(BaseServiceError):
    """Raised when no record exists for the requested primary key."""

    def __init__(self, item_id: Any):
        super().__init__(
            message=f"Item with id '{item_id}' not found",
            error_code="ITEM_NOT_FOUND",
            result_message=ResultMessage.NOT_FOUND,
        )
        self.item_id = item_id


class RouteNotFoundError(BaseServiceError):
    """Raised when no route matches the request method and path."""

    def __init__(self, http_method: Optional[str], path: Optional[str]):
        super().__init__(
            message=f"No route for {http_method} {path}",
            error_code="ROUTE_NOT_FOUND",
            result_message=ResultMessage.NOT_FOUND,
        )
        self.http_method = http_method
        self.path = path


class DALError(BaseServiceError):
    """Raised when a DynamoDB call fails."""

    def __init__(self, message: str, operation: str, table_name: str, error_code: str = "DAL_ERROR"):
        super().__init__(message=message, error_code=error_code)
        self.operation = operation
        self.table_name = table_name


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""

    if isinstance(error, DALError):
        # Store failures of any kind surface as bad requests
        return 400

    status_mapping = {
        "VALIDATION_ERROR": 400,
        "ITEM_NOT_FOUND": 404,
        "ROUTE_NOT_FOUND": 404,
    }

    return status_mapping.get(error.error_code, 500)


def format_error_response(error: BaseServiceError, operation: Optional[OperationName] = None) -> Dict[str, Any]:
    """Format error for API response."""
    return ErrorOutput(
        operation=operation,
        message=error.result_message,
        error=error.message,
    ).model_dump(by_alias=True)


@tracer.capture_method
def log_error_metrics(error: BaseServiceError, operation: Optional[OperationName] = None) -> None:
    """Log error metrics for monitoring and alerting."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    if operation is not None:
        metrics.add_metric(name=f"{operation.value.title()}Failure", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)

    logger.error(
        "Service error occurred",
        extra={
            **error.to_dict(),
            "operation": operation.value if operation else None,
        }
    )
