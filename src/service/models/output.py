"""
Output models for API responses using Pydantic.

Field names follow Python conventions; the wire names (Operation, Message,
Item, Error) are their aliases, so dump with ``by_alias=True``.
"""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class OperationName(str, Enum):
    """Store operation reported in a response body."""
    GET = "GET"
    SAVE = "SAVE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ResultMessage(str, Enum):
    """Outcome reported in a response body."""
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    NOT_FOUND = "NOT_FOUND"


class OperationOutput(BaseModel):
    """Response body for a successful save, update or delete."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    operation: Annotated[OperationName, Field(
        alias='Operation',
        description='Operation that was performed',
        examples=['SAVE', 'UPDATE', 'DELETE']
    )]

    message: Annotated[ResultMessage, Field(
        alias='Message',
        description='Outcome of the operation'
    )] = ResultMessage.SUCCESS

    item: Annotated[Optional[Any], Field(
        alias='Item',
        description='Saved record, record after update, or deleted record (null when nothing was deleted)'
    )] = None


class ErrorOutput(BaseModel):
    """Normalized response body for every failure."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    operation: Annotated[Optional[OperationName], Field(
        alias='Operation',
        description='Operation that failed, null when no route matched'
    )] = None

    message: Annotated[ResultMessage, Field(
        alias='Message',
        description='FAILED or NOT_FOUND'
    )] = ResultMessage.FAILED

    error: Annotated[str, Field(
        alias='Error',
        description='Reason for the failure',
        examples=["Item with id 'a' not found"]
    )]
