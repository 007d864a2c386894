"""
Service Models Package

This package contains the Pydantic models used throughout the service:
input validation models and output response models.
"""

from .input import ITEM_KEY, DeleteItemRequest, GetItemRequest, ModifyItemRequest, SaveItemRequest
from .output import ErrorOutput, OperationName, OperationOutput, ResultMessage

__all__ = [
    # Input models
    "ITEM_KEY",
    "SaveItemRequest",
    "GetItemRequest",
    "ModifyItemRequest",
    "DeleteItemRequest",

    # Output models
    "OperationName",
    "ResultMessage",
    "OperationOutput",
    "ErrorOutput",
]
