"""
Data Access Layer (DAL) for the items service.

This module defines the store interface the logic layer depends on and the
factory building the DynamoDB implementation from configuration.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class ItemStore(Protocol):
    """Protocol defining the single-table, key-only store interface."""

    def get_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        """Retrieve a record by its primary key."""
        ...

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Create or fully overwrite a record."""
        ...

    def update_item(self, item_id: Any, attribute_name: str, attribute_value: Any) -> Dict[str, Any]:
        """Set one attribute of an existing record and return the updated record."""
        ...

    def delete_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        """Delete a record and return its previous content, if any."""
        ...


class BaseDAL(ABC):
    """Abstract base class for data access layer implementations."""

    def __init__(self, table_name: str) -> None:
        """
        Initialize the DAL handler.

        Args:
            table_name: Name of the database table
        """
        self.table_name = table_name

    @abstractmethod
    def get_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def update_item(self, item_id: Any, attribute_name: str, attribute_value: Any) -> Dict[str, Any]:
        pass

    @abstractmethod
    def delete_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        pass


def get_dal_handler(table_name: str, region_name: Optional[str] = None, endpoint_url: Optional[str] = None) -> ItemStore:
    """
    Factory function to get the DynamoDB DAL handler.

    Args:
        table_name: Name of the DynamoDB table
        region_name: AWS region name
        endpoint_url: DynamoDB endpoint URL (for local testing)

    Returns:
        DAL handler instance
    """
    # Import here to avoid circular imports
    from service.dal.dynamodb_handler import DynamoDBHandler

    return DynamoDBHandler(table_name=table_name, region_name=region_name, endpoint_url=endpoint_url)


__all__ = [
    'ItemStore',
    'BaseDAL',
    'get_dal_handler',
]
