"""
Business Logic Layer for item management.

Each operation is one round trip to the store. The service decides what a
missing record means for each operation and shapes the success bodies.
"""

from typing import Any, Dict

from aws_lambda_powertools.metrics import MetricUnit

from service.dal import ItemStore
from service.handlers.utils.errors import ItemNotFoundError
from service.handlers.utils.observability import logger, metrics, tracer
from service.models.input import ITEM_KEY
from service.models.output import OperationName, OperationOutput


class ItemService:
    """Business logic service for single-table item CRUD."""

    def __init__(self, items_store: ItemStore):
        """
        Initialize item service.

        Args:
            items_store: Store the records live in
        """
        self.items_store = items_store

    @tracer.capture_method
    def get_item(self, item_id: Any) -> Dict[str, Any]:
        """
        Get a record by primary key.

        Raises:
            ItemNotFoundError: If no record has this key
        """
        tracer.put_annotation("item_id", str(item_id))

        item = self.items_store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        metrics.add_metric(name="GetSuccess", unit=MetricUnit.Count, value=1)
        return item

    @tracer.capture_method
    def save_item(self, item: Dict[str, Any]) -> OperationOutput:
        """Upsert the full record; the body echoes the request."""
        tracer.put_annotation("item_id", str(item.get(ITEM_KEY)))

        self.items_store.put_item(item)

        metrics.add_metric(name="SaveSuccess", unit=MetricUnit.Count, value=1)
        return OperationOutput(operation=OperationName.SAVE, item=item)

    @tracer.capture_method
    def modify_item(self, item_id: Any, update_key: str, update_value: Any) -> OperationOutput:
        """
        Set a single attribute of an existing record.

        Raises:
            ItemNotFoundError: If no record has this key
        """
        tracer.put_annotation("item_id", str(item_id))

        updated_item = self.items_store.update_item(item_id, update_key, update_value)

        logger.debug("Item modified", extra={"item_id": item_id, "update_key": update_key})
        metrics.add_metric(name="UpdateSuccess", unit=MetricUnit.Count, value=1)
        return OperationOutput(operation=OperationName.UPDATE, item=updated_item)

    @tracer.capture_method
    def delete_item(self, item_id: Any) -> OperationOutput:
        """Delete a record; deleting a missing record is a no-op with a null Item."""
        tracer.put_annotation("item_id", str(item_id))

        deleted_item = self.items_store.delete_item(item_id)

        metrics.add_metric(name="DeleteSuccess", unit=MetricUnit.Count, value=1)
        return OperationOutput(operation=OperationName.DELETE, item=deleted_item)
