"""
DynamoDB implementation of the Data Access Layer (DAL).

Single-attempt, key-only access to one table through the boto3 resource API.
Every botocore failure is translated into a DALError carrying the reason
reported by DynamoDB, so no native exception leaves this module.
"""

import functools
import time
from typing import Any, Callable, Dict, Optional

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from service.dal import BaseDAL
from service.handlers.utils.errors import BaseServiceError, DALError, ItemNotFoundError
from service.handlers.utils.observability import logger, metrics, tracer
from service.models.input import ITEM_KEY


def handle_dynamodb_errors(operation: str):
    """Decorator translating botocore failures of a DAL method into DALError."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            operation_start = time.time()

            try:
                result = func(self, *args, **kwargs)

                operation_duration = (time.time() - operation_start) * 1000
                metrics.add_metric(name=f"DynamoDB{operation}Duration", unit=MetricUnit.Milliseconds, value=operation_duration)
                tracer.put_annotation("dynamodb_operation", operation)

                return result

            except BaseServiceError:
                raise

            except ClientError as e:
                error_code = e.response['Error']['Code']
                error_message = e.response['Error'].get('Message', error_code)

                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)

                logger.error(f"DynamoDB {operation} error", extra={
                    "error_code": error_code,
                    "error_message": error_message,
                    "table_name": self.table_name,
                    "operation": operation,
                })

                if error_code == 'ResourceNotFoundException':
                    raise DALError(
                        message=f"Table {self.table_name} not found",
                        operation=operation,
                        table_name=self.table_name,
                        error_code="TABLE_NOT_FOUND",
                    ) from e

                raise DALError(
                    message=f"{error_code}: {error_message}",
                    operation=operation,
                    table_name=self.table_name,
                    error_code=f"DYNAMODB_{error_code}",
                ) from e

            except BotoCoreError as e:
                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB connection error during {operation}", extra={
                    "error": str(e),
                    "table_name": self.table_name,
                })
                raise DALError(
                    message=f"Database connection error: {e}",
                    operation=operation,
                    table_name=self.table_name,
                    error_code="DATABASE_CONNECTION_ERROR",
                ) from e

        return wrapper
    return decorator


class DynamoDBHandler(BaseDAL):
    """DynamoDB handler for single-item access by primary key."""

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        """
        Initialize DynamoDB handler.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
        """
        super().__init__(table_name)

        resource_kwargs = {}
        if region_name:
            resource_kwargs['region_name'] = region_name
        if endpoint_url:
            resource_kwargs['endpoint_url'] = endpoint_url

        self.dynamodb = boto3.resource('dynamodb', **resource_kwargs)
        self.table = self.dynamodb.Table(table_name)

        logger.info("DynamoDB handler initialized", extra={
            "table_name": table_name,
            "region_name": region_name,
            "endpoint_url": endpoint_url,
        })

    def _table_call(self, operation: str, call: Callable[..., Dict[str, Any]], **kwargs: Any) -> Dict[str, Any]:
        """
        Run one table call, translating values the boto3 serializer rejects.

        Raises:
            DALError: With error code SERIALIZATION_ERROR for floats and
                numbers outside the DynamoDB range
        """
        try:
            return call(**kwargs)
        except (TypeError, ArithmeticError) as e:
            metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
            logger.error(f"Unserializable value during {operation}", extra={
                "error": str(e),
                "table_name": self.table_name,
            })
            raise DALError(
                message=f"Unsupported value: {e}",
                operation=operation,
                table_name=self.table_name,
                error_code="SERIALIZATION_ERROR",
            ) from e

    @tracer.capture_method
    @handle_dynamodb_errors("GetItem")
    def get_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        """
        Get a single record from DynamoDB.

        Args:
            item_id: Primary key value

        Returns:
            The record, or None if no record has this key

        Raises:
            DALError: If DynamoDB operation fails
        """
        response = self._table_call("GetItem", self.table.get_item, Key={ITEM_KEY: item_id})
        item = response.get('Item')

        if item is None:
            logger.info("Item not found", extra={"table_name": self.table_name, "item_id": item_id})
        else:
            logger.debug("Item retrieved successfully", extra={"table_name": self.table_name, "item_id": item_id})

        return item

    @tracer.capture_method
    @handle_dynamodb_errors("PutItem")
    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put a record into DynamoDB, overwriting any record with the same key.

        Args:
            item: Full record content, including the primary key

        Returns:
            The stored record

        Raises:
            DALError: If DynamoDB operation fails
        """
        self._table_call("PutItem", self.table.put_item, Item=item)

        logger.info("Item stored successfully", extra={
            "table_name": self.table_name,
            "item_id": item.get(ITEM_KEY),
        })

        return item

    @tracer.capture_method
    @handle_dynamodb_errors("UpdateItem")
    def update_item(self, item_id: Any, attribute_name: str, attribute_value: Any) -> Dict[str, Any]:
        """
        Set a single attribute of an existing record.

        The attribute name goes through an expression attribute name, so
        DynamoDB reserved words are accepted as attribute names.

        Args:
            item_id: Primary key value
            attribute_name: Name of the attribute to set
            attribute_value: New value

        Returns:
            The full record after the update

        Raises:
            ItemNotFoundError: If no record has this key
            DALError: If DynamoDB operation fails
        """
        try:
            response = self._table_call(
                "UpdateItem",
                self.table.update_item,
                Key={ITEM_KEY: item_id},
                UpdateExpression='SET #attr = :value',
                ConditionExpression='attribute_exists(#key)',
                ExpressionAttributeNames={'#attr': attribute_name, '#key': ITEM_KEY},
                ExpressionAttributeValues={':value': attribute_value},
                ReturnValues='ALL_NEW',
            )
        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                logger.info("Item not found for update", extra={"table_name": self.table_name, "item_id": item_id})
                raise ItemNotFoundError(item_id) from e
            raise

        logger.info("Item updated successfully", extra={
            "table_name": self.table_name,
            "item_id": item_id,
            "attribute_name": attribute_name,
        })

        return response.get('Attributes', {})

    @tracer.capture_method
    @handle_dynamodb_errors("DeleteItem")
    def delete_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        """
        Delete a record from DynamoDB.

        Args:
            item_id: Primary key value

        Returns:
            The deleted record, or None if no record had this key

        Raises:
            DALError: If DynamoDB operation fails
        """
        response = self._table_call(
            "DeleteItem",
            self.table.delete_item,
            Key={ITEM_KEY: item_id},
            ReturnValues='ALL_OLD',
        )
        deleted_item = response.get('Attributes')

        if deleted_item:
            logger.info("Item deleted successfully", extra={"table_name": self.table_name, "item_id": item_id})
        else:
            logger.warning("Item not found for deletion", extra={"table_name": self.table_name, "item_id": item_id})

        return deleted_item
