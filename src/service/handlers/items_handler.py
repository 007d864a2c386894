"""
Items Handler - Lambda function for single-table item CRUD.

This module implements the handler layer: an ordered route table mapping
(HTTP method, path) pairs to the item operations, registered on a Powertools
REST resolver, request parsing and validation, and conversion of service
errors into response envelopes.
"""

import json
from decimal import Decimal
from functools import partial, wraps
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type, TypeVar

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.event_handler.exceptions import NotFoundError
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, ValidationError

from service.dal import get_dal_handler
from service.handlers.models.env_vars import ItemsHandlerEnvVars, get_handler_env_vars
from service.handlers.utils.errors import (
    BaseServiceError,
    RequestValidationError,
    RouteNotFoundError,
    format_error_response,
    get_http_status_code,
    log_error_metrics,
)
from service.handlers.utils.observability import logger, metrics, tracer
from service.handlers.utils.response import build_response, create_api_response, to_envelope
from service.logic.item_service import ItemService
from service.models.input import DeleteItemRequest, GetItemRequest, ModifyItemRequest, SaveItemRequest
from service.models.output import ErrorOutput, OperationName

HEALTH_GREETING = 'Hello'

# DynamoDB stores numbers as Decimal and rejects floats
_json_deserializer = partial(json.loads, parse_float=Decimal)

Model = TypeVar('Model', bound=BaseModel)


class Route(NamedTuple):
    """One entry of the dispatcher route table."""
    method: str
    path: str
    handler: Callable[[], Response]


def handle_service_errors(operation: Optional[OperationName]):
    """Decorator converting service errors raised by a route handler into error responses."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except BaseServiceError as e:
                log_error_metrics(e, operation)
                return build_response(
                    status_code=get_http_status_code(e),
                    body=format_error_response(e, operation),
                )

        return wrapper
    return decorator


def _describe_validation_error(error: ValidationError) -> str:
    return '; '.join(
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in error.errors()
    )


def parse_request(model: Type[Model], data: Any) -> Model:
    """
    Validate a request payload against a model.

    Raises:
        RequestValidationError: If the payload does not match the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.info("Request validation failed", extra={
            "model": model.__name__,
            "error_count": e.error_count(),
        })
        raise RequestValidationError(_describe_validation_error(e)) from e


def parse_json_body(event: APIGatewayProxyEvent) -> Any:
    """
    Parse the JSON request body.

    Raises:
        RequestValidationError: If the body is missing or not valid JSON
    """
    if event.body is None:
        raise RequestValidationError("Request body is required")
    try:
        return _json_deserializer(event.decoded_body)
    except ValueError as e:
        raise RequestValidationError(f"Invalid JSON in request body: {e}") from e


class ItemsDispatcher:
    """Dispatches API Gateway proxy events to the item operations."""

    def __init__(self, item_service: ItemService, health_path: str, item_path: str):
        """
        Build the route table and register it on the resolver.

        Args:
            item_service: Logic layer the item routes call into
            health_path: Path answered by the static greeting
            item_path: Path serving the CRUD operations
        """
        self.item_service = item_service
        self.app = APIGatewayRestResolver(debug=False)

        # Registered in order; the resolver tries routes in registration order
        self.routes: List[Route] = [
            Route('GET', health_path, self.health),
            Route('GET', item_path, self.get_item),
            Route('POST', item_path, self.save_item),
            Route('PATCH', item_path, self.modify_item),
            Route('DELETE', item_path, self.delete_item),
        ]
        for route in self.routes:
            self.app.route(rule=route.path, method=route.method)(route.handler)

        self.app.not_found(self.route_not_found)

    @tracer.capture_method
    def handle(self, event: Dict[str, Any], context: Optional[LambdaContext] = None) -> Dict[str, Any]:
        """
        Handle one API Gateway proxy event.

        Args:
            event: API Gateway REST proxy event
            context: Lambda context object

        Returns:
            Response envelope; unmatched requests get a 404 envelope
        """
        http_method = event.get('httpMethod')
        path = event.get('path')

        logger.info("Request received", extra={"http_method": http_method, "path": path})

        if not http_method or not path:
            # The resolver needs both to match a route
            response = self.no_route(http_method, path)
            return to_envelope({
                'statusCode': response.status_code,
                'headers': response.headers,
                'body': response.body,
            })

        tracer.put_annotation("route", f"{http_method} {path}")
        return to_envelope(self.app.resolve(event, context))

    def route_not_found(self, exc: NotFoundError) -> Response:
        """Fallback for any (method, path) outside the route table."""
        event = self.app.current_event
        return self.no_route(event.http_method, event.path)

    @handle_service_errors(operation=None)
    def no_route(self, http_method: Optional[str], path: Optional[str]) -> Response:
        metrics.add_metric(name="RouteNotFound", unit=MetricUnit.Count, value=1)
        raise RouteNotFoundError(http_method, path)

    def health(self) -> Response:
        """Static greeting; the store is never touched."""
        return build_response(status_code=200, body=HEALTH_GREETING)

    @handle_service_errors(OperationName.GET)
    def get_item(self) -> Response:
        """Return the record whose id is given in the query string."""
        event = self.app.current_event
        request = parse_request(GetItemRequest, event.query_string_parameters or {})

        item = self.item_service.get_item(request.id)

        logger.info("Item retrieved successfully", extra={"item_id": request.id})
        return build_response(status_code=200, body=item)

    @handle_service_errors(OperationName.SAVE)
    def save_item(self) -> Response:
        """Upsert the full JSON body as a record."""
        body = parse_json_body(self.app.current_event)
        request = parse_request(SaveItemRequest, body)

        logger.debug("Save item payload", extra={"body": body})

        # The record is stored verbatim, not as re-serialized by the model
        response = self.item_service.save_item(body)

        logger.info("Item saved successfully", extra={"item_id": request.id})
        return build_response(status_code=200, body=response.model_dump(by_alias=True))

    @handle_service_errors(OperationName.UPDATE)
    def modify_item(self) -> Response:
        """Set one attribute of the record named in the JSON body."""
        request = parse_request(ModifyItemRequest, parse_json_body(self.app.current_event))

        response = self.item_service.modify_item(
            item_id=request.id,
            update_key=request.update_key,
            update_value=request.update_value,
        )

        logger.info("Item updated successfully", extra={
            "item_id": request.id,
            "update_key": request.update_key,
        })
        return build_response(status_code=200, body=response.model_dump(by_alias=True))

    @handle_service_errors(OperationName.DELETE)
    def delete_item(self) -> Response:
        """Delete the record named in the JSON body."""
        request = parse_request(DeleteItemRequest, parse_json_body(self.app.current_event))

        response = self.item_service.delete_item(request.id)

        logger.info("Item delete processed", extra={
            "item_id": request.id,
            "deleted": response.item is not None,
        })
        return build_response(status_code=200, body=response.model_dump(by_alias=True))


def create_dispatcher(env_vars: ItemsHandlerEnvVars) -> ItemsDispatcher:
    """Wire store, service and dispatcher from configuration."""
    items_store = get_dal_handler(
        table_name=env_vars.TABLE_NAME,
        region_name=env_vars.AWS_REGION,
        endpoint_url=env_vars.DYNAMODB_ENDPOINT,
    )
    return ItemsDispatcher(
        item_service=ItemService(items_store=items_store),
        health_path=env_vars.HEALTH_PATH,
        item_path=env_vars.ITEM_PATH,
    )


# Built on the first invocation and reused for the lifetime of the process
_dispatcher: Optional[ItemsDispatcher] = None


def get_dispatcher() -> ItemsDispatcher:
    """Get or create the process-wide dispatcher."""
    global _dispatcher

    if _dispatcher is None:
        _dispatcher = create_dispatcher(get_handler_env_vars())

    return _dispatcher


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: Lambda event payload
        context: Lambda context object

    Returns:
        API Gateway response
    """
    try:
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

        dispatcher = get_dispatcher()
        tracer.put_annotation("environment", get_handler_env_vars().ENVIRONMENT)

        return dispatcher.handle(event, context)

    except Exception as e:
        metrics.add_metric(name="RequestError", unit=MetricUnit.Count, value=1)

        logger.exception("Unhandled error in lambda handler", extra={
            "error": str(e),
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
        })

        return create_api_response(
            status_code=500,
            body=ErrorOutput(error="Internal server error").model_dump(by_alias=True),
        )
