"""
Pytest configuration and shared fixtures for the items service.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pytest

# Powertools reads its configuration at import time, before fixtures run
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-2",
    "AWS_REGION": "us-east-2",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "AWS_SECURITY_TOKEN": "testing",
    "AWS_SESSION_TOKEN": "testing",
    "TABLE_NAME": "test_table",
    "HEALTH_PATH": "/test",
    "ITEM_PATH": "/test-test",
    "ENVIRONMENT": "test",
    "POWERTOOLS_SERVICE_NAME": "test-items-service",
    "POWERTOOLS_METRICS_NAMESPACE": "TestItemsService",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

import boto3  # noqa: E402
from moto import mock_aws  # noqa: E402

TABLE_NAME = "test_table"
HEALTH_PATH = "/test"
ITEM_PATH = "/test-test"


# DynamoDB fixtures
@pytest.fixture
def dynamodb_table():
    """Create a mock DynamoDB table for testing."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-2")

        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


@pytest.fixture
def dal(dynamodb_table):
    """DynamoDB handler bound to the mock table."""
    from service.dal.dynamodb_handler import DynamoDBHandler

    return DynamoDBHandler(TABLE_NAME, region_name="us-east-2")


@pytest.fixture
def reset_dispatcher(monkeypatch):
    """Force the handler module to build its dispatcher inside the current mock."""
    from service.handlers import items_handler

    monkeypatch.setattr(items_handler, "_dispatcher", None)
    yield
    monkeypatch.setattr(items_handler, "_dispatcher", None)


@dataclass
class FakeLambdaContext:
    """Minimal Lambda context carrying the attributes Powertools reads."""
    function_name: str = "test-items-function"
    function_version: str = "$LATEST"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-2:123456789012:function:test-items-function"
    aws_request_id: str = "test-request-id-123"
    log_group_name: str = "/aws/lambda/test-items-function"
    log_stream_name: str = "2024/01/01/[$LATEST]test123"

    @staticmethod
    def get_remaining_time_in_millis() -> int:
        return 30000


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a Lambda context for testing."""
    return FakeLambdaContext()


def make_event(
    http_method: str,
    path: str = ITEM_PATH,
    body: Optional[Any] = None,
    query: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Build an API Gateway REST proxy event; dict and list bodies are JSON-encoded."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)

    return {
        "httpMethod": http_method,
        "path": path,
        "resource": path,
        "headers": {"Content-Type": "application/json"},
        "body": body,
        "requestContext": {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "stage": "test",
            "httpMethod": http_method,
            "path": path,
        },
        "pathParameters": None,
        "queryStringParameters": query,
        "multiValueQueryStringParameters": None,
        "stageVariables": None,
        "isBase64Encoded": False,
    }


@pytest.fixture
def api_event():
    """Factory fixture for API Gateway events."""
    return make_event


# Error simulation fixtures
@pytest.fixture
def mock_dynamodb_error():
    """Build botocore ClientErrors for testing error handling."""
    from botocore.exceptions import ClientError

    def create_error(error_code: str, message: str = "Test error", operation_name: str = "TestOperation"):
        return ClientError(
            error_response={
                "Error": {
                    "Code": error_code,
                    "Message": message,
                }
            },
            operation_name=operation_name,
        )

    return create_error


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
