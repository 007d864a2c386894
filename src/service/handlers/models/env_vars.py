"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the environment variables read by the
items handler. Values are loaded and validated once per process through
aws-lambda-env-modeler.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class ItemsHandlerEnvVars(BaseModel):
    """Environment variables for the items Lambda handler."""

    # DynamoDB table holding the records, partition key "id"
    TABLE_NAME: Annotated[str, Field(
        default='test_table',
        description='DynamoDB table name for item storage',
        min_length=1
    )] = 'test_table'

    AWS_REGION: Annotated[str, Field(
        default='us-east-2',
        description='AWS region of the DynamoDB table'
    )] = 'us-east-2'

    # Only set when running against DynamoDB Local
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='DynamoDB endpoint URL override'
    )] = None

    HEALTH_PATH: Annotated[str, Field(
        default='/test',
        description='Path answered by the health greeting',
        pattern=r'^/'
    )] = '/test'

    ITEM_PATH: Annotated[str, Field(
        default='/test-test',
        description='Path serving the item CRUD operations',
        pattern=r'^/'
    )] = '/test-test'

    ENVIRONMENT: Annotated[str, Field(
        default='dev',
        description='Deployment environment name'
    )] = 'dev'


def get_handler_env_vars() -> ItemsHandlerEnvVars:
    """
    Get typed environment variables for the items handler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=ItemsHandlerEnvVars)
