"""
AWS Lambda Handlers Module.

This module contains the Lambda handler serving the items API. The handler
implements the top of the three-layer architecture:

1. Handler Layer (this module): request parsing, validation, routing, envelopes
2. Logic Layer: operation semantics
3. Data Access Layer: DynamoDB persistence

The handler uses AWS Lambda Powertools for structured logging with correlation
IDs, tracing and custom metrics.
"""

from service.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
