"""
Centralized observability utilities for the items Lambda handler.

Configured AWS Lambda Powertools instances for logging, tracing and metrics,
shared by the handler, logic and data access layers.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Metrics namespace, overridden by POWERTOOLS_METRICS_NAMESPACE
METRICS_NAMESPACE = 'ItemsService'

# JSON output format, service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger()

# Disabled by setting POWERTOOLS_TRACE_DISABLED to "true"
tracer: Tracer = Tracer()

metrics = Metrics(namespace=METRICS_NAMESPACE)
