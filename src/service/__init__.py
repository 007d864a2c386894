"""
Items Service Module.

Single-table CRUD behind API Gateway, following the three-layer architecture:

- handlers: Lambda entry points and request dispatch
- logic: operation semantics
- dal: data access layer for DynamoDB
- models: Pydantic request and response models
"""

__version__ = "1.0.0"
__description__ = "Single-table item CRUD Lambda"
