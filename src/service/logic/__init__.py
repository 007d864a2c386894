"""
Business Logic Layer Module.

The middle layer between the request handler and the data access layer:
operation semantics, not-found decisions and response bodies.
"""

from service.logic.item_service import ItemService

__all__ = [
    "ItemService",
]
