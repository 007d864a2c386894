"""
Input models for request validation using Pydantic.

Records are free-form JSON objects; the only enforced field is the primary
key ``id``. The models below validate just enough of each payload for the
store call to be well formed.
"""

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, StringConstraints, field_validator

ITEM_KEY = 'id'

ItemId = Union[Annotated[str, StringConstraints(strict=True, min_length=1)], StrictInt]


class SaveItemRequest(BaseModel):
    """Request model for saving (upserting) a record."""

    model_config = ConfigDict(extra='allow')

    id: Annotated[ItemId, Field(
        description='Primary key of the record',
        examples=['x', 42]
    )]


class GetItemRequest(BaseModel):
    """Request model for reading a record, built from the query string."""

    id: Annotated[StrictStr, Field(
        min_length=1,
        description='Primary key of the record',
        examples=['x']
    )]


class ModifyItemRequest(BaseModel):
    """Request model for setting a single attribute of a record."""

    id: Annotated[ItemId, Field(
        description='Primary key of the record to update'
    )]

    update_key: Annotated[StrictStr, Field(
        alias='updateKey',
        min_length=1,
        description='Name of the attribute to set',
        examples=['name']
    )]

    update_value: Annotated[Any, Field(
        alias='updateValue',
        description='New value of the attribute',
        examples=['bar', 3]
    )]

    @field_validator('update_key')
    @classmethod
    def validate_update_key(cls, v: str) -> str:
        """The primary key itself cannot be updated."""
        if v == ITEM_KEY:
            raise ValueError(f"updateKey cannot be the primary key '{ITEM_KEY}'")
        return v


class DeleteItemRequest(BaseModel):
    """Request model for deleting a record."""

    id: Annotated[ItemId, Field(
        description='Primary key of the record to delete'
    )]
