"""
Unit tests for Pydantic models.

This module tests the validation and serialization of the request and
response models used by the items handler.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from service.models.input import DeleteItemRequest, GetItemRequest, ModifyItemRequest, SaveItemRequest
from service.models.output import ErrorOutput, OperationName, OperationOutput, ResultMessage


class TestSaveItemRequest:
    """Test cases for SaveItemRequest model."""

    def test_accepts_arbitrary_fields(self):
        """Test that fields beyond the primary key are kept."""
        request = SaveItemRequest.model_validate({"id": "x", "name": "foo", "tags": ["a", "b"]})

        assert request.id == "x"
        assert request.model_extra == {"name": "foo", "tags": ["a", "b"]}

    def test_integer_id(self):
        """Test that integer primary keys are accepted."""
        request = SaveItemRequest.model_validate({"id": 42})

        assert request.id == 42

    def test_missing_id(self):
        """Test that the primary key is required."""
        with pytest.raises(ValidationError) as exc_info:
            SaveItemRequest.model_validate({"name": "foo"})

        assert exc_info.value.errors()[0]["loc"] == ("id",)

    def test_empty_string_id(self):
        """Test that an empty string is not a valid key."""
        with pytest.raises(ValidationError):
            SaveItemRequest.model_validate({"id": ""})

    def test_boolean_id_rejected(self):
        """Test that booleans are not coerced into keys."""
        with pytest.raises(ValidationError):
            SaveItemRequest.model_validate({"id": True})

    def test_non_object_body(self):
        """Test that a JSON array is not a record."""
        with pytest.raises(ValidationError):
            SaveItemRequest.model_validate([{"id": "x"}])


class TestGetItemRequest:
    """Test cases for GetItemRequest model."""

    def test_from_query_string(self):
        """Test building the request from query string parameters."""
        request = GetItemRequest.model_validate({"id": "abc", "other": "ignored"})

        assert request.id == "abc"

    def test_missing_id(self):
        """Test that the id query parameter is required."""
        with pytest.raises(ValidationError):
            GetItemRequest.model_validate({})


class TestModifyItemRequest:
    """Test cases for ModifyItemRequest model."""

    def test_valid_request(self):
        """Test parsing the wire field names."""
        request = ModifyItemRequest.model_validate({"id": "a", "updateKey": "v", "updateValue": 2})

        assert request.id == "a"
        assert request.update_key == "v"
        assert request.update_value == 2

    def test_null_update_value(self):
        """Test that null is a legal new value."""
        request = ModifyItemRequest.model_validate({"id": "a", "updateKey": "v", "updateValue": None})

        assert request.update_value is None

    def test_decimal_update_value_kept(self):
        """Test that Decimal values pass through untouched."""
        request = ModifyItemRequest.model_validate({"id": "a", "updateKey": "price", "updateValue": Decimal("9.99")})

        assert request.update_value == Decimal("9.99")

    def test_snake_case_keys_rejected(self):
        """Test that only the camelCase wire names are accepted."""
        with pytest.raises(ValidationError):
            ModifyItemRequest.model_validate({"id": "a", "update_key": "v", "update_value": 2})

    def test_missing_update_value(self):
        """Test that updateValue must be present."""
        with pytest.raises(ValidationError) as exc_info:
            ModifyItemRequest.model_validate({"id": "a", "updateKey": "v"})

        assert exc_info.value.errors()[0]["loc"] == ("updateValue",)

    def test_empty_update_key(self):
        """Test that updateKey cannot be empty."""
        with pytest.raises(ValidationError):
            ModifyItemRequest.model_validate({"id": "a", "updateKey": "", "updateValue": 1})

    def test_primary_key_not_updatable(self):
        """Test that the primary key cannot be the updated attribute."""
        with pytest.raises(ValidationError) as exc_info:
            ModifyItemRequest.model_validate({"id": "a", "updateKey": "id", "updateValue": "b"})

        assert "primary key" in exc_info.value.errors()[0]["msg"]


class TestDeleteItemRequest:
    """Test cases for DeleteItemRequest model."""

    def test_valid_request(self):
        request = DeleteItemRequest.model_validate({"id": "a"})

        assert request.id == "a"

    def test_missing_id(self):
        with pytest.raises(ValidationError):
            DeleteItemRequest.model_validate({})


class TestOutputModels:
    """Test cases for response body models."""

    def test_operation_output_aliases(self):
        """Test that the body uses the wire field names."""
        output = OperationOutput(operation=OperationName.SAVE, item={"id": "x"})

        assert output.model_dump(by_alias=True) == {
            "Operation": "SAVE",
            "Message": "SUCCESS",
            "Item": {"id": "x"},
        }

    def test_operation_output_null_item(self):
        output = OperationOutput(operation=OperationName.DELETE)

        assert output.model_dump(by_alias=True)["Item"] is None

    def test_error_output(self):
        """Test the normalized error body."""
        output = ErrorOutput(operation=OperationName.GET, message=ResultMessage.NOT_FOUND, error="missing")

        assert output.model_dump(by_alias=True) == {
            "Operation": "GET",
            "Message": "NOT_FOUND",
            "Error": "missing",
        }

    def test_error_output_defaults(self):
        output = ErrorOutput(error="boom")

        assert output.model_dump(by_alias=True) == {"Operation": None, "Message": "FAILED", "Error": "boom"}
