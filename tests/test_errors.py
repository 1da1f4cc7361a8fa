"""Tests for the error taxonomy and envelope helpers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError

from storefront.core.errors import (
    AppError,
    DataSourceError,
    InternalError,
    NotFoundError,
    UnsupportedOperationError,
    ValidationFailure,
    error_body,
    internal_error_response,
    not_found_response,
    not_implemented_response,
    request_validation_handler,
    validation_error_response,
)


def _body(response) -> dict:
    return json.loads(response.body)


class TestEnvelopeHelpers:
    """Test the uniform {error: {code, message}} responses."""

    @pytest.mark.parametrize(
        "helper,status_code,code",
        [
            (validation_error_response, 400, "VALIDATION_ERROR"),
            (not_found_response, 404, "NOT_FOUND"),
            (not_implemented_response, 501, "NOT_IMPLEMENTED"),
            (internal_error_response, 500, "INTERNAL"),
        ],
    )
    def test_helper_status_and_code(self, helper, status_code, code):
        response = helper("Something happened")

        assert response.status_code == status_code
        assert _body(response) == {"error": {"code": code, "message": "Something happened"}}

    def test_custom_message_is_preserved(self):
        response = not_found_response("User with ID 123 not found")

        assert _body(response)["error"]["message"] == "User with ID 123 not found"

    def test_error_body_shape(self):
        assert error_body("X", "y") == {"error": {"code": "X", "message": "y"}}


class TestErrorClasses:
    """Test error class mapping to HTTP status and code."""

    def test_app_error_defaults(self):
        error = AppError("Test error message")

        assert error.status_code == 500
        assert error.code == "INTERNAL"
        assert error.message == "Test error message"
        assert error.is_operational is True
        assert error.name == "AppError"

    def test_app_error_custom_status(self):
        error = AppError("Teapot", status_code=418, is_operational=False)

        assert error.status_code == 418
        assert error.is_operational is False

    @pytest.mark.parametrize(
        "cls,status_code,code",
        [
            (ValidationFailure, 400, "VALIDATION_ERROR"),
            (NotFoundError, 404, "NOT_FOUND"),
            (UnsupportedOperationError, 501, "NOT_IMPLEMENTED"),
            (InternalError, 500, "INTERNAL"),
            (DataSourceError, 500, "INTERNAL"),
        ],
    )
    def test_subclass_mapping(self, cls, status_code, code):
        error = cls("message")

        assert isinstance(error, AppError)
        assert error.status_code == status_code
        assert error.code == code
        assert error.name == cls.__name__

    def test_to_response(self):
        response = NotFoundError("Resource not found").to_response()

        assert response.status_code == 404
        assert _body(response) == {"error": {"code": "NOT_FOUND", "message": "Resource not found"}}


class TestRequestValidationHandler:
    """Framework validation errors share the ValidationFailure envelope."""

    @pytest.mark.asyncio
    async def test_first_issue_is_reported(self):
        exc = RequestValidationError(
            [{"loc": ("query", "page"), "msg": "Input should be a valid integer", "type": "int_parsing"}]
        )

        response = await request_validation_handler(MagicMock(), exc)

        assert response.status_code == 400
        assert _body(response) == {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid query parameter: page: Input should be a valid integer",
            }
        }

    @pytest.mark.asyncio
    async def test_empty_error_list(self):
        response = await request_validation_handler(MagicMock(), RequestValidationError([]))

        assert _body(response)["error"]["message"] == "Invalid query parameter: invalid request"
