"""
Unit tests for Order Registry Error Handler.
"""

import json
from unittest.mock import Mock

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_registry_service.app.core.exceptions import OrderStoreError
from order_registry_service.app.middleware.error.error_handler import (
    OrderServiceErrorHandler,
    setup_order_error_handling,
)


class TestOrderServiceErrorHandler:
    """Test cases for error handler."""

    @pytest.fixture
    def app(self):
        """Create FastAPI app with error handlers."""
        app = FastAPI()
        OrderServiceErrorHandler.setup_error_handlers(app)
        return app

    @pytest.fixture
    def mock_request(self):
        mock_request = Mock(spec=Request)
        mock_request.url.path = "/orders"
        mock_request.method = "POST"
        return mock_request

    def test_setup_error_handlers(self, app):
        """Test that error handlers are properly set up."""
        assert StarletteHTTPException in app.exception_handlers
        assert RequestValidationError in app.exception_handlers
        assert OrderStoreError in app.exception_handlers
        assert Exception in app.exception_handlers

    @pytest.mark.asyncio
    async def test_http_exception_handler(self, app, mock_request):
        handler = app.exception_handlers[StarletteHTTPException]

        response = await handler(
            mock_request, StarletteHTTPException(status_code=404, detail="Not Found")
        )

        assert response.status_code == 404
        assert json.loads(response.body) == {"statusCode": 404, "message": "Not Found"}

    @pytest.mark.asyncio
    async def test_request_validation_error_handler(self, app, mock_request):
        exc = RequestValidationError(
            [
                {
                    "loc": ["body", "orderId"],
                    "msg": "Field required",
                    "type": "missing",
                }
            ]
        )
        handler = app.exception_handlers[RequestValidationError]

        response = await handler(mock_request, exc)

        assert response.status_code == 400
        response_data = json.loads(response.body)
        assert response_data["statusCode"] == 400
        assert response_data["message"] == "Invalid order payload"
        assert response_data["data"] == [
            {"field": "body.orderId", "message": "Field required", "type": "missing"}
        ]

    @pytest.mark.asyncio
    async def test_bulk_route_validation_message(self, app, mock_request):
        mock_request.url.path = "/bulkInsertData"
        exc = RequestValidationError(
            [
                {
                    "loc": ["body", "data"],
                    "msg": "Input should be a valid string",
                    "type": "string_type",
                }
            ]
        )
        handler = app.exception_handlers[RequestValidationError]

        response = await handler(mock_request, exc)

        assert response.status_code == 400
        assert json.loads(response.body)["message"] == "Error in bulk insert"

    @pytest.mark.asyncio
    async def test_store_error_handler_keeps_raw_message(self, app, mock_request):
        handler = app.exception_handlers[OrderStoreError]

        response = await handler(
            mock_request, OrderStoreError("could not connect to server")
        )

        assert response.status_code == 500
        assert json.loads(response.body) == {
            "statusCode": 500,
            "message": "could not connect to server",
            "data": {},
        }

    @pytest.mark.asyncio
    async def test_unhandled_exception_handler(self, app, mock_request):
        handler = app.exception_handlers[Exception]

        response = await handler(mock_request, RuntimeError("boom"))

        assert response.status_code == 500
        response_data = json.loads(response.body)
        assert response_data["message"] == "An internal server error occurred"
        assert response_data["data"] == {"exception_type": "RuntimeError"}

    def test_setup_order_error_handling(self):
        app = FastAPI()

        setup_order_error_handling(app)

        assert OrderStoreError in app.exception_handlers
