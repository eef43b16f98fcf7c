"""
Error handling middleware for Order Registry Service.
Maps escaped exceptions onto the ``{statusCode, message, data}`` envelope.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import OrderStoreError
from ...services.order_service import OrderMessages

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_MESSAGE = "Invalid order payload"

# Routes whose malformed bodies are reported with a route specific message
VALIDATION_MESSAGES = {"/bulkInsertData": OrderMessages.BULK_FAILED}


class OrderServiceErrorHandler:
    """
    Centralized error handling for Order Registry Service.

    - payload construction failures become 400 with the validation errors
    - store failures become 500 carrying the raw store message
    - anything else is logged with its traceback and answered with 500
    """

    @staticmethod
    def setup_error_handlers(app: FastAPI) -> None:
        """
        Setup all error handlers for the FastAPI application.
        """

        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            """Handle HTTP exceptions from Starlette/FastAPI."""
            return OrderServiceErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                message=str(exc.detail),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            """Handle payloads that cannot be built into an order."""
            error_details: list[Dict[str, Any]] = []
            for error in exc.errors():
                error_details.append(
                    {
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                )

            return OrderServiceErrorHandler._create_error_response(
                request=request,
                status_code=400,
                message=VALIDATION_MESSAGES.get(
                    request.url.path, INVALID_PAYLOAD_MESSAGE
                ),
                data=error_details,
            )

        @app.exception_handler(OrderStoreError)
        async def store_error_handler(
            request: Request, exc: OrderStoreError
        ) -> JSONResponse:
            """Surface record store failures with their raw message."""
            logger.error(
                "Record store failure",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": exc.message,
                    "original_type": type(exc.original).__name__
                    if exc.original
                    else None,
                },
            )
            return OrderServiceErrorHandler._create_error_response(
                request=request,
                status_code=500,
                message=exc.message,
                data={},
            )

        @app.exception_handler(Exception)
        async def unhandled_exception_handler(
            request: Request, exc: Exception
        ) -> JSONResponse:
            """Log the full traceback and answer 500."""
            logger.error(
                "Unhandled exception occurred",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc(),
                    "event_type": "unhandled_exception",
                },
                exc_info=True,
            )

            return OrderServiceErrorHandler._create_error_response(
                request=request,
                status_code=500,
                message="An internal server error occurred",
                data={"exception_type": type(exc).__name__},
            )

    @staticmethod
    def _create_error_response(
        request: Request,
        status_code: int,
        message: str,
        data: Optional[Any] = None,
    ) -> JSONResponse:
        """
        Create an error response in the order envelope format.

        Args:
            request: The FastAPI request object
            status_code: HTTP status code, repeated as ``statusCode``
            message: Human-readable error message
            data: Additional error details

        Returns:
            JSONResponse with the envelope body
        """
        content: Dict[str, Any] = {"statusCode": status_code, "message": message}
        if data is not None:
            content["data"] = data

        # 5xx responses are logged by their handlers
        if status_code < 500:
            logger.warning(
                f"Client error: {message}",
                extra={
                    "status_code": status_code,
                    "path": request.url.path,
                    "method": request.method,
                    "event_type": "client_error",
                },
            )

        return JSONResponse(status_code=status_code, content=content)


def setup_order_error_handling(app: FastAPI) -> None:
    """
    Convenience function to setup error handling for Order Registry Service.

    Args:
        app: FastAPI application instance
    """
    OrderServiceErrorHandler.setup_error_handlers(app)

    logger.info(
        "Order Registry error handling configured",
        extra={"event_type": "error_handler_setup"},
    )
