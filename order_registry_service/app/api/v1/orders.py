from typing import Optional

from fastapi import APIRouter, Body, Query, Request
from fastapi.responses import JSONResponse

from ...core.exceptions import BulkParseError
from ...schemas.order import BulkInsertRequest, OrderCreate, OrderServiceResponse
from ...services.order_service import OrderMessages, OrderService, bulk_error_data
from ...utils.bulk_parser import SAMPLE_ORDERS_TEXT, parse_bulk_orders
from ..deps import OrderServiceDep


def envelope_response(result: OrderServiceResponse) -> JSONResponse:
    """Send the envelope with an HTTP status equal to its statusCode"""
    return JSONResponse(status_code=result.status_code, content=result.to_content())


router = APIRouter()


@router.post("/orders")
async def create_order(
    request: Request,
    order_data: OrderCreate,
    order_service: OrderService = OrderServiceDep,
) -> JSONResponse:
    """Submit a single order"""
    return envelope_response(
        await order_service.create_order(order_data, payload=await request.json())
    )


@router.post("/bulkInsertData")
async def bulk_insert_orders(
    payload: Optional[BulkInsertRequest] = Body(None),
    order_service: OrderService = OrderServiceDep,
) -> JSONResponse:
    """Insert the rows of a delimited text block.

    Without a body (or without ``data``) the built-in sample block is used.
    """
    text = SAMPLE_ORDERS_TEXT
    if payload is not None and payload.data is not None:
        text = payload.data

    try:
        orders = parse_bulk_orders(text)
    except BulkParseError as e:
        return envelope_response(
            OrderServiceResponse(
                status_code=400,
                message=OrderMessages.BULK_FAILED,
                data=bulk_error_data(e),
            )
        )

    return envelope_response(await order_service.bulk_insert(orders))


@router.get("/ordersByCompanyName")
async def get_orders_by_company_name(
    company_name: str = Query("", alias="companyName"),
    order_service: OrderService = OrderServiceDep,
) -> JSONResponse:
    """List orders placed by a company"""
    return envelope_response(await order_service.find_by_company_name(company_name))


@router.get("/ordersByCustomerAddress")
async def get_orders_by_customer_address(
    customer_address: str = Query("", alias="customerAddress"),
    order_service: OrderService = OrderServiceDep,
) -> JSONResponse:
    """List orders shipped to an address"""
    return envelope_response(
        await order_service.find_by_customer_address(customer_address)
    )


@router.get("/displayOrdersPerOrderedItem")
async def display_orders_per_ordered_item(
    order_service: OrderService = OrderServiceDep,
) -> JSONResponse:
    """Count orders per ordered item"""
    return envelope_response(await order_service.count_by_ordered_item())


@router.delete("/orders")
async def delete_order(
    order_id: str = Query("", alias="orderId"),
    order_service: OrderService = OrderServiceDep,
) -> JSONResponse:
    """Remove every order with the given orderId"""
    return envelope_response(await order_service.delete_by_order_id(order_id))
