"""
Order service: turns repository outcomes into response envelopes.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import DuplicateOrderError, OrderRegistryError
from ..repository.order_repository import OrderRepository
from ..schemas.order import (
    OrderCreate,
    OrderDocument,
    OrderedItemCount,
    OrderRecord,
    OrderServiceResponse,
    dump_records,
)

logger = logging.getLogger(__name__)

DUPLICATE_ENTRY_STATUS = 209


class OrderMessages:
    """Response messages clients match on"""

    SAVED = "record saved successfully"
    DUPLICATE = "Duplicate Entry"
    BULK_INSERTED = "Inserted successfully!"
    BULK_FAILED = "Error in bulk insert"
    BULK_EMPTY = "Please provide input to insert"
    FETCHED = "record fetched successfully"
    REMOVED = "record removed successfully"


def bulk_error_data(exc: Exception) -> Dict[str, Any]:
    return {"type": type(exc).__name__, "message": str(exc)}


class OrderService:
    def __init__(
        self,
        session: Optional[AsyncSession],
        order_repository: Optional[OrderRepository] = None,
    ):
        self.session = session
        self.order_repository = order_repository or OrderRepository(session)

    async def create_order(
        self, order_data: OrderCreate, payload: Optional[Any] = None
    ) -> OrderServiceResponse:
        """
        Insert one order.

        A duplicate orderId yields the 209 envelope echoing ``payload``, the
        body exactly as the client sent it; any other store failure
        propagates as OrderStoreError.
        """
        if payload is None:
            payload = order_data.model_dump(by_alias=True, exclude_unset=True)

        try:
            await self.order_repository.insert_order(order_data)
        except DuplicateOrderError:
            logger.warning(
                "Duplicate order rejected", extra={"order_id": order_data.order_id}
            )
            return OrderServiceResponse(
                status_code=DUPLICATE_ENTRY_STATUS,
                message=OrderMessages.DUPLICATE,
                data=payload,
            )
        except OrderRegistryError as e:
            logger.error(
                "Failed to save order",
                extra={"order_id": order_data.order_id, "error": str(e)},
            )
            raise

        logger.info(OrderMessages.SAVED, extra={"order_id": order_data.order_id})
        return OrderServiceResponse(status_code=200, message=OrderMessages.SAVED)

    async def bulk_insert(
        self, orders_data: Sequence[OrderCreate]
    ) -> OrderServiceResponse:
        """Insert a parsed batch of orders in a single store call"""
        if not orders_data:
            return OrderServiceResponse(
                status_code=400, message=OrderMessages.BULK_EMPTY, data={}
            )

        try:
            orders = await self.order_repository.insert_many(orders_data)
        except OrderRegistryError as e:
            logger.error(
                "err in bulk insertion",
                extra={"orders": len(orders_data), "error": str(e)},
            )
            return OrderServiceResponse(
                status_code=400,
                message=OrderMessages.BULK_FAILED,
                data=bulk_error_data(e),
            )

        logger.info("inserted in bulk", extra={"orders": len(orders)})
        return OrderServiceResponse(
            status_code=200,
            message=OrderMessages.BULK_INSERTED,
            data=dump_records([OrderDocument.from_order(order) for order in orders]),
        )

    async def find_by_company_name(self, company_name: str) -> OrderServiceResponse:
        orders = await self.order_repository.find_by_company_name(company_name)
        logger.info(
            OrderMessages.FETCHED,
            extra={"company_name": company_name, "matches": len(orders)},
        )
        return self._fetched([OrderRecord.from_order(order) for order in orders])

    async def find_by_customer_address(
        self, customer_address: str
    ) -> OrderServiceResponse:
        orders = await self.order_repository.find_by_customer_address(
            customer_address
        )
        logger.info(
            OrderMessages.FETCHED,
            extra={"customer_address": customer_address, "matches": len(orders)},
        )
        return self._fetched([OrderRecord.from_order(order) for order in orders])

    async def count_by_ordered_item(self) -> OrderServiceResponse:
        groups = await self.order_repository.count_by_ordered_item()
        logger.info(OrderMessages.FETCHED, extra={"groups": len(groups)})
        return self._fetched(
            [
                OrderedItemCount(ordered_item=item, count=count)
                for item, count in groups
            ]
        )

    async def delete_by_order_id(self, order_id: str) -> OrderServiceResponse:
        """Remove every order with this orderId; zero matches is still a success"""
        removed = await self.order_repository.delete_by_order_id(order_id)
        logger.info(
            OrderMessages.REMOVED, extra={"order_id": order_id, "removed": removed}
        )
        return OrderServiceResponse(status_code=200, message=OrderMessages.REMOVED)

    @staticmethod
    def _fetched(records) -> OrderServiceResponse:
        return OrderServiceResponse(
            status_code=200, message=OrderMessages.FETCHED, data=dump_records(records)
        )
