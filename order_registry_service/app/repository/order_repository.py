import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import DuplicateOrderError, OrderStoreError
from ..models.order import Order
from ..schemas.order import OrderCreate

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def _raw_message(exc: SQLAlchemyError) -> str:
    return str(getattr(exc, "orig", None) or exc)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a UNIQUE constraint failure"""
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    return "unique" in str(orig).lower()


class OrderRepository:
    """Record store adapter: one store call per operation, no retries."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self, order_id: Optional[str] = None) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise DuplicateOrderError(_raw_message(e), order_id=order_id) from e
            raise OrderStoreError(_raw_message(e), original=e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise OrderStoreError(_raw_message(e), original=e) from e

    async def insert_order(self, order_data: OrderCreate) -> Order:
        """Insert a single order"""
        order = Order(**order_data.model_dump())
        self.session.add(order)
        await self._commit(order_id=order.order_id)
        return order

    async def insert_many(self, orders_data: Sequence[OrderCreate]) -> List[Order]:
        """Insert all orders in one batch; nothing is kept if any row fails"""
        orders = [Order(**order_data.model_dump()) for order_data in orders_data]
        self.session.add_all(orders)
        await self._commit()
        return orders

    async def _find_by(self, column, value: str) -> List[Order]:
        query = select(Order).where(column == value).order_by(Order.id)
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise OrderStoreError(_raw_message(e), original=e) from e
        return list(result.scalars().all())

    async def find_by_company_name(self, company_name: str) -> List[Order]:
        """Get orders whose companyName matches exactly"""
        return await self._find_by(Order.company_name, company_name)

    async def find_by_customer_address(self, customer_address: str) -> List[Order]:
        """Get orders whose customerAddress matches exactly"""
        return await self._find_by(Order.customer_address, customer_address)

    async def count_by_ordered_item(self) -> List[Tuple[Optional[str], int]]:
        """Group all orders by orderedItem; NULL items form their own group"""
        query = (
            select(Order.ordered_item, func.count(Order.id))
            .group_by(Order.ordered_item)
            .order_by(Order.ordered_item)
        )
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise OrderStoreError(_raw_message(e), original=e) from e
        return [(item, count) for item, count in result.all()]

    async def delete_by_order_id(self, order_id: str) -> int:
        """Delete every order with this orderId and return the row count"""
        stmt = delete(Order).where(Order.order_id == order_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise OrderStoreError(_raw_message(e), original=e) from e
        await self._commit(order_id=order_id)
        return result.rowcount or 0
