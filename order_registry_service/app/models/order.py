from typing import Optional

from sqlalchemy import TEXT
from sqlalchemy.orm import Mapped, mapped_column

from .base import OrderRegistryBaseModel


class Order(OrderRegistryBaseModel):
    __tablename__ = "orders"

    order_id: Mapped[str] = mapped_column(TEXT, unique=True, nullable=False)
    company_name: Mapped[Optional[str]] = mapped_column(
        TEXT, default=None, nullable=True, index=True
    )
    customer_address: Mapped[Optional[str]] = mapped_column(
        TEXT, default=None, nullable=True, index=True
    )
    ordered_item: Mapped[Optional[str]] = mapped_column(
        TEXT, default=None, nullable=True
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id} order_id={self.order_id!r}>"
