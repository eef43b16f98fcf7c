from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field

from ..models.order import Order


class OrderBase(BaseModel):
    """Business fields of an order, camelCase on the wire"""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    order_id: str = Field(..., alias="orderId", min_length=1)
    company_name: Optional[str] = Field(None, alias="companyName")
    customer_address: Optional[str] = Field(None, alias="customerAddress")
    ordered_item: Optional[str] = Field(None, alias="orderedItem")


class OrderCreate(OrderBase):
    pass


class OrderRecord(OrderBase):
    """Projection returned by the lookup endpoints"""

    id: int = Field(..., alias="_id")

    @classmethod
    def from_order(cls, order: Order) -> "OrderRecord":
        return cls(
            id=order.id,
            order_id=order.order_id,
            company_name=order.company_name,
            customer_address=order.customer_address,
            ordered_item=order.ordered_item,
        )


class OrderDocument(OrderRecord):
    """Full stored order, as echoed back by bulk insert"""

    created_at: Any = Field(..., alias="createdAt")
    updated_at: Any = Field(..., alias="updatedAt")

    @classmethod
    def from_order(cls, order: Order) -> "OrderDocument":
        return cls(
            id=order.id,
            order_id=order.order_id,
            company_name=order.company_name,
            customer_address=order.customer_address,
            ordered_item=order.ordered_item,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderedItemCount(BaseModel):
    """One group of the per-item aggregation"""

    model_config = ConfigDict(populate_by_name=True)

    ordered_item: Optional[str] = Field(None, alias="_id")
    count: int


class BulkInsertRequest(BaseModel):
    """Optional body of the bulk insert route"""

    data: Optional[str] = Field(
        None, description="Newline separated rows of comma separated fields"
    )


class OrderServiceResponse(BaseModel):
    """Uniform response envelope returned by every order route"""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    message: str
    data: Optional[Any] = None

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {
            "statusCode": self.status_code,
            "message": self.message,
        }
        if self.data is not None:
            content["data"] = jsonable_encoder(self.data, by_alias=True)
        return content


def dump_records(records: List[BaseModel]) -> List[Dict[str, Any]]:
    return [record.model_dump(by_alias=True) for record in records]
