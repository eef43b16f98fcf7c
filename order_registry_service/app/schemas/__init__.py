"""
Order schemas package
"""

from .order import (
    BulkInsertRequest,
    OrderBase,
    OrderCreate,
    OrderDocument,
    OrderedItemCount,
    OrderRecord,
    OrderServiceResponse,
    dump_records,
)

__all__ = [
    "OrderBase",
    "OrderCreate",
    "OrderRecord",
    "OrderDocument",
    "OrderedItemCount",
    # API schemas
    "BulkInsertRequest",
    "OrderServiceResponse",
    "dump_records",
]
