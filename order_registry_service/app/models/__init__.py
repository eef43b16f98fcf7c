"""
Order Registry Models

All models inherit from OrderRegistryBaseModel which provides the
store-assigned id and the created/updated timestamps.
"""

from .base import OrderRegistryBase, OrderRegistryBaseModel
from .order import Order

__all__ = [
    # Base classes
    "OrderRegistryBase",
    "OrderRegistryBaseModel",
    # Order models
    "Order",
]
