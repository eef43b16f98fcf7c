"""
Order Registry error taxonomy.

The service layer turns these into response envelopes; anything that escapes
it is mapped to an HTTP status by the error handling middleware.
"""

from typing import Optional


class OrderRegistryError(Exception):
    """Base class for order registry errors"""


class DuplicateOrderError(OrderRegistryError):
    """The store rejected an insert because the orderId already exists"""

    def __init__(self, message: str, order_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.order_id = order_id


class OrderStoreError(OrderRegistryError):
    """Any other failure reported by the record store"""

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original = original


class BulkParseError(OrderRegistryError, ValueError):
    """A bulk text block contains a row that cannot be turned into an order"""

    def __init__(self, message: str, line_number: int):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
