"""
Error middleware for Order Registry Service.
"""

from .error_handler import OrderServiceErrorHandler, setup_order_error_handling

__all__ = ["OrderServiceErrorHandler", "setup_order_error_handling"]
