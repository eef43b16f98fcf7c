"""
Bulk order text parsing.

A bulk block is a list of rows, one order per row, with the fields
``orderId, companyName, customerAddress, orderedItem`` separated by commas.
There is no quoting: a comma inside a field shifts the remaining fields.
"""

from typing import List

from pydantic import ValidationError

from ..core.exceptions import BulkParseError
from ..schemas.order import OrderCreate

ORDER_FIELDS = ("order_id", "company_name", "customer_address", "ordered_item")

SAMPLE_ORDERS_TEXT = (
    "001, SuperTrader, Steindamm 80, Macbook\n"
    "002, Cheapskates, Reeperbahn 153, Macbook\n"
    '003, MegaCorp, Steindamm 80, Book "Guide to Hamburg"\n'
    '004, SuperTrader, Sternstrasse  125, Book "Cooking  101"\n'
    "005, SuperTrader, Ottenser Hauptstrasse 24, Inline Skates\n"
    "006, MegaCorp, Reeperbahn 153, Playstation\n"
    "007, Cheapskates, Lagerstrasse  11, Flux compensator\n"
    "008, SuperTrader, Reeperbahn 153, Inline Skates"
)


def parse_bulk_orders(
    text: str, row_delimiter: str = "\n", field_delimiter: str = ","
) -> List[OrderCreate]:
    """Split a delimited text block into orders, preserving row order.

    Blank rows are skipped. Fields beyond the fourth are ignored.

    Raises:
        BulkParseError: a row has fewer than four fields or no orderId
    """
    orders: List[OrderCreate] = []

    for line_number, row in enumerate(text.split(row_delimiter), start=1):
        if not row.strip():
            continue

        fields = [field.strip() for field in row.split(field_delimiter)]
        if len(fields) < len(ORDER_FIELDS):
            raise BulkParseError(
                f"Row {line_number} has {len(fields)} fields, "
                f"expected {len(ORDER_FIELDS)}",
                line_number=line_number,
            )

        try:
            orders.append(OrderCreate(**dict(zip(ORDER_FIELDS, fields))))
        except ValidationError as exc:
            raise BulkParseError(
                f"Row {line_number} is not a valid order: {exc.errors()[0]['msg']}",
                line_number=line_number,
            ) from exc

    return orders
