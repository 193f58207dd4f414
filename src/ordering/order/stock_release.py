"""Returns reserved stock to the catalog when an order is cancelled.

Runs on the committed OrderCancelled event, whichever path produced it (the
customer's cancel or a CANCELLED status update), so stock is only released
for cancellations that actually persisted.
"""

import json

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.order.events import OrderCancelled
from ordering.order.order import Order
from ordering.stock import get_ledger
from ordering.stock.ledger import StockLine

logger = structlog.get_logger(__name__)


@ordering.event_handler(part_of=Order)
class OrderStockReleaseHandler:
    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        lines = [
            StockLine(medicine_id=str(item["medicine_id"]), quantity=int(item["quantity"]))
            for item in json.loads(event.items)
        ]
        get_ledger().release_all(lines)

        logger.info(
            "Released stock for cancelled order",
            order_id=str(event.order_id),
            lines=len(lines),
            cancelled_by_role=event.cancelled_by_role,
        )
