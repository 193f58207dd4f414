"""Order placement: command and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.assembly import OrderAssembler
from ordering.order.order import Order
from ordering.stock import get_stock_store
from ordering.stock.ledger import StockLedger

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    shipping_address = Text(required=True)
    items = Text(required=True)  # JSON: list of {medicine_id, quantity}


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            items = json.loads(command.items) if isinstance(command.items, str) else command.items
        except json.JSONDecodeError:
            raise ValidationError({"items": ["Order items must be valid JSON"]}) from None

        store = get_stock_store()
        ledger = StockLedger(store)
        cart = OrderAssembler(store, ledger).assemble(
            customer_id=command.customer_id,
            shipping_address=command.shipping_address,
            items=items,
        )

        # Stock is already committed; give it back if the order cannot be built
        try:
            order = Order.place(
                customer_id=cart.customer_id,
                shipping_address=cart.shipping_address,
                lines=cart.lines,
                total_amount=cart.total_amount,
            )
            current_domain.repository_for(Order).add(order)
        except Exception:
            logger.error("Order could not be recorded; releasing reserved stock", customer_id=cart.customer_id)
            ledger.release_all(cart.stock_lines)
            raise

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=cart.customer_id,
            items=len(cart.lines),
            total_amount=str(cart.total_amount.amount),
        )
        return str(order.id)
