"""Entry points for the order engine.

Every call takes its actor explicitly and returns the resulting Order
aggregate. Writes go through commands processed synchronously by the
domain; reads go straight to the repositories.
"""

import json

from protean.utils.globals import current_domain

from ordering.order.assembly import parse_cart
from ordering.order.cancellation import CancelOrder
from ordering.order.fulfillment import UpdateOrderStatus
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.queries import OrderFilters, get_order, list_orders
from ordering.order.status import parse_status


def _process(command) -> Order:
    order_id = current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Order).get(order_id)


def create_order(customer_id, shipping_address, items) -> Order:
    cart = parse_cart(items)
    return _process(
        PlaceOrder(
            customer_id=customer_id,
            shipping_address=shipping_address,
            items=json.dumps([{"medicine_id": line.medicine_id, "quantity": line.quantity} for line in cart]),
        )
    )


def cancel_order(order_id, actor) -> Order:
    return _process(CancelOrder(order_id=order_id, actor_id=actor.actor_id, actor_role=actor.role))


def update_order_status(order_id, new_status, actor) -> Order:
    # Blank or oversized values never reach the command field checks
    target = parse_status(new_status)
    return _process(
        UpdateOrderStatus(
            order_id=order_id,
            status=target.value,
            actor_id=actor.actor_id,
            actor_role=actor.role,
        )
    )


__all__ = [
    "OrderFilters",
    "cancel_order",
    "create_order",
    "get_order",
    "list_orders",
    "update_order_status",
]
