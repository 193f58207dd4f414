"""Who may do what with an order.

| Actor    | Read                                  | Cancel             | Change status       | List all |
|----------|---------------------------------------|--------------------|---------------------|----------|
| Customer | own orders                            | own, PLACED only   | no                  | no       |
| Seller   | orders with at least one of theirs    | no                 | only if ALL theirs  | no       |
| Admin    | any order                             | no                 | any order           | yes      |

Every check either passes or raises Forbidden; nothing is partially allowed.
"""

import structlog

from ordering.errors import Forbidden

logger = structlog.get_logger(__name__)


def _deny(actor, reason, order=None):
    logger.warning(
        "Forbidden order operation",
        actor_id=str(actor.actor_id),
        role=actor.role,
        order_id=str(order.id) if order is not None else None,
        reason=reason,
    )
    return Forbidden(reason)


def ensure_can_place(actor):
    if not actor.is_customer:
        raise _deny(actor, "Only customers can place orders")


def ensure_can_read(order, actor):
    if actor.is_admin:
        return
    if actor.is_customer and order.is_owned_by(actor.actor_id):
        return
    if actor.is_seller and order.has_items_from(actor.actor_id):
        return
    raise _deny(actor, "Order is not visible to this actor", order)


def ensure_can_cancel(order, actor):
    if not actor.is_customer:
        raise _deny(actor, "Only the customer who placed an order can cancel it", order)
    if not order.is_owned_by(actor.actor_id):
        raise _deny(actor, "Cannot cancel someone else's order", order)


def ensure_can_change_status(order, actor):
    if actor.is_admin:
        return
    if actor.is_seller:
        if order.all_items_from(actor.actor_id):
            return
        raise _deny(actor, "Order contains items from other sellers", order)
    raise _deny(actor, "Only sellers and admins can change order status", order)


def ensure_can_list_all(actor):
    if not actor.is_admin:
        raise _deny(actor, "Only admins can list all orders")
