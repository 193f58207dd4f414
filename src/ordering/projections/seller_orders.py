"""Seller orders: one row per (order, seller) for seller-scoped listings.

Each row carries only that seller's share of the order (``subtotal_cents``),
so sellers sort their listings by their own money.
"""

import json
import uuid

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.order import Order
from ordering.order.status import OrderStatus
from ordering.shared.money import Money

_NAMESPACE = uuid.UUID("6f1c2a0e-3b9d-4d7e-9a51-0c8f2e4b7d13")


def seller_order_id(order_id, seller_id) -> str:
    return str(uuid.uuid5(_NAMESPACE, f"{order_id}/{seller_id}"))


def _subtotals_by_seller(items) -> dict[str, int]:
    subtotals: dict[str, int] = {}
    for item in items:
        line_cents = Money.from_decimal(item["price"]).cents * item["quantity"]
        subtotals[item["seller_id"]] = subtotals.get(item["seller_id"], 0) + line_cents
    return subtotals


@ordering.projection
class SellerOrders:
    seller_order_id = Identifier(identifier=True, required=True)
    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    subtotal_cents = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=SellerOrders, aggregates=[Order])
class SellerOrdersProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        repo = current_domain.repository_for(SellerOrders)
        subtotals = _subtotals_by_seller(json.loads(event.items))
        for seller_id in json.loads(event.seller_ids):
            repo.add(
                SellerOrders(
                    seller_order_id=seller_order_id(event.order_id, seller_id),
                    order_id=event.order_id,
                    seller_id=seller_id,
                    customer_id=event.customer_id,
                    status=OrderStatus.PLACED.value,
                    subtotal_cents=subtotals.get(seller_id, 0),
                    created_at=event.placed_at,
                    updated_at=event.placed_at,
                )
            )

    def _update_status(self, order_id, seller_ids, status, updated_at):
        repo = current_domain.repository_for(SellerOrders)
        for seller_id in json.loads(seller_ids):
            record = repo.get(seller_order_id(order_id, seller_id))
            record.status = status
            record.updated_at = updated_at
            repo.add(record)

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        self._update_status(event.order_id, event.seller_ids, event.new_status, event.changed_at)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update_status(event.order_id, event.seller_ids, OrderStatus.CANCELLED.value, event.cancelled_at)
