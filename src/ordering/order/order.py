"""Order aggregate: a customer's placed order and its line items.

An Order is created once, together with all of its items, after stock for
every item has been reserved. From then on only its status moves, through
the state machine in ``ordering.order.status``. Item prices and the order
total are snapshots taken at placement and never change afterwards, no
matter what happens to catalog prices.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.status import OrderStatus, assert_can_transition
from ordering.shared.money import Money
from ordering.stock.ledger import StockLine


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """One medicine on an order.

    ``seller_id`` is copied from the medicine when the order is placed so
    that seller attribution survives later catalog changes; ``price`` is the
    unit price at that moment.
    """

    medicine_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = ValueObject(Money, required=True)

    @property
    def line_total(self) -> Money:
        return self.price.times(self.quantity)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PLACED.value,
    )
    total_amount = ValueObject(Money, required=True)
    shipping_address = Text(required=True)
    items = HasMany(OrderItem)
    created_at = DateTime(required=True)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, shipping_address, lines, total_amount):
        """Create an order from priced, already-reserved lines.

        Args:
            customer_id: The customer who owns the order.
            shipping_address: Free-form delivery address.
            lines: Iterable of PricedLine (medicine_id, seller_id, quantity, unit_price).
            total_amount: Money; must equal the sum of price * quantity over lines.
        """
        lines = list(lines)
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [
            OrderItem(
                medicine_id=line.medicine_id,
                seller_id=line.seller_id,
                quantity=line.quantity,
                price=line.unit_price,
            )
            for line in lines
        ]

        computed = Money.zero()
        for item in items:
            computed = computed.plus(item.line_total)
        if computed != total_amount:
            raise ValidationError(
                {"total_amount": [f"Total {total_amount} does not match the sum of its items ({computed})"]}
            )

        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            status=OrderStatus.PLACED.value,
            total_amount=total_amount,
            shipping_address=shipping_address,
            items=items,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps(
                    [
                        {
                            "item_id": str(item.id),
                            "medicine_id": str(item.medicine_id),
                            "seller_id": str(item.seller_id),
                            "quantity": item.quantity,
                            "price": str(item.price.amount),
                        }
                        for item in items
                    ]
                ),
                seller_ids=json.dumps(order.seller_ids),
                total_amount=str(total_amount.amount),
                currency=total_amount.currency,
                shipping_address=shipping_address,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Seller scope
    # -------------------------------------------------------------------
    @property
    def seller_ids(self) -> list[str]:
        return sorted({str(item.seller_id) for item in self.items})

    def is_owned_by(self, customer_id) -> bool:
        return str(self.customer_id) == str(customer_id)

    def has_items_from(self, seller_id) -> bool:
        return any(str(item.seller_id) == str(seller_id) for item in self.items)

    def all_items_from(self, seller_id) -> bool:
        return bool(self.items) and all(str(item.seller_id) == str(seller_id) for item in self.items)

    def stock_lines(self) -> list[StockLine]:
        return [StockLine(medicine_id=str(item.medicine_id), quantity=item.quantity) for item in self.items]

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def cancel(self, actor):
        """Cancel the order. Only PLACED orders can be cancelled."""
        assert_can_transition(OrderStatus(self.status), OrderStatus.CANCELLED)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                seller_ids=json.dumps(self.seller_ids),
                items=json.dumps(
                    [{"medicine_id": line.medicine_id, "quantity": line.quantity} for line in self.stock_lines()]
                ),
                cancelled_by=str(actor.actor_id),
                cancelled_by_role=actor.role,
                cancelled_at=now,
            )
        )

    def change_status(self, target, actor, strict=True):
        """Move the order to ``target``; CANCELLED is delegated to cancel()."""
        if target == OrderStatus.CANCELLED:
            self.cancel(actor)
            return

        current = OrderStatus(self.status)
        assert_can_transition(current, target, strict=strict)

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                seller_ids=json.dumps(self.seller_ids),
                previous_status=current.value,
                new_status=target.value,
                changed_by=str(actor.actor_id),
                changed_by_role=actor.role,
                changed_at=now,
            )
        )
