"""Domain events for the Order aggregate.

Events are immutable facts recorded alongside each state change. They feed
the seller-scoped read model and give an audit trail of who moved an order
and when. Amounts are carried as decimal strings, never floats.
"""

from protean.fields import DateTime, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer's cart became an order, with stock reserved for every item."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {item_id, medicine_id, seller_id, quantity, price}
    seller_ids = Text(required=True)  # JSON: sorted distinct seller ids
    total_amount = String(required=True)  # decimal string
    currency = String(default="USD")
    shipping_address = Text(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled from PLACED; its stock is returned to the catalog."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    seller_ids = Text(required=True)  # JSON
    items = Text(required=True)  # JSON: list of {medicine_id, quantity}
    cancelled_by = Identifier(required=True)
    cancelled_by_role = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """A seller or admin moved the order forward in its lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_ids = Text(required=True)  # JSON
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier(required=True)
    changed_by_role = String(required=True)
    changed_at = DateTime(required=True)
