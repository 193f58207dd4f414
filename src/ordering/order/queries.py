"""Read side of the Order aggregate: fetching one order and listing orders.

Both reads are scoped by the caller. Customers only ever see their own
orders, sellers see orders that carry at least one of their items (through
the SellerOrders projection), admins see everything.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.order.access import ensure_can_list_all, ensure_can_read
from ordering.order.order import Order
from ordering.order.status import parse_status
from ordering.projections.seller_orders import SellerOrders

MAX_PAGE_SIZE = 100

_ORDER_SORT_FIELDS = {
    "created_at": "created_at",
    "total_amount": "total_amount_cents",
    "status": "status",
}
_SELLER_SORT_FIELDS = {
    "created_at": "created_at",
    "total_amount": "subtotal_cents",
    "status": "status",
}


@dataclass(frozen=True)
class OrderFilters:
    status: str | None = None
    page: int = 1
    limit: int = 10
    sort_by: str = "created_at"
    sort_order: str = "desc"

    def __post_init__(self):
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
            raise ValidationError({"page": ["page must be a positive integer"]})
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError({"limit": [f"limit must be between 1 and {MAX_PAGE_SIZE}"]})

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.sort_order != "asc"

    def criteria(self) -> dict:
        if self.status is None or self.status == "":
            return {}
        return {"status": parse_status(self.status).value}

    def ordering(self, fields: dict) -> str:
        # Unknown sort keys fall back to creation time
        field = fields.get(self.sort_by, fields["created_at"])
        return f"-{field}" if self.descending else field


def get_order(order_id, actor) -> Order:
    """Load one order for ``actor``. Raises NotFound before any access check."""
    order = current_domain.repository_for(Order).get(order_id)
    ensure_can_read(order, actor)
    return order


def _page(query, filters: OrderFilters, sort_fields: dict):
    return query.order_by(filters.ordering(sort_fields)).offset(filters.offset).limit(filters.limit).all().items


def list_orders(actor, filters: OrderFilters | None = None) -> list[Order]:
    filters = filters or OrderFilters()
    criteria = filters.criteria()
    repo = current_domain.repository_for(Order)

    if actor.is_seller:
        rows = _page(
            current_domain.repository_for(SellerOrders)
            ._dao.query.filter(seller_id=actor.actor_id, **criteria),
            filters,
            _SELLER_SORT_FIELDS,
        )
        return [repo.get(row.order_id) for row in rows]

    query = repo._dao.query
    if actor.is_customer:
        query = query.filter(customer_id=actor.actor_id, **criteria)
    else:
        ensure_can_list_all(actor)
        if criteria:
            query = query.filter(**criteria)
    return _page(query, filters, _ORDER_SORT_FIELDS)
