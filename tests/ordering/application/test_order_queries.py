"""Application tests for reading and listing orders per actor."""

import pytest
from ordering.errors import Forbidden, InvalidStatus, NotFound
from ordering.order import service
from ordering.order.queries import OrderFilters
from ordering.shared.actor import Actor
from protean.exceptions import ValidationError


def _place(customer_id, *lines):
    return service.create_order(
        customer_id,
        "1 Main St",
        [{"medicine_id": medicine_id, "quantity": quantity} for medicine_id, quantity in lines],
    )


@pytest.fixture()
def orders(medicines):
    """Three customers' orders across both sellers.

    - a1: cust-001, seller-a only, 10.50
    - a2: cust-001, seller-b only, 7.25
    - mixed: cust-002, seller-a and seller-b, 4.50 + 7.25 = 11.75
    """
    return {
        "a1": _place("cust-001", ("med-paracetamol", 1)),
        "a2": _place("cust-001", ("med-cetirizine", 1)),
        "mixed": _place("cust-002", ("med-ibuprofen", 1), ("med-cetirizine", 1)),
    }


def _ids(result):
    return {order.id for order in result}


class _UnscopedActor:
    actor_id = "anonymous"
    role = "GUEST"
    is_customer = False
    is_seller = False
    is_admin = False


class TestGetOrder:
    def test_owner_gets_order(self, orders):
        order = service.get_order(orders["a1"].id, Actor.customer("cust-001"))
        assert order.id == orders["a1"].id
        assert len(order.items) == 1

    def test_other_customer_is_forbidden(self, orders):
        with pytest.raises(Forbidden):
            service.get_order(orders["a1"].id, Actor.customer("cust-002"))

    def test_seller_with_an_item_gets_order(self, orders):
        assert service.get_order(orders["mixed"].id, Actor.seller("seller-b")).id == orders["mixed"].id

    def test_unrelated_seller_is_forbidden(self, orders):
        with pytest.raises(Forbidden):
            service.get_order(orders["a2"].id, Actor.seller("seller-a"))

    def test_admin_gets_any_order(self, orders):
        assert service.get_order(orders["a2"].id, Actor.admin("admin-1")).id == orders["a2"].id

    def test_missing_order_is_not_found_for_everyone(self, orders):
        with pytest.raises(NotFound):
            service.get_order("does-not-exist", Actor.customer("cust-001"))


class TestListOrders:
    def test_customer_sees_own_orders(self, orders):
        assert _ids(service.list_orders(Actor.customer("cust-001"))) == {orders["a1"].id, orders["a2"].id}

    def test_seller_sees_orders_with_their_items(self, orders):
        assert _ids(service.list_orders(Actor.seller("seller-a"))) == {orders["a1"].id, orders["mixed"].id}
        assert _ids(service.list_orders(Actor.seller("seller-b"))) == {orders["a2"].id, orders["mixed"].id}

    def test_seller_without_orders_sees_none(self, orders):
        assert service.list_orders(Actor.seller("seller-z")) == []

    def test_admin_sees_everything(self, orders):
        assert _ids(service.list_orders(Actor.admin("admin-1"))) == {o.id for o in orders.values()}

    def test_status_filter(self, orders):
        service.update_order_status(orders["a1"].id, "PROCESSING", Actor.admin("admin-1"))

        processing = service.list_orders(Actor.customer("cust-001"), OrderFilters(status="PROCESSING"))
        assert _ids(processing) == {orders["a1"].id}

        seller_placed = service.list_orders(Actor.seller("seller-a"), OrderFilters(status="PLACED"))
        assert _ids(seller_placed) == {orders["mixed"].id}

    def test_invalid_status_filter(self, orders):
        with pytest.raises(InvalidStatus):
            service.list_orders(Actor.admin("admin-1"), OrderFilters(status="LOST"))

    def test_sort_by_total(self, orders):
        ascending = service.list_orders(Actor.admin("admin-1"), OrderFilters(sort_by="total_amount", sort_order="asc"))
        assert [o.id for o in ascending] == [orders["a2"].id, orders["a1"].id, orders["mixed"].id]

    def test_seller_sort_by_total_uses_their_share(self, orders):
        # seller-a holds 10.50 of a1 but only 4.50 of the 11.75 mixed order
        descending = service.list_orders(Actor.seller("seller-a"), OrderFilters(sort_by="total_amount"))
        assert [o.id for o in descending] == [orders["a1"].id, orders["mixed"].id]

    def test_actor_without_a_known_role_cannot_list_everything(self, orders):
        with pytest.raises(Forbidden):
            service.list_orders(_UnscopedActor())

    def test_pagination(self, orders):
        admin = Actor.admin("admin-1")
        first = service.list_orders(admin, OrderFilters(page=1, limit=2, sort_by="total_amount", sort_order="asc"))
        second = service.list_orders(admin, OrderFilters(page=2, limit=2, sort_by="total_amount", sort_order="asc"))
        assert [o.id for o in first] == [orders["a2"].id, orders["a1"].id]
        assert [o.id for o in second] == [orders["mixed"].id]


class TestOrderFilters:
    def test_defaults(self):
        filters = OrderFilters()
        assert filters.page == 1
        assert filters.limit == 10
        assert filters.offset == 0
        assert filters.ordering({"created_at": "created_at"}) == "-created_at"

    def test_unknown_sort_key_falls_back_to_creation_time(self):
        filters = OrderFilters(sort_by="colour", sort_order="asc")
        assert filters.ordering({"created_at": "created_at", "status": "status"}) == "created_at"

    def test_offset(self):
        assert OrderFilters(page=3, limit=20).offset == 40

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_must_be_positive(self, page):
        with pytest.raises(ValidationError):
            OrderFilters(page=page)

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_is_bounded(self, limit):
        with pytest.raises(ValidationError):
            OrderFilters(limit=limit)
