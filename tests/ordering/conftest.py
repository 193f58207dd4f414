from decimal import Decimal

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    from protean import current_domain

    with ordering_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def catalog():
    """A fresh in-memory catalog database, installed as the active stock store."""
    from ordering.stock import reset_stock_store, set_stock_store
    from ordering.stock.sql_adapter import SqlStockStore

    store = SqlStockStore.from_uri("sqlite://")
    store.create_schema()
    set_stock_store(store)
    yield store
    reset_stock_store()
    store.engine.dispose()


@pytest.fixture()
def medicines(catalog):
    """Seed a small catalog spread over two sellers.

    | id              | price | stock | seller   | active |
    |-----------------|-------|-------|----------|--------|
    | med-paracetamol | 10.50 | 10    | seller-a | yes    |
    | med-ibuprofen   |  4.50 |  5    | seller-a | yes    |
    | med-cetirizine  |  7.25 |  3    | seller-b | yes    |
    | med-retired     |  2.00 | 50    | seller-b | no     |
    """
    catalog.add_medicine("med-paracetamol", Decimal("10.50"), 10, "seller-a", name="Paracetamol 500mg")
    catalog.add_medicine("med-ibuprofen", Decimal("4.50"), 5, "seller-a", name="Ibuprofen 200mg")
    catalog.add_medicine("med-cetirizine", Decimal("7.25"), 3, "seller-b", name="Cetirizine 10mg")
    catalog.add_medicine("med-retired", Decimal("2.00"), 50, "seller-b", name="Discontinued", is_active=False)
    return catalog
