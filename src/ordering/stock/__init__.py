"""Stock store factory.

Provides get_stock_store() / set_stock_store() to swap implementations:
- SqlStockStore built from ``catalog_database_uri`` by default
- any other StockStore (e.g. a store bound to a test database) via set_stock_store()
"""

from ordering.stock.ledger import StockLedger
from ordering.stock.port import StockStore
from ordering.stock.sql_adapter import SqlStockStore
from ordering.utils.settings import custom_setting

_current_store: StockStore | None = None


def get_stock_store() -> StockStore:
    """Return the current stock store, building the configured SQL store on first use."""
    global _current_store
    if _current_store is None:
        _current_store = SqlStockStore.from_uri(custom_setting("catalog_database_uri", "sqlite://"))
    return _current_store


def set_stock_store(store: StockStore) -> None:
    """Override the active stock store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_stock_store() -> None:
    """Reset to the configured store."""
    global _current_store
    _current_store = None


def get_ledger() -> StockLedger:
    return StockLedger(get_stock_store())
