"""Stock store port (abstract interface).

Defines the contract the ordering engine needs from the store that owns
medicine stock and catalog data. The engine never reads-then-writes stock:
every mutation is a single atomic operation performed by the store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MedicineRecord:
    """Catalog view of a medicine, as resolved at order time."""

    medicine_id: str
    price: Decimal
    stock: int
    seller_id: str
    is_active: bool = True


class StockStore(ABC):
    """Abstract store of medicine stock."""

    @abstractmethod
    def resolve_medicines(self, medicine_ids: list[str]) -> list[MedicineRecord]:
        """Return records for the given ids that exist and are active, in one query."""
        ...

    @abstractmethod
    def compare_and_decrement(self, medicine_id: str, quantity: int) -> bool:
        """Decrement stock by ``quantity`` only if at least that much is available.

        Must be a single conditional write. Returns False when no row was
        affected (stock too low, medicine missing or inactive).
        """
        ...

    @abstractmethod
    def increment(self, medicine_id: str, quantity: int) -> bool:
        """Add ``quantity`` back to stock. Returns False if the medicine does not exist."""
        ...

    @abstractmethod
    def stock_of(self, medicine_id: str) -> int | None:
        """Current stock of a medicine, or None if it does not exist."""
        ...
