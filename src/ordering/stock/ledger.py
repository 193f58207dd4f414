"""Stock ledger: race-safe reservation and release of medicine stock.

Each reservation is one conditional decrement committed by the store on its
own. Reserving a whole cart is therefore not a store transaction: when a
later line fails, the lines already reserved in the same attempt are given
back with compensating releases before the failure is surfaced.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError

from ordering.errors import InsufficientStock
from ordering.stock.port import StockStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLine:
    medicine_id: str
    quantity: int


def _check_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError({"quantity": [f"Quantity must be a positive integer, got {quantity!r}"]})


class StockLedger:
    def __init__(self, store: StockStore):
        self._store = store

    def reserve(self, medicine_id: str, quantity: int) -> bool:
        """Take ``quantity`` units out of stock if available. Returns success."""
        _check_quantity(quantity)
        return self._store.compare_and_decrement(str(medicine_id), quantity)

    def release(self, medicine_id: str, quantity: int) -> bool:
        """Put ``quantity`` units back. Returns False only if the medicine is gone."""
        _check_quantity(quantity)
        released = self._store.increment(str(medicine_id), quantity)
        if not released:
            logger.error(
                "Could not release stock: medicine does not exist",
                medicine_id=str(medicine_id),
                quantity=quantity,
            )
        return released

    def reserve_all(self, lines: list[StockLine]) -> None:
        """Reserve every line in order, all or nothing.

        Raises InsufficientStock naming the first line that could not be
        reserved, after releasing every line reserved before it.
        """
        reserved: list[StockLine] = []
        try:
            for line in lines:
                if not self.reserve(line.medicine_id, line.quantity):
                    logger.info(
                        "Stock reservation failed",
                        medicine_id=line.medicine_id,
                        quantity=line.quantity,
                        compensating=len(reserved),
                    )
                    raise InsufficientStock(line.medicine_id, line.quantity)
                reserved.append(line)
        except Exception:
            self.release_all(reserved)
            raise

    def release_all(self, lines: list[StockLine]) -> None:
        """Release every line; a missing medicine does not stop the others."""
        for line in lines:
            self.release(line.medicine_id, line.quantity)
