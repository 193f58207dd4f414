"""Order assembly: from a raw cart to a priced, stock-backed set of lines.

1. Validate the cart, the customer and the shipping address.
2. Resolve every referenced medicine in one lookup; any missing or
   inactive medicine rejects the whole cart.
3. Snapshot each medicine's price and seller onto its line.
4. Total the lines exactly (Decimal arithmetic, no rounding).
5. Reserve stock line by line, all or nothing.

Persisting the order happens only after step 5 succeeds, in the placement
handler.
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from protean.exceptions import ValidationError

from ordering.errors import MedicineUnavailable
from ordering.shared.money import Money
from ordering.stock.ledger import StockLedger, StockLine
from ordering.stock.port import StockStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    medicine_id: str
    quantity: int


@dataclass(frozen=True)
class PricedLine:
    medicine_id: str
    seller_id: str
    quantity: int
    unit_price: Money

    @property
    def stock_line(self) -> StockLine:
        return StockLine(medicine_id=self.medicine_id, quantity=self.quantity)


@dataclass(frozen=True)
class PricedCart:
    customer_id: str
    shipping_address: str
    lines: tuple
    total_amount: Money

    @property
    def stock_lines(self) -> list[StockLine]:
        return [line.stock_line for line in self.lines]


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def parse_cart(items) -> list[CartLine]:
    """Validate raw cart entries (dicts or CartLines) and normalise them."""
    if not isinstance(items, list | tuple) or not items:
        raise ValidationError({"items": ["Order items must be a non-empty list"]})

    lines = []
    for idx, item in enumerate(items):
        if isinstance(item, CartLine):
            medicine_id, quantity = item.medicine_id, item.quantity
        elif isinstance(item, dict):
            medicine_id, quantity = item.get("medicine_id"), item.get("quantity")
        else:
            raise ValidationError({f"items[{idx}]": ["Each item must be an object"]})

        if not isinstance(medicine_id, str) or not medicine_id.strip():
            raise ValidationError({f"items[{idx}].medicine_id": ["medicine_id is required"]})
        if not _is_positive_int(quantity):
            raise ValidationError({f"items[{idx}].quantity": ["quantity must be a positive integer"]})

        lines.append(CartLine(medicine_id=medicine_id.strip(), quantity=quantity))
    return lines


class OrderAssembler:
    def __init__(self, store: StockStore, ledger: StockLedger | None = None):
        self._store = store
        self._ledger = ledger or StockLedger(store)

    def price(self, customer_id, shipping_address, items) -> PricedCart:
        if not customer_id or not str(customer_id).strip():
            raise ValidationError({"customer_id": ["customer_id is required"]})
        if not isinstance(shipping_address, str) or not shipping_address.strip():
            raise ValidationError({"shipping_address": ["shipping_address is required"]})

        cart = parse_cart(items)

        requested_ids = list(dict.fromkeys(line.medicine_id for line in cart))
        medicines = {record.medicine_id: record for record in self._store.resolve_medicines(requested_ids)}

        missing = [
            medicine_id
            for medicine_id in requested_ids
            if medicine_id not in medicines or not medicines[medicine_id].is_active
        ]
        if missing:
            logger.info("Cart references unavailable medicines", medicine_ids=missing)
            raise MedicineUnavailable(missing)

        lines = []
        total = Decimal("0")
        for line in cart:
            record = medicines[line.medicine_id]
            lines.append(
                PricedLine(
                    medicine_id=line.medicine_id,
                    seller_id=str(record.seller_id),
                    quantity=line.quantity,
                    unit_price=Money.from_decimal(record.price),
                )
            )
            total += record.price * line.quantity

        return PricedCart(
            customer_id=str(customer_id).strip(),
            shipping_address=shipping_address.strip(),
            lines=tuple(lines),
            total_amount=Money.from_decimal(total),
        )

    def reserve(self, cart: PricedCart) -> None:
        """Reserve stock for every line in cart order, releasing all on the first failure."""
        self._ledger.reserve_all(cart.stock_lines)

    def assemble(self, customer_id, shipping_address, items) -> PricedCart:
        cart = self.price(customer_id, shipping_address, items)
        self.reserve(cart)
        return cart
