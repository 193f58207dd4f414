"""Money value object: exact monetary amounts held as integer minor units."""

from decimal import Decimal, InvalidOperation

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String

from ordering.domain import ordering

DEFAULT_CURRENCY = "USD"

_CENT = Decimal("0.01")


@ordering.value_object
class Money:
    """A non-negative amount in a single currency, stored as cents.

    Amounts never pass through binary floating point: they come in as
    ``Decimal`` (or decimal strings / ints), are scaled to integer cents
    exactly, and come back out as ``Decimal`` with two fractional digits.
    Values finer than a cent are rejected rather than rounded.
    """

    cents = Integer(required=True, min_value=0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)

    @invariant.post
    def currency_must_be_default(self):
        if self.currency != DEFAULT_CURRENCY:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    @classmethod
    def from_decimal(cls, value, currency=DEFAULT_CURRENCY):
        if isinstance(value, float | bool):
            raise ValidationError({"amount": [f"Amount must be a decimal, not {type(value).__name__}"]})

        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation:
            raise ValidationError({"amount": [f"Invalid amount: {value!r}"]}) from None

        if not amount.is_finite():
            raise ValidationError({"amount": [f"Invalid amount: {value!r}"]})
        if amount < 0:
            raise ValidationError({"amount": ["Amount cannot be negative"]})
        if amount != amount.quantize(_CENT):
            raise ValidationError({"amount": [f"Amount {amount} has more precision than one cent"]})

        return cls(cents=int(amount.scaleb(2)), currency=currency)

    @classmethod
    def zero(cls, currency=DEFAULT_CURRENCY):
        return cls(cents=0, currency=currency)

    @property
    def amount(self) -> Decimal:
        return Decimal(self.cents).scaleb(-2)

    def plus(self, other: "Money") -> "Money":
        if other.currency != self.currency:
            raise ValidationError({"currency": [f"Cannot add {other.currency} to {self.currency}"]})
        return Money(cents=self.cents + other.cents, currency=self.currency)

    def times(self, quantity: int) -> "Money":
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValidationError({"quantity": [f"Cannot multiply money by {quantity!r}"]})
        return Money(cents=self.cents * quantity, currency=self.currency)

    def __str__(self):
        return f"{self.amount} {self.currency}"
