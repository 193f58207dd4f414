"""Error taxonomy of the ordering engine.

Every error is a Protean exception so that callers (and Protean's FastAPI
integration) can treat them uniformly through their base classes:

    ValidationError       malformed or missing input
    InvalidStatus         requested status is not one of the known values
    ObjectNotFoundError   referenced order does not exist (``NotFound``)
    MedicineUnavailable   referenced medicine is missing or inactive
    Forbidden             actor lacks the capability for the operation
    InsufficientStock     a conditional stock decrement failed
    InvalidTransition     target status is not reachable from the current one

The engine errors below all carry ``messages``, a ``{field: [text, ...]}``
dict. Protean only sets it for ValidationError, so the others set it
themselves. A bare ObjectNotFoundError from a repository has no messages.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

NotFound = ObjectNotFoundError


class InvalidStatus(ValidationError):
    def __init__(self, value, allowed):
        self.value = value
        super().__init__({"status": [f"Invalid order status '{value}'. Must be one of: {', '.join(allowed)}"]})


class MedicineUnavailable(ObjectNotFoundError):
    def __init__(self, medicine_ids):
        self.medicine_ids = list(medicine_ids)
        messages = {
            "items": [f"Medicine {medicine_id} is not found or inactive" for medicine_id in self.medicine_ids]
        }
        super().__init__(messages)
        self.messages = messages


class Forbidden(InvalidOperationError):
    def __init__(self, reason):
        self.reason = reason
        messages = {"actor": [reason]}
        super().__init__(messages)
        self.messages = messages


class InsufficientStock(InvalidOperationError):
    def __init__(self, medicine_id, quantity):
        self.medicine_id = medicine_id
        self.quantity = quantity
        messages = {"items": [f"Insufficient stock for medicine {medicine_id} (requested {quantity})"]}
        super().__init__(messages)
        self.messages = messages


class InvalidTransition(InvalidOperationError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        messages = {"status": [f"Cannot transition from {current} to {target}"]}
        super().__init__(messages)
        self.messages = messages
