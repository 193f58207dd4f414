"""The authenticated caller of an ordering operation."""

from enum import Enum

from protean.fields import String

from ordering.domain import ordering


class Role(Enum):
    CUSTOMER = "CUSTOMER"
    SELLER = "SELLER"
    ADMIN = "ADMIN"


@ordering.value_object
class Actor:
    """Who is acting, as vouched for by the upstream auth boundary.

    The engine trusts this value as-is; it is passed explicitly into every
    operation instead of being read from ambient request state.
    """

    actor_id = String(required=True, max_length=255)
    role = String(required=True, choices=Role)

    @classmethod
    def customer(cls, actor_id):
        return cls(actor_id=str(actor_id), role=Role.CUSTOMER.value)

    @classmethod
    def seller(cls, actor_id):
        return cls(actor_id=str(actor_id), role=Role.SELLER.value)

    @classmethod
    def admin(cls, actor_id):
        return cls(actor_id=str(actor_id), role=Role.ADMIN.value)

    @property
    def is_customer(self) -> bool:
        return self.role == Role.CUSTOMER.value

    @property
    def is_seller(self) -> bool:
        return self.role == Role.SELLER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
