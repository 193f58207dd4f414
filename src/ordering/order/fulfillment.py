"""Order status updates by sellers and admins: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.access import ensure_can_change_status
from ordering.order.order import Order
from ordering.order.status import parse_status, strict_progression_enabled
from ordering.shared.actor import Actor, Role

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)  # validated by the handler, not here
    actor_id = String(required=True, max_length=255)
    actor_role = String(required=True, choices=Role)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        # An unknown status is rejected before the order is even looked up
        target = parse_status(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        actor = Actor(actor_id=command.actor_id, role=command.actor_role)
        ensure_can_change_status(order, actor)

        previous = order.status
        order.change_status(target, actor, strict=strict_progression_enabled())
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=target.value,
            changed_by=actor.actor_id,
            role=actor.role,
        )
        return str(order.id)
