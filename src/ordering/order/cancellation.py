"""Order cancellation by its customer: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.access import ensure_can_cancel
from ordering.order.order import Order
from ordering.shared.actor import Actor, Role

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = String(required=True, max_length=255)
    actor_role = String(default=Role.CUSTOMER.value, choices=Role)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        actor = Actor(actor_id=command.actor_id, role=command.actor_role)
        ensure_can_cancel(order, actor)

        # Stock goes back once the cancellation is committed (see stock_release)
        order.cancel(actor)
        repo.add(order)

        logger.info("Order cancelled", order_id=str(order.id), cancelled_by=actor.actor_id)
        return str(order.id)
