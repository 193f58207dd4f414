"""Ordering bounded context: order placement and stock reservation.

Turns a customer's cart of medicines into a durable order, reserves stock
against the shared catalog store without overselling, and moves orders
through their status lifecycle under multi-seller authorization rules.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="medimart")

# Domain Composition Root
ordering = Domain(name="ordering")
