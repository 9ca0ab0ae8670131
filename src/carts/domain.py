"""Carts bounded context: per-tenant, per-user shopping carts.

Handles lazy cart creation, item reconciliation (merge, create, restore),
soft deletion of items and running totals.
"""

from protean.domain import Domain

from carts.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

carts = Domain(name="carts")
