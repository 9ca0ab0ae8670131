"""Per-user state tracking for Locust load test scenarios.

Each Locust user owns one cart, scoped by its own tenant/user pair, so
journeys never contend on another user's cart.
"""

from dataclasses import dataclass, field


@dataclass
class CartState:
    """Tracks what a simulated shopper expects to find in their cart."""

    tenant_id: str
    user_id: str
    product_ids: list[str] = field(default_factory=list)
    removed_product_ids: list[str] = field(default_factory=list)
    item_count: int = 0

    @property
    def owner_params(self) -> dict:
        return {"tenantId": self.tenant_id, "userId": self.user_id}
