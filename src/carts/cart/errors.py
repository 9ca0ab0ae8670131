"""Lookup failures raised by the cart store and the reconciliation handler."""

from protean.exceptions import ObjectNotFoundError


class CartNotFoundError(ObjectNotFoundError):
    """No non-deleted cart exists for a (tenant, user) pair."""

    def __init__(self, tenant_id, user_id):
        self.tenant_id = tenant_id
        self.user_id = user_id
        self.messages = {"_entity": [f"Cart not found for tenant: {tenant_id} and user: {user_id}"]}
        super().__init__(self.messages)


class ItemNotFoundError(ObjectNotFoundError):
    """No active item exists for a product in the cart."""

    def __init__(self, product_id):
        self.product_id = product_id
        self.messages = {"_entity": [f"Item not found in cart with productId: {product_id}"]}
        super().__init__(self.messages)
