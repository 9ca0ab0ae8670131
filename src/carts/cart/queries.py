"""Read side of the cart: no mutation, no unit of work."""

from protean.utils.globals import current_domain

from carts.cart.cart import Cart
from carts.cart.view import cart_view


def get_cart(tenant_id, user_id) -> dict:
    """Current view of the tenant/user's cart. Raises CartNotFoundError if there is none."""
    cart = current_domain.repository_for(Cart).get_for(tenant_id, user_id)
    return cart_view(cart)
