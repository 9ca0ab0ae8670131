"""Cart store: the Cart aggregate looked up by its (tenant, user) scoping key."""

from carts.cart.cart import Cart
from carts.cart.errors import CartNotFoundError
from carts.domain import carts
from carts.utils.logging import get_logger

logger = get_logger(__name__)


@carts.repository(part_of=Cart)
class CartRepository:
    """Repository for the Cart aggregate.

    Items travel with their cart, so the item store is this repository too:
    persisting a cart persists every line it owns, deleted ones included.
    """

    def find_for(self, tenant_id, user_id) -> Cart | None:
        """The non-deleted cart for a tenant/user pair, or None."""
        return (
            self._dao.query.filter(
                tenant_id=str(tenant_id),
                user_id=str(user_id),
                is_deleted=False,
            )
            .all()
            .first
        )

    def get_for(self, tenant_id, user_id) -> Cart:
        cart = self.find_for(tenant_id, user_id)
        if cart is None:
            raise CartNotFoundError(tenant_id, user_id)
        return cart

    def get_or_create(self, tenant_id, user_id) -> Cart:
        """Return the tenant/user's cart, opening and persisting an empty one if absent.

        Must run inside the caller's unit of work so that the lookup and
        the insert commit (or fail) together.
        """
        cart = self.find_for(tenant_id, user_id)
        if cart is None:
            cart = Cart.create(tenant_id=tenant_id, user_id=user_id)
            self.add(cart)
            logger.info("cart_created", cart_id=str(cart.id), tenant_id=tenant_id, user_id=user_id)
        return cart
