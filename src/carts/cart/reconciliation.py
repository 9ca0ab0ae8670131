"""Cart reconciliation: the write operations on a tenant/user's cart.

Each command is handled inside a single unit of work. The cart is read (or
opened), reconciled in memory by the aggregate, and written back together
with its items, so a failed command leaves the stored cart untouched and a
caller never sees a total that disagrees with the items.
"""

from protean import handle
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from carts.cart.cart import Cart
from carts.cart.errors import ItemNotFoundError
from carts.cart.view import cart_view
from carts.domain import carts
from carts.settings import MAX_ITEM_QUANTITY
from carts.utils.logging import get_logger

logger = get_logger(__name__)


@carts.command(part_of="Cart")
class AddItem:
    tenant_id = String(required=True, max_length=255)
    user_id = String(required=True, max_length=255)
    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.01)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)


@carts.command(part_of="Cart")
class UpdateItemQuantity:
    tenant_id = String(required=True, max_length=255)
    user_id = String(required=True, max_length=255)
    product_id = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)


@carts.command(part_of="Cart")
class RemoveItem:
    tenant_id = String(required=True, max_length=255)
    user_id = String(required=True, max_length=255)
    product_id = String(required=True, max_length=255)


@carts.command(part_of="Cart")
class ClearCart:
    tenant_id = String(required=True, max_length=255)
    user_id = String(required=True, max_length=255)


@carts.command_handler(part_of=Cart)
class CartReconciliationHandler:
    @handle(AddItem)
    def add_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.tenant_id, command.user_id)
        outcome = cart.add_item(
            product_id=command.product_id,
            name=command.name,
            unit_price=command.price,
            quantity=command.quantity,
        )
        repo.add(cart)

        logger.info(
            "cart_item_reconciled",
            outcome=outcome.value,
            cart_id=str(cart.id),
            tenant_id=command.tenant_id,
            user_id=command.user_id,
            product_id=command.product_id,
        )
        return cart_view(cart)

    @handle(UpdateItemQuantity)
    def update_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for(command.tenant_id, command.user_id)
        if cart.update_item_quantity(command.product_id, command.quantity) is None:
            raise ItemNotFoundError(command.product_id)
        repo.add(cart)
        return cart_view(cart)

    @handle(RemoveItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for(command.tenant_id, command.user_id)
        if cart.remove_item(command.product_id) is None:
            raise ItemNotFoundError(command.product_id)
        repo.add(cart)

        logger.info(
            "cart_item_removed",
            cart_id=str(cart.id),
            tenant_id=command.tenant_id,
            user_id=command.user_id,
            product_id=command.product_id,
        )
        return cart_view(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for(command.tenant_id, command.user_id)
        cleared = cart.clear()
        repo.add(cart)

        logger.info(
            "cart_cleared",
            cart_id=str(cart.id),
            tenant_id=command.tenant_id,
            user_id=command.user_id,
            items_cleared=cleared,
        )
