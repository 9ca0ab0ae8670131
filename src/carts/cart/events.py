"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from carts.domain import carts


@carts.event(part_of="Cart")
class CartCreated:
    """A cart was opened for a tenant/user pair on its first add."""

    __version__ = 1

    cart_id = Identifier(required=True)
    tenant_id = String(required=True)
    user_id = String(required=True)
    currency = String(required=True)


@carts.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart.

    ``outcome`` records how the add was reconciled: a new line (Created),
    an increment of an active line (Merged), or the revival of a
    soft-deleted line (Restored).
    """

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = String(required=True)
    outcome = String(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    unit_price = Float(required=True)
    total_amount = Float(required=True)


@carts.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = String(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    total_amount = Float(required=True)


@carts.event(part_of="Cart")
class CartItemRemoved:
    """An item was soft-deleted; it stays attached to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = String(required=True)
    total_amount = Float(required=True)


@carts.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    items_cleared = Integer(required=True)
