"""Snapshot of a cart for callers outside the domain.

Only active items are listed; deleted lines stay internal to the aggregate.
"""

from carts.shared.money import to_money


def item_view(item) -> dict:
    return {
        "product_id": item.product_id,
        "name": item.name,
        "price": to_money(item.unit_price),
        "quantity": item.quantity,
        "subtotal": to_money(item.subtotal),
    }


def cart_view(cart) -> dict:
    return {
        "cart_id": str(cart.id),
        "tenant_id": cart.tenant_id,
        "user_id": cart.user_id,
        "items": [item_view(item) for item in cart.active_items],
        "item_count": cart.item_count(),
        "total_amount": to_money(cart.total_amount),
        "currency": cart.currency,
        "updated_at": cart.updated_at,
    }
