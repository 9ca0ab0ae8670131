"""Shared BDD fixtures and step definitions for the Carts domain."""

from decimal import Decimal

import pytest
from carts.cart.cart import Cart, ItemStatus
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def error():
    """Container for a captured validation error."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('an empty cart for tenant "{tenant_id}" and user "{user_id}"'),
    target_fixture="cart",
)
def empty_cart(tenant_id, user_id):
    cart = Cart.create(tenant_id=tenant_id, user_id=user_id)
    cart._events.clear()
    return cart


@given(parsers.cfparse('product "{product_id}" named "{name}" was added at {price} with quantity {qty:d}'))
def product_was_added(cart, product_id, name, price, qty):
    cart.add_item(product_id, name, float(price), qty)
    cart._events.clear()


@given(parsers.cfparse('product "{product_id}" was removed'))
def product_was_removed(cart, product_id):
    cart.remove_item(product_id)
    cart._events.clear()


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('product "{product_id}" named "{name}" is added at {price} with quantity {qty:d}'))
def add_product(cart, product_id, name, price, qty, error):
    cart._events.clear()
    try:
        cart.add_item(product_id, name, float(price), qty)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('product "{product_id}" is removed'))
def remove_product(cart, product_id):
    cart.remove_item(product_id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse('the line for "{product_id}" has quantity {qty:d}'))
def line_quantity(cart, product_id, qty):
    assert cart.item_for(product_id).quantity == qty


@then(parsers.cfparse('the line for "{product_id}" is priced at {price}'))
def line_price(cart, product_id, price):
    assert Decimal(str(cart.item_for(product_id).unit_price)) == Decimal(price)


@then(parsers.cfparse('the line for "{product_id}" is named "{name}"'))
def line_name(cart, product_id, name):
    assert cart.item_for(product_id).name == name


@then(parsers.cfparse('the line for "{product_id}" is deleted'))
def line_deleted(cart, product_id):
    assert cart.item_for(product_id).status == ItemStatus.DELETED.value


@then(parsers.cfparse("the cart total is {total}"))
def cart_total(cart, total):
    assert cart.calculate_total() == Decimal(total)
    assert Decimal(str(cart.total_amount)) == Decimal(total)


@then(parsers.cfparse("the cart item count is {count:d}"))
def cart_item_count(cart, count):
    assert cart.item_count() == count
