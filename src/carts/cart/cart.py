"""Cart aggregate: a tenant/user's cart and the items it exclusively owns.

Items are never physically removed. Removing or clearing marks them
Deleted; adding the same product again restores the Deleted line instead
of creating a duplicate. ``total_amount`` and every item's ``subtotal``
are derived values, recomputed from the owned items on each mutation.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import NAMESPACE_URL, uuid5

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String

from carts.cart.events import (
    CartCleared,
    CartCreated,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from carts.domain import carts
from carts.settings import DEFAULT_CURRENCY, MAX_ITEM_QUANTITY
from carts.shared.money import line_total, money_sum

CART_NAMESPACE = uuid5(NAMESPACE_URL, "urn:stormgate:carts")


def cart_identity(tenant_id, user_id) -> str:
    """Deterministic cart id for a tenant/user pair.

    Two first adds racing for the same owner build the same id, so the
    second insert collides with the first instead of opening a second cart.
    """
    # Length prefix keeps ("a:b", "c") and ("a", "b:c") apart
    return str(uuid5(CART_NAMESPACE, f"{len(str(tenant_id))}:{tenant_id}:{user_id}"))


class ItemStatus(Enum):
    ACTIVE = "Active"
    DELETED = "Deleted"


class AddOutcome(Enum):
    """How an add was reconciled against the cart's existing lines."""

    CREATED = "Created"
    MERGED = "Merged"
    RESTORED = "Restored"


@carts.entity(part_of="Cart")
class CartItem:
    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.01)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)
    subtotal = Float()
    status = String(max_length=10, choices=ItemStatus, default=ItemStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def is_active(self) -> bool:
        return self.status == ItemStatus.ACTIVE.value

    def calculate_subtotal(self) -> Decimal | None:
        return line_total(self.unit_price, self.quantity)

    def recalculate_subtotal(self):
        """Refresh ``subtotal`` from the current price and quantity.

        Leaves ``subtotal`` untouched when either is missing.
        """
        subtotal = self.calculate_subtotal()
        if subtotal is not None:
            self.subtotal = float(subtotal)


@carts.aggregate
class Cart:
    tenant_id = String(required=True, max_length=255)
    user_id = String(required=True, max_length=255)
    items = HasMany(CartItem)
    currency = String(max_length=10, default=DEFAULT_CURRENCY)
    total_amount = Float(default=0.0)
    is_deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_must_appear_once_among_active_items(self):
        products = [item.product_id for item in self.items if item.is_active]
        if len(products) != len(set(products)):
            raise ValidationError({"items": ["A product can only appear once among active items"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, tenant_id, user_id, currency=None):
        now = datetime.now(UTC)
        cart = cls(
            id=cart_identity(tenant_id, user_id),
            tenant_id=tenant_id,
            user_id=user_id,
            currency=currency or DEFAULT_CURRENCY,
            total_amount=0.0,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(
            CartCreated(
                cart_id=str(cart.id),
                tenant_id=tenant_id,
                user_id=user_id,
                currency=cart.currency,
            )
        )
        return cart

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def active_items(self):
        return [item for item in self.items if item.is_active]

    def item_count(self) -> int:
        """Total units across active items."""
        return sum(item.quantity for item in self.active_items)

    def calculate_total(self) -> Decimal:
        """Sum of active item subtotals, exact to the cent."""
        return money_sum(
            subtotal for subtotal in (item.calculate_subtotal() for item in self.active_items) if subtotal is not None
        )

    def recalculate_total(self):
        self.total_amount = float(self.calculate_total())

    # -------------------------------------------------------------------
    # Lookup by natural key
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        """The line for ``product_id`` in any state, or None."""
        active = self.active_item_for(product_id)
        if active is not None:
            return active
        return next((i for i in self.items if i.product_id == str(product_id)), None)

    def active_item_for(self, product_id):
        return next((i for i in self.active_items if i.product_id == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item reconciliation
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, unit_price, quantity) -> AddOutcome:
        """Add ``quantity`` units of a product.

        An active line is merged (quantity incremented, price and name
        kept); a deleted line is restored with the request's values; with
        no line at all a new one is created.
        """
        existing = self.item_for(product_id)
        if existing is not None and existing.is_active and existing.quantity + quantity > MAX_ITEM_QUANTITY:
            raise ValidationError(
                {"quantity": [f"quantity cannot exceed {MAX_ITEM_QUANTITY}, cart already holds {existing.quantity}"]}
            )
        now = datetime.now(UTC)

        with atomic_change(self):
            if existing is None:
                item = CartItem(
                    product_id=str(product_id),
                    name=name,
                    unit_price=float(unit_price),
                    quantity=quantity,
                    status=ItemStatus.ACTIVE.value,
                    created_at=now,
                    updated_at=now,
                )
                item.recalculate_subtotal()
                self.add_items(item)
                outcome = AddOutcome.CREATED
            elif existing.is_active:
                existing.quantity += quantity
                existing.updated_at = now
                existing.recalculate_subtotal()
                item = existing
                outcome = AddOutcome.MERGED
            else:
                existing.status = ItemStatus.ACTIVE.value
                existing.quantity = quantity
                existing.unit_price = float(unit_price)
                existing.name = name
                existing.updated_at = now
                existing.recalculate_subtotal()
                item = existing
                outcome = AddOutcome.RESTORED

            self.recalculate_total()
            self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=item.product_id,
                outcome=outcome.value,
                quantity=quantity,
                new_quantity=item.quantity,
                unit_price=item.unit_price,
                total_amount=self.total_amount,
            )
        )
        return outcome

    def update_item_quantity(self, product_id, new_quantity):
        """Replace the quantity of an active item; returns the item, or None if there is none."""
        item = self.active_item_for(product_id)
        if item is None:
            return None

        previous_quantity = item.quantity
        now = datetime.now(UTC)
        with atomic_change(self):
            item.quantity = new_quantity
            item.updated_at = now
            item.recalculate_subtotal()
            self.recalculate_total()
            self.updated_at = now

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=item.product_id,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                total_amount=self.total_amount,
            )
        )
        return item

    def remove_item(self, product_id):
        """Soft-delete an active item; returns the item, or None if there is none."""
        item = self.active_item_for(product_id)
        if item is None:
            return None

        now = datetime.now(UTC)
        with atomic_change(self):
            item.status = ItemStatus.DELETED.value
            item.updated_at = now
            self.recalculate_total()
            self.updated_at = now

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=item.product_id,
                total_amount=self.total_amount,
            )
        )
        return item

    def clear(self) -> int:
        """Mark every item Deleted. Returns how many were active."""
        cleared = len(self.active_items)
        now = datetime.now(UTC)
        with atomic_change(self):
            for item in self.items:
                if item.is_active:
                    item.updated_at = now
                item.status = ItemStatus.DELETED.value
            self.recalculate_total()
            self.updated_at = now

        self.raise_(CartCleared(cart_id=str(self.id), items_cleared=cleared))
        return cleared
